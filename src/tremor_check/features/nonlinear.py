"""
Нелинейная динамика сигнала: DFA, RPDE и корреляционная размерность D2.

Все меры квадратичны по длине сигнала, поэтому сигнал
предварительно прореживается до max_points отсчётов.
"""

from typing import Optional

import numpy as np
from scipy.spatial.distance import pdist, squareform

from tremor_check.constants import (
    D2_EPSILON_RATIO,
    DFA_MIN_WINDOW,
    DFA_WINDOW_COUNT,
    EMBEDDING_DELAY,
    EMBEDDING_DIMENSION,
    NONLINEAR_MAX_POINTS,
    RPDE_RADIUS,
)
from tremor_check.log import setup_logger

log = setup_logger('nonlinear')

MIN_EMBEDDING_POINTS = 8


def limit_points(y: np.ndarray, max_points: int = NONLINEAR_MAX_POINTS) -> np.ndarray:
    """Прореживает сигнал с целым шагом до не более чем max_points отсчётов."""
    y = np.asarray(y, dtype=np.float64)
    if max_points < 1 or len(y) <= max_points:
        return y
    step = int(np.ceil(len(y) / max_points))
    return y[::step]


def delay_embedding(
    y: np.ndarray,
    dimension: int = EMBEDDING_DIMENSION,
    delay: int = EMBEDDING_DELAY,
) -> np.ndarray:
    """
    Реконструкция фазового пространства методом задержек.

    Returns:
        Массив векторов формы (n_vectors, dimension)
    """
    y = np.asarray(y, dtype=np.float64)
    n_vectors = len(y) - (dimension - 1) * delay
    if n_vectors <= 0:
        return np.empty((0, dimension))
    return np.stack(
        [y[j * delay:j * delay + n_vectors] for j in range(dimension)],
        axis=1,
    )


def dfa(
    y: np.ndarray,
    min_window: int = DFA_MIN_WINDOW,
    n_windows: int = DFA_WINDOW_COUNT,
) -> Optional[float]:
    """
    Detrended Fluctuation Analysis.

    Сигнал без среднего интегрируется, делится на окна логарифмически
    растущего размера в [min_window, n/4), в каждом окне вычитается
    линейный тренд. Наклон log F(окно) от log(окно) — показатель DFA.

    Args:
        y: Аудиосигнал
        min_window: Минимальный размер окна
        n_windows: Количество размеров окна

    Returns:
        Наклон DFA или None, если сигнал слишком короткий
    """
    y = np.asarray(y, dtype=np.float64)
    n = len(y)
    max_window = n // 4
    if max_window <= min_window:
        return None

    integrated = np.cumsum(y - np.mean(y))
    sizes = np.exp(
        np.linspace(np.log(min_window), np.log(max_window), n_windows, endpoint=False)
    ).astype(int)

    log_sizes = []
    log_fluctuations = []
    for size in sizes:
        n_segments = len(range(0, n - size, size))
        segments = integrated[:n_segments * size].reshape(n_segments, size)

        t = np.arange(size)
        slope, intercept = np.polyfit(t, segments.T, 1)
        trend = np.outer(slope, t) + intercept[:, None]
        rms = np.sqrt(np.mean((segments - trend) ** 2, axis=1))

        fluctuation = np.mean(rms)
        if fluctuation > 0:
            log_sizes.append(np.log(size))
            log_fluctuations.append(np.log(fluctuation))

    if len(set(log_sizes)) < 2:
        return None

    slope, _ = np.polyfit(log_sizes, log_fluctuations, 1)
    return float(slope)


def rpde(
    y: np.ndarray,
    dimension: int = EMBEDDING_DIMENSION,
    radius: float = RPDE_RADIUS,
) -> Optional[float]:
    """
    Энтропия по плотности рекуррентности.

    Для каждого вектора вложения считается доля векторов
    в пределах radius (включая сам вектор); результат —
    минус логарифм средней доли.

    Returns:
        Значение RPDE или None, если векторов слишком мало
    """
    embedded = delay_embedding(y, dimension, delay=1)
    if len(embedded) < MIN_EMBEDDING_POINTS:
        return None

    distances = squareform(pdist(embedded))
    similarities = np.mean(distances < radius, axis=1)
    return float(-np.log(np.mean(similarities)))


def correlation_dimension(
    y: np.ndarray,
    dimension: int = EMBEDDING_DIMENSION,
    delay: int = EMBEDDING_DELAY,
    epsilon_ratio: float = D2_EPSILON_RATIO,
) -> Optional[float]:
    """
    Оценка корреляционной размерности D2 как ln C(eps) / ln eps.

    eps берётся как доля максимального попарного расстояния.

    Returns:
        Оценка D2 или None, если оценка вырождена
    """
    embedded = delay_embedding(y, dimension, delay)
    if len(embedded) < MIN_EMBEDDING_POINTS:
        return None

    distances = pdist(embedded)
    epsilon = epsilon_ratio * np.max(distances)
    if epsilon <= 0 or epsilon == 1:
        return None

    correlation = np.mean(distances < epsilon)
    if correlation == 0:
        return None
    return float(np.log(correlation) / np.log(epsilon))


def compute_nonlinear(
    y: np.ndarray,
    max_points: int = NONLINEAR_MAX_POINTS,
) -> dict[str, Optional[float]]:
    """
    Вычисляет нелинейные меры по прореженному сигналу.

    Returns:
        Словарь {'dfa', 'rpde', 'd2'}; None — мера не определена
    """
    reduced = limit_points(y, max_points)
    log.debug('Нелинейный анализ по %d отсчётам из %d', len(reduced), len(y))
    return {
        'dfa': dfa(reduced),
        'rpde': rpde(reduced),
        'd2': correlation_dimension(reduced),
    }
