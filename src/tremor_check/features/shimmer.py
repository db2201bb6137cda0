"""Шиммер — микровариации амплитуды по ряду пиковых значений."""

from typing import Optional

import numpy as np

from tremor_check.constants import PEAK_WINDOWS_PER_SECOND
from tremor_check.log import setup_logger

log = setup_logger('shimmer')

# Минимальная длина ряда пиков для каждой метрики
MIN_VALUES: dict[str, int] = {
    'shimmer_percent': 2,
    'shimmer_db': 2,
    'shimmer_pairwise': 2,
    'apq3': 3,
    'apq5': 5,
    'dda': 3,
}


def amplitude_peaks(
    y: np.ndarray,
    sample_rate: float,
    windows_per_second: int = PEAK_WINDOWS_PER_SECOND,
) -> np.ndarray:
    """
    Максимум модуля амплитуды в каждом неперекрывающемся окне (10 мс).

    Последнее неполное окно учитывается, если оно не пустое.

    Args:
        y: Аудиосигнал
        sample_rate: Частота дискретизации
        windows_per_second: Количество окон на секунду сигнала

    Returns:
        Ряд пиковых амплитуд
    """
    magnitudes = np.abs(np.asarray(y, dtype=np.float64))
    window = max(int(sample_rate // windows_per_second), 1)

    n_full = len(magnitudes) // window
    peaks = magnitudes[:n_full * window].reshape(n_full, window).max(axis=1)

    tail = magnitudes[n_full * window:]
    if tail.size:
        peaks = np.append(peaks, tail.max())
    return peaks


def shimmer_percent(peaks: np.ndarray) -> float:
    """Локальный шиммер (%): средняя разность соседних пиков к среднему пику."""
    peaks = np.asarray(peaks, dtype=np.float64)
    if len(peaks) < MIN_VALUES['shimmer_percent']:
        return 0.0
    mean_peak = np.mean(peaks)
    if mean_peak == 0:
        return 0.0
    return float(np.mean(np.abs(np.diff(peaks))) / mean_peak * 100)


def shimmer_pairwise(peaks: np.ndarray) -> float:
    """
    Альтернативный шиммер: средняя относительная разность пары
    к среднему этой пары. Пары с нулевым средним пропускаются.
    """
    peaks = np.asarray(peaks, dtype=np.float64)
    if len(peaks) < MIN_VALUES['shimmer_pairwise']:
        return 0.0
    diffs = np.abs(np.diff(peaks))
    averages = (peaks[1:] + peaks[:-1]) / 2
    valid = averages != 0
    if not np.any(valid):
        return 0.0
    return float(np.mean(diffs[valid] / averages[valid]))


def shimmer_db(peaks: np.ndarray) -> float:
    """Шиммер в дБ: среднее |20*log10(p[i] / p[i-1])| по ненулевым парам."""
    peaks = np.asarray(peaks, dtype=np.float64)
    if len(peaks) < MIN_VALUES['shimmer_db']:
        return 0.0
    current, previous = peaks[1:], peaks[:-1]
    valid = (current > 0) & (previous > 0)
    if not np.any(valid):
        return 0.0
    return float(np.mean(np.abs(20 * np.log10(current[valid] / previous[valid]))))


def apq3(peaks: np.ndarray) -> float:
    """APQ3: среднее скользящего трёхточечного среднего амплитуды."""
    peaks = np.asarray(peaks, dtype=np.float64)
    if len(peaks) < MIN_VALUES['apq3']:
        return 0.0
    window_means = np.convolve(peaks, np.ones(3) / 3, mode='valid')
    return float(np.mean(np.abs(window_means)))


def apq5(peaks: np.ndarray) -> float:
    """APQ5: среднее |p[i] - p[i-4]| / 5."""
    peaks = np.asarray(peaks, dtype=np.float64)
    if len(peaks) < MIN_VALUES['apq5']:
        return 0.0
    return float(np.mean(np.abs(peaks[4:] - peaks[:-4]) / 5))


def dda(peaks: np.ndarray) -> float:
    """DDA: среднее модуля вторых разностей амплитуды."""
    peaks = np.asarray(peaks, dtype=np.float64)
    if len(peaks) < MIN_VALUES['dda']:
        return 0.0
    return float(np.mean(np.abs(np.diff(peaks, n=2))))


def compute_shimmer(peaks: np.ndarray) -> dict[str, Optional[float]]:
    """
    Вычисляет всё семейство шиммера.

    Args:
        peaks: Ряд пиковых амплитуд

    Returns:
        Словарь метрик; None — недостаточно данных или тишина
    """
    peaks = np.asarray(peaks, dtype=np.float64)
    calculators = {
        'shimmer_percent': shimmer_percent,
        'shimmer_db': shimmer_db,
        'shimmer_pairwise': shimmer_pairwise,
        'apq3': apq3,
        'apq5': apq5,
        'dda': dda,
    }

    # Нулевые пики не дают отношений амплитуд
    silent = not np.any(peaks > 0)
    ratio_based = {'shimmer_percent', 'shimmer_db', 'shimmer_pairwise'}

    features: dict[str, Optional[float]] = {}
    for name, calculate in calculators.items():
        if len(peaks) < MIN_VALUES[name]:
            log.debug('Недостаточно пиков амплитуды для %s: %d', name, len(peaks))
            features[name] = None
        elif silent and name in ratio_based:
            log.debug('Сигнал без амплитуды, %s не определён', name)
            features[name] = None
        else:
            features[name] = calculate(peaks)
    return features
