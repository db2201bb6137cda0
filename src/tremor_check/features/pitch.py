"""Оценка основного тона (F0) автокорреляционным методом."""

from typing import Optional

import numpy as np
import scipy.signal

from tremor_check.constants import (
    AUTOCORR_THRESHOLD,
    FRAME_DURATION_S,
    PITCH_FMAX,
    PITCH_FMIN,
)
from tremor_check.features.framing import iter_frames
from tremor_check.log import setup_logger

log = setup_logger('pitch')


def normalize_frame(frame: np.ndarray) -> np.ndarray:
    """
    Нормирует фрейм так, чтобы максимум модуля был равен 1.

    Тишина (все нули) возвращается без изменений.
    """
    frame = np.asarray(frame, dtype=np.float64)
    peak = np.max(np.abs(frame)) if frame.size else 0.0
    if peak > 0:
        return frame / peak
    return frame.copy()


def autocorrelation(frame: np.ndarray) -> np.ndarray:
    """
    Автокорреляция фрейма для неотрицательных лагов 0..n-1.

    Считается через полную свёртку фрейма с собой
    (взаимная корреляция в режиме 'full').
    """
    frame = np.asarray(frame, dtype=np.float64)
    n = len(frame)
    if n == 0:
        return np.zeros(0)
    full = scipy.signal.correlate(frame, frame, mode='full')
    return full[n - 1:]


def estimate_pitch(
    frame: np.ndarray,
    sample_rate: float,
    fmin: float = PITCH_FMIN,
    fmax: float = PITCH_FMAX,
    threshold: float = AUTOCORR_THRESHOLD,
) -> Optional[float]:
    """
    Оценивает F0 одного фрейма по пику автокорреляции.

    Пик-кандидат — лаг, где автокорреляция превышает threshold * R(0)
    и обоих соседей. Из кандидатов выбирается глобальный максимум,
    при равенстве — первый встреченный.

    Args:
        frame: Фрейм сигнала
        sample_rate: Частота дискретизации
        fmin: Нижняя граница F0 в Гц
        fmax: Верхняя граница F0 в Гц
        threshold: Доля R(0), которую должен превысить пик

    Returns:
        Частота в Гц или None, если подходящего пика нет
    """
    n = len(frame)
    normalized = normalize_frame(frame)
    if n < 3 or not np.any(normalized):
        return None

    # Лаг n (правый сосед последнего лага) у автокорреляции нулевой
    acf = np.append(autocorrelation(normalized), 0.0)

    min_lag = max(int(sample_rate / fmax), 1)
    max_lag = min(int(sample_rate / fmin), n - 1)
    if min_lag > max_lag:
        return None

    lags = np.arange(min_lag, max_lag + 1)
    values = acf[lags]
    is_peak = (
        (values > threshold * acf[0])
        & (values > acf[lags - 1])
        & (values > acf[lags + 1])
    )
    if not np.any(is_peak):
        return None

    candidates = lags[is_peak]
    # argmax возвращает первый максимум — строгий выбор лидера
    best_lag = int(candidates[np.argmax(acf[candidates])])

    frequency = sample_rate / best_lag
    if fmin <= frequency <= fmax:
        return float(frequency)
    return None


def track_pitch(
    y: np.ndarray,
    sample_rate: float,
    fmin: float = PITCH_FMIN,
    fmax: float = PITCH_FMAX,
    threshold: float = AUTOCORR_THRESHOLD,
    frame_duration: float = FRAME_DURATION_S,
) -> np.ndarray:
    """
    Строит трек основного тона по всем фреймам сигнала.

    Фреймы без подходящего пика пропускаются, поэтому трек
    не обязан совпадать с фреймами один к одному.

    Returns:
        Массив оценок F0 в Гц
    """
    pitches = []
    n_frames = 0
    for frame in iter_frames(y, sample_rate, frame_duration):
        n_frames += 1
        pitch = estimate_pitch(frame, sample_rate, fmin, fmax, threshold)
        if pitch is not None:
            pitches.append(pitch)

    log.debug('Трек F0: %d из %d фреймов вокализованы', len(pitches), n_frames)
    return np.array(pitches, dtype=np.float64)


def f0_statistics(f0: np.ndarray) -> tuple[float, float, float]:
    """Среднее, максимум и минимум F0 (нули для пустого трека)."""
    f0 = np.asarray(f0, dtype=np.float64)
    if f0.size == 0:
        return 0.0, 0.0, 0.0
    return float(np.mean(f0)), float(np.max(f0)), float(np.min(f0))
