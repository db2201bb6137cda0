"""Джиттер — микровариации основного тона по очищенному треку F0."""

from typing import Optional

import numpy as np

from tremor_check.log import setup_logger

log = setup_logger('jitter')

# Минимальная длина трека для каждой метрики
MIN_VALUES: dict[str, int] = {
    'jitter_percent': 2,
    'jitter_abs': 2,
    'rap': 3,
    'ppq': 5,
    'ddp': 3,
}


def jitter_percent(f0: np.ndarray) -> float:
    """
    Локальный джиттер (%): средняя разность соседних периодов,
    отнесённая к среднему периоду.
    """
    f0 = np.asarray(f0, dtype=np.float64)
    if len(f0) < MIN_VALUES['jitter_percent']:
        return 0.0
    periods = 1.0 / f0
    return float(np.mean(np.abs(np.diff(periods))) / np.mean(periods) * 100)


def jitter_abs(f0: np.ndarray) -> float:
    """Абсолютный джиттер: средняя разность соседних частот, Гц."""
    f0 = np.asarray(f0, dtype=np.float64)
    if len(f0) < MIN_VALUES['jitter_abs']:
        return 0.0
    return float(np.mean(np.abs(np.diff(f0))))


def rap(f0: np.ndarray) -> float:
    """Relative Average Perturbation: среднее |f0[i] - f0[i-2]| / 2."""
    f0 = np.asarray(f0, dtype=np.float64)
    if len(f0) < MIN_VALUES['rap']:
        return 0.0
    return float(np.mean(np.abs(f0[2:] - f0[:-2]) / 2))


def ppq(f0: np.ndarray) -> float:
    """Period Perturbation Quotient: среднее |f0[i] - f0[i-4]| / 4."""
    f0 = np.asarray(f0, dtype=np.float64)
    if len(f0) < MIN_VALUES['ppq']:
        return 0.0
    return float(np.mean(np.abs(f0[4:] - f0[:-4]) / 4))


def ddp(f0: np.ndarray) -> float:
    """Difference of Differences of Periods, производная от RAP."""
    return 2 * rap(f0)


def compute_jitter(f0: np.ndarray) -> dict[str, Optional[float]]:
    """
    Вычисляет всё семейство джиттера.

    Args:
        f0: Очищенный трек основного тона

    Returns:
        Словарь метрик; None — недостаточно значений для метрики
    """
    f0 = np.asarray(f0, dtype=np.float64)
    calculators = {
        'jitter_percent': jitter_percent,
        'jitter_abs': jitter_abs,
        'rap': rap,
        'ppq': ppq,
        'ddp': ddp,
    }

    features: dict[str, Optional[float]] = {}
    for name, calculate in calculators.items():
        if len(f0) < MIN_VALUES[name]:
            log.debug('Недостаточно значений F0 для %s: %d', name, len(f0))
            features[name] = None
        else:
            features[name] = calculate(f0)
    return features


def zero_crossing_jitter(y: np.ndarray, sample_rate: float) -> float:
    """
    Грубая оценка джиттера по переходам через ноль.

    Периоды между соседними переходами (в секундах) сравниваются
    со средним периодом; возвращается среднее абсолютное отклонение.

    Args:
        y: Аудиосигнал
        sample_rate: Частота дискретизации

    Returns:
        Средняя вариация периода в секундах
    """
    y = np.asarray(y)
    if len(y) < 2:
        return 0.0

    # Смена знака: граница между (< 0) и (>= 0)
    negative = y < 0
    crossings = np.flatnonzero(negative[1:] != negative[:-1]) + 1
    if len(crossings) < 2:
        return 0.0

    periods = np.diff(crossings) / sample_rate
    return float(np.mean(np.abs(periods - np.mean(periods))))
