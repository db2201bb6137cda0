"""Энтропия периода основного тона (PPE)."""

import numpy as np
import scipy.stats

from tremor_check.constants import PPE_BINS


def pitch_period_entropy(f0: np.ndarray, n_bins: int = PPE_BINS) -> float:
    """
    Вычисляет энтропию распределения нормированного F0.

    Трек делится на свой максимум и раскладывается по n_bins
    равным корзинам на [0, 1]; значение 1.0 попадает в последнюю.

    Args:
        f0: Очищенный трек основного тона
        n_bins: Количество корзин гистограммы

    Returns:
        Энтропия Шеннона в натах (0.0 для пустого трека)
    """
    f0 = np.asarray(f0, dtype=np.float64)
    if f0.size == 0:
        return 0.0

    max_f0 = np.max(f0)
    if max_f0 <= 0:
        return 0.0

    normalized = f0 / max_f0
    bins = np.minimum((normalized * n_bins).astype(int), n_bins - 1)
    counts = np.bincount(bins, minlength=n_bins)

    # scipy нормирует счётчики и пропускает нулевые вероятности
    return float(scipy.stats.entropy(counts))
