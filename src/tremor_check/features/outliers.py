"""Отбраковка выбросов по межквартильному размаху (IQR)."""

import numpy as np

from tremor_check.constants import OUTLIER_IQR_FACTOR, OUTLIER_MIN_COUNT


def remove_outliers(
    values: np.ndarray,
    factor: float = OUTLIER_IQR_FACTOR,
    min_count: int = OUTLIER_MIN_COUNT,
) -> np.ndarray:
    """
    Удаляет значения вне [Q1 - factor*IQR, Q3 + factor*IQR].

    Квартили берутся по целочисленным индексам отсортированного массива,
    без интерполяции. Последовательности длиной <= min_count
    возвращаются без изменений.

    Args:
        values: Последовательность чисел (например, трек F0)
        factor: Множитель IQR для границ
        min_count: Длина, до которой фильтр не применяется

    Returns:
        Значения внутри границ в исходном порядке
    """
    values = np.asarray(values, dtype=np.float64)
    n = len(values)
    if n <= min_count:
        return values

    ordered = np.sort(values)
    q1 = ordered[n // 4]
    q3 = ordered[(3 * n) // 4]
    iqr = q3 - q1

    lower = q1 - factor * iqr
    upper = q3 + factor * iqr
    return values[(values >= lower) & (values <= upper)]
