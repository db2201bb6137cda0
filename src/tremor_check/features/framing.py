"""Нарезка аудиосигнала на перекрывающиеся фреймы анализа."""

from collections.abc import Iterator

import numpy as np

from tremor_check.constants import FRAME_DURATION_S, FRAME_OVERLAP


def frame_length_for(sample_rate: float, frame_duration: float = FRAME_DURATION_S) -> int:
    """Длина фрейма в отсчётах (округление вниз)."""
    return int(sample_rate * frame_duration)


def hop_length_for(frame_length: int, overlap: float = FRAME_OVERLAP) -> int:
    """Шаг между началами соседних фреймов."""
    return int(frame_length * (1.0 - overlap))


def iter_frames(
    y: np.ndarray,
    sample_rate: float,
    frame_duration: float = FRAME_DURATION_S,
    overlap: float = FRAME_OVERLAP,
) -> Iterator[np.ndarray]:
    """
    Лениво выдаёт фреймы сигнала с перекрытием.

    Последний неполный фрейм отбрасывается. Фреймы являются
    представлениями (views) исходного буфера, без копирования.

    Args:
        y: Аудиосигнал
        sample_rate: Частота дискретизации
        frame_duration: Длительность фрейма в секундах
        overlap: Доля перекрытия соседних фреймов

    Yields:
        Фреймы длиной frame_length_for(sample_rate)
    """
    frame_length = frame_length_for(sample_rate, frame_duration)
    hop_length = hop_length_for(frame_length, overlap)

    # Слишком низкая частота дискретизации — фреймов нет
    if frame_length < 1 or hop_length < 1:
        return

    for start in range(0, len(y) - frame_length + 1, hop_length):
        yield y[start:start + frame_length]
