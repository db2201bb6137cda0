"""
Пакет извлечения голосовых признаков.

Компоненты:
- framing: нарезка сигнала на перекрывающиеся фреймы
- pitch: автокорреляционная оценка F0
- outliers: отбраковка выбросов по IQR
- jitter: вариации основного тона (Jitter%, JitterAbs, RAP, PPQ, DDP)
- shimmer: вариации амплитуды (Shimmer%, APQ3, APQ5, DDA, ShimmerDB)
- spectral: HNR/NHR и разброс спектра мощности
- entropy: энтропия периода основного тона (PPE)
- nonlinear: DFA, RPDE, корреляционная размерность
"""

from tremor_check.features.entropy import pitch_period_entropy
from tremor_check.features.framing import iter_frames
from tremor_check.features.jitter import compute_jitter
from tremor_check.features.outliers import remove_outliers
from tremor_check.features.pitch import estimate_pitch, track_pitch
from tremor_check.features.shimmer import amplitude_peaks, compute_shimmer
from tremor_check.features.spectral import harmonic_ratios, spread_values

__all__ = [
    "iter_frames",
    "estimate_pitch",
    "track_pitch",
    "remove_outliers",
    "compute_jitter",
    "amplitude_peaks",
    "compute_shimmer",
    "harmonic_ratios",
    "spread_values",
    "pitch_period_entropy",
]
