"""
Конвейер извлечения голосовых признаков тремора.

Сигнал → фреймы → трек F0 → очистка выбросов → джиттер и PPE;
сигнал → пики амплитуды → шиммер; сигнал → БПФ → HNR/NHR и разброс спектра.
Все этапы — чистые функции без общего состояния, поэтому
независимые записи можно обрабатывать параллельно.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from tremor_check.config import Settings, settings as default_settings
from tremor_check.constants import DEFAULT_METRICS, EXTENDED_METRICS, NONLINEAR_METRICS
from tremor_check.exceptions import InvalidSignalError
from tremor_check.features.entropy import pitch_period_entropy
from tremor_check.features.jitter import compute_jitter
from tremor_check.features.nonlinear import compute_nonlinear
from tremor_check.features.outliers import remove_outliers
from tremor_check.features.pitch import f0_statistics, track_pitch
from tremor_check.features.shimmer import amplitude_peaks, compute_shimmer
from tremor_check.features.spectral import harmonic_ratios, spread_values
from tremor_check.log import setup_logger
from tremor_check.services.audio_io import load_audio

log = setup_logger('pipeline')


@dataclass(frozen=True)
class FeatureResult:
    """
    Результат извлечения признаков.

    values содержит все запрошенные метрики; метрики, для которых
    не хватило данных, равны 0.0 и перечислены в undefined.
    """

    values: dict[str, float]
    undefined: frozenset[str] = frozenset()
    sample_rate: float = 0.0
    n_samples: int = 0
    pitch_track: np.ndarray = field(default_factory=lambda: np.array([]), compare=False)

    def __getitem__(self, name: str) -> float:
        return self.values[name]

    def __contains__(self, name: object) -> bool:
        return name in self.values

    def is_defined(self, name: str) -> bool:
        """Была ли метрика вычислена по достаточным данным."""
        if name not in self.values:
            raise KeyError(name)
        return name not in self.undefined

    def as_dict(self) -> dict[str, float]:
        """Базовый набор из 13 метрик."""
        return {name: self.values[name] for name in DEFAULT_METRICS}

    def extended_dict(self) -> dict[str, float]:
        """Все вычисленные метрики, включая дополнительные."""
        return dict(self.values)


def _validate_signal(samples: np.ndarray, sample_rate: float) -> np.ndarray:
    y = np.asarray(samples, dtype=np.float32)
    if y.ndim != 1:
        raise InvalidSignalError(f'Ожидается моно-сигнал, получена форма {y.shape}')
    if not sample_rate > 0:
        raise InvalidSignalError(f'Частота дискретизации должна быть > 0: {sample_rate}')
    return y


def extract_features(
    samples: np.ndarray,
    sample_rate: float,
    *,
    extended: Optional[bool] = None,
    nonlinear: Optional[bool] = None,
    settings: Optional[Settings] = None,
) -> FeatureResult:
    """
    Извлекает показатели качества голоса из записанной фразы.

    Args:
        samples: Моно-сигнал (float32)
        sample_rate: Частота дискретизации в Гц
        extended: Добавить вспомогательные метрики (ddp, apq3, apq5, dda,
            shimmer_db, shimmer_pairwise); по умолчанию из настроек
        nonlinear: Добавить нелинейные меры (dfa, rpde, d2); по умолчанию из настроек
        settings: Настройки конвейера; по умолчанию глобальные

    Returns:
        FeatureResult с фиксированным набором ключей

    Raises:
        InvalidSignalError: Сигнал не одномерный или частота дискретизации <= 0
    """
    settings = settings or default_settings
    extended = settings.include_extended if extended is None else extended
    nonlinear = settings.include_nonlinear if nonlinear is None else nonlinear

    y = _validate_signal(samples, sample_rate)
    log.info('Извлечение признаков: %d отсчётов, %.0f Гц', len(y), sample_rate)

    # 1. Основной тон и его очистка
    fmin, fmax = settings.pitch_range
    raw_track = track_pitch(y, sample_rate, fmin, fmax, settings.autocorr_threshold)
    f0 = remove_outliers(raw_track, factor=settings.outlier_iqr_factor)
    log.debug('Трек F0 после очистки: %d из %d', len(f0), len(raw_track))

    measured: dict[str, Optional[float]] = {}

    # 2. Джиттер и энтропия по треку F0
    measured.update(compute_jitter(f0))
    if len(f0):
        measured['f0_mean'], measured['f0_max'], measured['f0_min'] = f0_statistics(f0)
        measured['ppe'] = pitch_period_entropy(f0)
    else:
        log.warning('Не найдено ни одного вокализованного фрейма')
        for name in ('f0_mean', 'f0_max', 'f0_min', 'ppe'):
            measured[name] = None

    # 3. Шиммер по пикам амплитуды
    peaks = amplitude_peaks(y, sample_rate)
    measured.update(compute_shimmer(peaks))

    # 4. Спектральные признаки
    spread = spread_values(y, settings.fft_workers)
    measured['spread1'], measured['spread2'] = spread if spread else (None, None)

    ratios = harmonic_ratios(y, settings.fft_workers)
    measured['hnr'], measured['nhr'] = ratios if ratios else (None, None)

    # 5. Нелинейная динамика
    if nonlinear:
        measured.update(compute_nonlinear(y, settings.nonlinear_max_points))

    wanted = DEFAULT_METRICS
    if extended:
        wanted += EXTENDED_METRICS
    if nonlinear:
        wanted += NONLINEAR_METRICS

    values = {
        name: 0.0 if measured[name] is None else float(measured[name])
        for name in wanted
    }
    undefined = frozenset(name for name in wanted if measured[name] is None)
    if undefined:
        log.info('Метрики без достаточных данных: %s', ', '.join(sorted(undefined)))

    return FeatureResult(
        values=values,
        undefined=undefined,
        sample_rate=float(sample_rate),
        n_samples=len(y),
        pitch_track=f0,
    )


def extract_features_from_file(
    file_path: str | os.PathLike,
    *,
    extended: Optional[bool] = None,
    nonlinear: Optional[bool] = None,
    settings: Optional[Settings] = None,
) -> FeatureResult:
    """
    Декодирует запись и извлекает из неё признаки.

    Raises:
        SourceUnavailableError: Аудиобуфер не удалось получить;
            частичный результат не возвращается
    """
    y, sr = load_audio(file_path)
    return extract_features(y, sr, extended=extended, nonlinear=nonlinear, settings=settings)
