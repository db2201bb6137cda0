"""
Скрининг тремора по нескольким фразам одного диктора.

Джиттер и шиммер усредняются по всем фразам сеанса; признак тремора
выставляется, если хотя бы одно среднее строго превышает свой порог.
Пороги берутся из настроек (TC_JITTER_TREMOR_THRESHOLD,
TC_SHIMMER_TREMOR_THRESHOLD).
"""

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from tremor_check.config import Settings, settings as default_settings
from tremor_check.log import setup_logger
from tremor_check.pipeline import FeatureResult

log = setup_logger('screening')


@dataclass(frozen=True)
class TremorAssessment:
    """Итог скрининга по набору фраз."""

    average_jitter: float
    average_shimmer: float
    tremor_detected: bool
    n_phrases: int

    def summary(self) -> str:
        verdict = 'Возможен тремор' if self.tremor_detected else 'Признаков тремора не обнаружено'
        return (
            f'{verdict} (фраз: {self.n_phrases}, '
            f'средний джиттер: {self.average_jitter:.2f}%, '
            f'средний шиммер: {self.average_shimmer:.2f}%)'
        )

    def as_dict(self) -> dict:
        return {
            'average_jitter': self.average_jitter,
            'average_shimmer': self.average_shimmer,
            'tremor_detected': self.tremor_detected,
            'n_phrases': self.n_phrases,
        }


def is_tremor_suspected(
    jitter: float,
    shimmer: float,
    jitter_threshold: float,
    shimmer_threshold: float,
) -> bool:
    """Строгое превышение любого из порогов."""
    return jitter > jitter_threshold or shimmer > shimmer_threshold


def assess_phrases(
    results: Sequence[FeatureResult],
    *,
    settings: Optional[Settings] = None,
) -> TremorAssessment:
    """
    Усредняет jitter_percent и shimmer_percent по фразам и сравнивает с порогами.

    Неопределённые метрики участвуют в среднем как 0.0, так же как
    они представлены в FeatureResult.

    Raises:
        ValueError: Не передано ни одной фразы
    """
    if not results:
        raise ValueError('Для скрининга нужна хотя бы одна фраза')

    settings = settings or default_settings

    average_jitter = float(np.mean([r['jitter_percent'] for r in results]))
    average_shimmer = float(np.mean([r['shimmer_percent'] for r in results]))
    detected = is_tremor_suspected(
        average_jitter,
        average_shimmer,
        settings.jitter_tremor_threshold,
        settings.shimmer_tremor_threshold,
    )

    log.info(
        'Скрининг по %d фразам: джиттер %.2f%%, шиммер %.2f%%, тремор: %s',
        len(results), average_jitter, average_shimmer, detected,
    )
    return TremorAssessment(
        average_jitter=average_jitter,
        average_shimmer=average_shimmer,
        tremor_detected=detected,
        n_phrases=len(results),
    )
