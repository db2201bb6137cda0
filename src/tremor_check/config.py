"""Конфигурация tremor_check через переменные окружения.

Настраиваемые параметры конвейера и инфраструктуры.
Алгоритмические константы по умолчанию остаются
в constants.py — функции анализа получают их явно.

Использование::

    from tremor_check.config import settings

    settings.log_level        # 'INFO'
    settings.pitch_range      # (50.0, 500.0)
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from tremor_check.constants import (
    AUTOCORR_THRESHOLD,
    JITTER_TREMOR_THRESHOLD,
    LOGS_DIR,
    NONLINEAR_MAX_POINTS,
    OUTLIER_IQR_FACTOR,
    PITCH_FMAX,
    PITCH_FMIN,
    SHIMMER_TREMOR_THRESHOLD,
)


class Settings(BaseSettings):
    """Настройки конвейера tremor_check."""

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        env_prefix='TC_',
        extra='ignore',
    )

    # ── Пути ─────────────────────────────────────
    logs_dir: Path = LOGS_DIR

    # ── Логирование ──────────────────────────────
    log_level: str = 'INFO'
    log_to_file: bool = False

    # ── Производительность ───────────────────────
    fft_workers: int = 1

    # ── Основной тон ─────────────────────────────
    pitch_fmin: float = PITCH_FMIN
    pitch_fmax: float = PITCH_FMAX
    autocorr_threshold: float = AUTOCORR_THRESHOLD

    # ── Выбросы ──────────────────────────────────
    outlier_iqr_factor: float = OUTLIER_IQR_FACTOR

    # ── Состав результата ────────────────────────
    include_extended: bool = False
    include_nonlinear: bool = False
    nonlinear_max_points: int = NONLINEAR_MAX_POINTS

    # ── Скрининг тремора ─────────────────────────
    jitter_tremor_threshold: float = JITTER_TREMOR_THRESHOLD
    shimmer_tremor_threshold: float = SHIMMER_TREMOR_THRESHOLD

    @property
    def pitch_range(self) -> tuple[float, float]:
        """Допустимый диапазон F0 как кортеж (fmin, fmax)."""
        return self.pitch_fmin, self.pitch_fmax

    def ensure_dirs(self) -> None:
        """Создаёт необходимые директории."""
        self.logs_dir.mkdir(parents=True, exist_ok=True)


settings = Settings()
