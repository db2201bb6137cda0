"""Внешние сервисы конвейера: получение аудиобуфера."""

from tremor_check.services.audio_io import load_audio

__all__ = ["load_audio"]
