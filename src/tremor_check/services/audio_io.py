"""Чтение записанной фразы в моно-буфер float32."""

import os

import librosa
import numpy as np

from tremor_check.constants import SUPPORTED_EXTENSIONS
from tremor_check.exceptions import SourceUnavailableError
from tremor_check.log import setup_logger

log = setup_logger('audio_io')


def load_audio(file_path: str | os.PathLike) -> tuple[np.ndarray, int]:
    """
    Декодирует аудиофайл в моно-сигнал с исходной частотой дискретизации.

    Args:
        file_path: Путь к аудиофайлу

    Returns:
        (y, sr): Сигнал float32 и частота дискретизации

    Raises:
        SourceUnavailableError: Файл отсутствует, формат не поддерживается
            или декодирование завершилось ошибкой
    """
    path = os.fspath(file_path)
    if not os.path.exists(path):
        log.error('Файл не найден: %s', path)
        raise SourceUnavailableError(f'Файл не найден: {path}')

    ext = os.path.splitext(path)[1].lower()
    if ext not in SUPPORTED_EXTENSIONS:
        log.error('Неподдерживаемый формат файла: %s', ext)
        raise SourceUnavailableError(
            f'Неподдерживаемый формат файла: {ext}. Поддерживаются: {sorted(SUPPORTED_EXTENSIONS)}'
        )

    try:
        y, sr = librosa.load(path, sr=None, mono=True)
    except Exception as exc:
        log.error('Ошибка декодирования %s: %s', path, exc)
        raise SourceUnavailableError(f'Не удалось декодировать {path}: {exc}') from exc

    log.info('Аудио загружено: %s, %d отсчётов, %d Гц', os.path.basename(path), len(y), sr)
    return y.astype(np.float32, copy=False), int(sr)
