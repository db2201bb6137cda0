"""Исключения tremor_check."""


class TremorCheckError(Exception):
    """Базовое исключение пакета."""


class SourceUnavailableError(TremorCheckError):
    """Аудиобуфер не удалось получить: ошибка чтения или декодирования."""


class FFTSetupError(TremorCheckError):
    """План БПФ не может быть создан для запрошенного размера."""


class InvalidSignalError(TremorCheckError, ValueError):
    """Сигнал нарушает контракт: частота дискретизации <= 0 или буфер не одномерный."""
