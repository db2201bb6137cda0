import logging
from logging.handlers import RotatingFileHandler

from tremor_check.config import settings

PACKAGE_LOGGER = "tremor_check"
LOG_FILE_NAME = "tremor_check.log"


def _configure_package_logger() -> logging.Logger:
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(settings.log_level.upper())

    if not logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(console_handler)

        # Файловый журнал только по явному включению: импорт пакета ничего не пишет на диск
        if settings.log_to_file:
            settings.ensure_dirs()
            file_handler = RotatingFileHandler(
                settings.logs_dir / LOG_FILE_NAME, maxBytes=1_000_000, backupCount=5, encoding="utf-8"
            )
            file_handler.setFormatter(logging.Formatter(
                "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            ))
            logger.addHandler(file_handler)

    return logger


def setup_logger(name: str) -> logging.Logger:
    """Дочерний логгер пакета; обработчики висят только на 'tremor_check'."""
    _configure_package_logger()
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
