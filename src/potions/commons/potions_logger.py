"""Potions logger module."""

import logging

from potions.configs import (
    PROJECT_NAME,
    LOG_FILE_PATH,
    LOG_STREAM_LEVEL,
    LOG_FILE_LEVEL,
)


class PotionsLogger(object):
    """Process-wide logger singleton.

    ``PotionsLogger()`` always returns the same configured ``logging.Logger``.
    """

    _instance = None

    @classmethod
    def _build_logger(cls):
        logger = logging.getLogger(PROJECT_NAME)
        logger.propagate = False
        formatter = logging.Formatter("[%(name)s][%(levelname)s][%(asctime)s][%(module)s:%(lineno)d] %(message)s")

        stream_level = getattr(logging, LOG_STREAM_LEVEL, None)
        file_level = getattr(logging, LOG_FILE_LEVEL, None)
        levels = [lvl for lvl in (stream_level, file_level) if isinstance(lvl, int)]
        if not levels:
            logger.disabled = True
            return logger
        logger.setLevel(min(levels))

        if isinstance(stream_level, int):
            stream_handler = logging.StreamHandler()
            stream_handler.setLevel(stream_level)
            stream_handler.setFormatter(formatter)
            logger.addHandler(stream_handler)

        if isinstance(file_level, int):
            file_handler = logging.FileHandler(LOG_FILE_PATH, delay=True, mode="a+")
            file_handler.setLevel(file_level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

        logger.debug(f"{PROJECT_NAME} logger initialized.")
        return logger

    def __new__(cls, *args, **kwargs) -> logging.Logger:
        """Return the shared logger, building it on first use."""
        if not cls._instance:
            cls._instance = super(PotionsLogger, cls).__new__(cls, *args, **kwargs)
            cls._instance._logger = cls._build_logger()
        return cls._instance._logger
