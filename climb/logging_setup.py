import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .config import config

_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging() -> logging.Logger:
    logger = logging.getLogger("climb")
    logger.setLevel(config.log_level.upper())

    if not logger.handlers:
        fmt = logging.Formatter(_FORMAT)

        stream = logging.StreamHandler()
        stream.setFormatter(fmt)
        logger.addHandler(stream)

        if config.log_file:
            Path(config.log_file).parent.mkdir(parents=True, exist_ok=True)
            handler = RotatingFileHandler(
                config.log_file,
                maxBytes=1_000_000,
                backupCount=3,
                encoding="utf-8",
            )
            handler.setFormatter(fmt)
            logger.addHandler(handler)

    return logger
