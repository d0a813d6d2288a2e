"""
Logging utilities for the rewards engine.

Единый логгер с простым console handler и переопределением уровня
через переменную окружения VAULT_REWARDS_LOG_LEVEL.
"""

import logging
import os
from typing import Final, Optional

LOG_LEVEL_ENV: Final[str] = "VAULT_REWARDS_LOG_LEVEL"

_DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a configured logger with a stream handler.

    При первом создании логгера подключается StreamHandler с текстовым
    форматтером; повторные вызовы переиспользуют конфигурацию.
    """
    logger = logging.getLogger(name if name else __name__)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))
        logger.addHandler(handler)

        level_str = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
        level = getattr(logging, level_str, logging.INFO)
        logger.setLevel(level)

    return logger
