"""
Logging setup for the evaluation harness.

Modules log through ``logging.getLogger(__name__)``; records propagate to the
``anomaly_eval`` logger, which ``setup_logging`` equips with a console handler
and, when ``config.log_to_file`` is set, a rotating file under
``config.logs_dir``. Importing ``anomaly_eval`` calls it once unless
``ANOMALY_EVAL_CONFIGURE_LOGGING=false``.
"""

import logging
import logging.handlers
from typing import List, Optional

from .config import Config, config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Rotate at 10MB, keep 5 old files
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5


def _build_handlers(logger_name: str, settings: Config) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if settings.log_to_file:
        handlers.append(
            logging.handlers.RotatingFileHandler(
                settings.logs_dir / f"{logger_name}.log",
                maxBytes=MAX_LOG_BYTES,
                backupCount=LOG_BACKUPS,
            )
        )
    return handlers


def setup_logging(logger_name: str = "anomaly_eval", level: Optional[str] = None) -> logging.Logger:
    """
    Configure and return the harness logger.

    Calling it again only updates the level; handlers are attached once.

    Args:
        logger_name: Logger to configure (the package logger by default)
        level: Overrides ``config.log_level`` when given
    """
    logger = logging.getLogger(logger_name)
    level = (level or config.log_level).upper()
    logger.setLevel(level)

    if logger.handlers:
        return logger

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in _build_handlers(logger_name, config):
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging configured for %s at %s", logger_name, level)
    return logger
