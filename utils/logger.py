"""
Logging Setup

Configures the loguru logger once per process. Engine modules import
``logger`` from loguru directly and log ``event key=value`` pairs.
"""

import logging
import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

# Chatty third-party loggers routed through loguru at a higher threshold
SUPPRESSED_LOGGERS = {
    'werkzeug': 'WARNING',
    'sqlalchemy.engine': 'WARNING',
    'alembic': 'INFO',
}


class InterceptHandler(logging.Handler):
    """Forward stdlib logging records (Flask, SQLAlchemy) into loguru."""

    def emit(self, record):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def configure_logging(level='INFO'):
    """Replace loguru's default sink with a single stdout sink at ``level``."""
    logger.remove()
    logger.configure(
        handlers=[
            {
                'sink': sys.stdout,
                'level': level,
                'format': LOG_FORMAT,
                'colorize': sys.stdout.isatty(),
            },
        ]
    )
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name, name_level in SUPPRESSED_LOGGERS.items():
        logging.getLogger(name).setLevel(name_level)
