"""Application-wide logging configuration."""

import logging

from rich.logging import RichHandler

from erp.infrastructure.settings import settings


def setup_logging(level: str | None = None) -> None:
    """Install a single Rich handler on the root logger."""
    log_level_str = (level or settings.LOG_LEVEL).upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    rich_handler = RichHandler(
        show_time=True,
        show_level=True,
        show_path=False,
        markup=False,
        tracebacks_word_wrap=True,
        tracebacks_suppress=[
            logging,
        ],
    )
    root_logger.handlers = [rich_handler]
