"""
Logging setup - one call at startup, modules use logging.getLogger(__name__).
"""

import logging

from app.core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = None) -> None:
    """Configure the root logger once. Level defaults to settings.log_level."""
    settings = get_settings()
    level_name = (level or settings.log_level or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
    )
    # SQL echo is noisy, only in debug mode
    if not settings.debug:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
