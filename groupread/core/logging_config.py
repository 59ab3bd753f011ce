"""
Logging setup for scripts and embedding applications.

Library modules only create loggers; this installs the root handler once,
at the level configured in settings.
"""

import logging
import sys

from groupread.config.settings import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def configure_logging(log_level: str = None) -> None:
    """Configure the root logger; ``log_level`` overrides the configured level."""
    level = (log_level or settings.log_level).upper()
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stdout, force=True)

    # SQL statements are only interesting in debug mode
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if settings.debug else logging.WARNING)
