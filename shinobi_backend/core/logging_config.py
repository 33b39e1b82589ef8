# shinobi_backend/core/logging_config.py
import logging
import sys

from shinobi_backend.core.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_configured = False


def setup_logging(level: str = LOG_LEVEL) -> None:
    """Configure the root logger once. Safe to call on every startup."""
    global _configured
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)

    # SQL echo is driven by SQL_ECHO on the engines
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    _configured = True
