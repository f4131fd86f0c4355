# gmail_bridge/logging_config.py
import logging
import logging.config

from .config import get_log_level


def configure_logging(level=None) -> None:
    """Console logging for the service; safe to call more than once."""
    level = (level or get_log_level()).upper()

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            },
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
            },
        },
        "root": {
            "handlers": ["stdout"],
            "level": level,
        },
    })
    logging.getLogger(__name__).debug("Logging configured at %s", level)
