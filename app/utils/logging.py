"""Logging setup shared by the API, services and scripts."""

import logging
import logging.config

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s - %(message)s"

_configured = False


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging once per process.

    Repeated calls only adjust the level so the application factory can be
    invoked from tests without stacking handlers.
    """
    global _configured
    level = level.upper()
    if _configured:
        logging.getLogger().setLevel(level)
        return

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {"format": LOG_FORMAT},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                },
            },
            "root": {"handlers": ["console"], "level": level},
            "loggers": {
                # httpx logs every request at INFO, which floods pagination runs
                "httpx": {"level": "WARNING"},
            },
        }
    )
    _configured = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
