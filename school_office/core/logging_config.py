import logging
import logging.config

from school_office.core.config import settings


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for the application (stdout, one line per record)."""
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "loggers": {
                "school_office": {
                    "handlers": ["console"],
                    "level": level or settings.log_level,
                    "propagate": False,
                },
            },
        }
    )
