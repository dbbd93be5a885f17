from logging.config import dictConfig

from work_scheduler.core.config import Settings


def configure_logging(settings: Settings) -> None:
    """Route application loggers to a single console handler."""

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "loggers": {
                "work_scheduler": {
                    "handlers": ["console"],
                    "level": settings.log_level,
                },
            },
        }
    )
