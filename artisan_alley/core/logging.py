import logging
from logging.config import dictConfig
import sys
from .config import settings

LOG_LEVEL = "DEBUG" if settings.DEBUG else "INFO"

log_config = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": LOG_LEVEL,
            "formatter": "default",
            "stream": sys.stdout,
        },
    },
    "loggers": {
        # Package records reach the root console handler by propagation
        "artisan_alley": {
            "level": LOG_LEVEL,
            "propagate": True,
        },
        "sqlalchemy.engine": {
            "level": "WARNING",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": LOG_LEVEL,
    },
}

dictConfig(log_config)

logger = logging.getLogger("artisan_alley")
