import logging
import logging.config
import os
from pathlib import Path

LOG_DIR = Path(os.getenv("LOG_DIR", Path(__file__).resolve().parents[3] / "logs"))

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s %(module)s:%(lineno)d - %(message)s"


def build_log_config(level: str = "INFO") -> dict:
    """Logging configuration with console output and a rotating file under LOG_DIR."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": LOG_FORMAT,
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "level": level,
            },
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "formatter": "default",
                "filename": str(LOG_DIR / "app.log"),
                "maxBytes": 10485760,
                "backupCount": 5,
                "level": level,
            },
        },
        "loggers": {
            "uvicorn": {"handlers": ["console", "file"], "level": "INFO", "propagate": False},
            "uvicorn.error": {"handlers": ["console", "file"], "level": "INFO", "propagate": False},
            "uvicorn.access": {"handlers": ["console", "file"], "level": "INFO", "propagate": False},
            "sqlalchemy.engine": {"handlers": ["file"], "level": "WARNING", "propagate": False},
            "httpx": {"handlers": ["file"], "level": "WARNING", "propagate": False},
            "app": {
                "handlers": ["console", "file"],
                "level": level,
                "propagate": False,
            },
            "main": {
                "handlers": ["console", "file"],
                "level": level,
                "propagate": False,
            },
        },
        "root": {
            "handlers": ["console"],
            "level": "WARNING",
        },
    }


def setup_logging(debug: bool = False):
    """Configure application logging."""
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(build_log_config("DEBUG" if debug else "INFO"))
