"""
Logging Configuration
Sets up centralized logging for the application, writing to both console and file.
"""

import os
import sys
import logging
import logging.config
from contextvars import ContextVar
from pathlib import Path

# "<request id> <METHOD> <path>" of the request being served, "-" outside requests
request_context: ContextVar[str] = ContextVar("request_context", default="-")


class RequestContextFilter(logging.Filter):
    """Adds the current request context to every record as %(request)s."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request = request_context.get()
        return True


def setup_logging(log_dir: str = "/var/log/shopadmin", log_level: str = "INFO"):
    """
    Configure logging for the application.
    
    Args:
        log_dir: Directory to store log files.
        log_level: Logging level (default: INFO)
    """
    Path(log_dir).mkdir(parents=True, exist_ok=True)
    
    log_file_path = os.path.join(log_dir, "app.log")
    
    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "request_context": {"()": RequestContextFilter},
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - [%(request)s] %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "stream": sys.stdout,
                "formatter": "default",
                "filters": ["request_context"],
                "level": log_level,
            },
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "filename": log_file_path,
                "maxBytes": 10 * 1024 * 1024,  # 10 MB
                "backupCount": 5,
                "formatter": "default",
                "filters": ["request_context"],
                "level": log_level,
                "encoding": "utf8",
            },
        },
        "loggers": {
            "": {  # Root logger
                "handlers": ["console", "file"],
                "level": log_level,
                "propagate": True,
            },
            "uvicorn": {
                "handlers": ["console", "file"],
                "level": "INFO",
                "propagate": False,
            },
            "uvicorn.error": {
                "handlers": ["console", "file"],
                "level": "INFO",
                "propagate": False,
            },
            "uvicorn.access": {
                "handlers": ["console", "file"],
                "level": "INFO",
                "propagate": False,
            },
            "app": {
                "handlers": ["console", "file"],
                "level": log_level,
                "propagate": False,
            },
        },
    }
    
    logging.config.dictConfig(logging_config)
    
    logger = logging.getLogger("app")
    logger.info(f"Logging initialized. Writing logs to {log_file_path}")
