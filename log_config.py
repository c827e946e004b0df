# log_config.py
"""Logging configuration for the availability service."""
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any


def setup_logging(level: str = "INFO", format_type: str = "standard") -> None:
     """
     Configure root logging.

     Args:
          level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
          format_type: "standard" or "json"
     """
     log_level = getattr(logging, level.upper(), logging.INFO)

     if format_type == "json":
          formatter = JsonFormatter()
     else:
          formatter = logging.Formatter(
               fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
               datefmt="%Y-%m-%d %H:%M:%S",
          )

     root_logger = logging.getLogger()
     root_logger.setLevel(log_level)

     for handler in root_logger.handlers[:]:
          root_logger.removeHandler(handler)

     console_handler = logging.StreamHandler(sys.stdout)
     console_handler.setLevel(log_level)
     console_handler.setFormatter(formatter)
     root_logger.addHandler(console_handler)

     # Reduce noise from external libraries
     logging.getLogger("urllib3").setLevel(logging.WARNING)
     logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


class JsonFormatter(logging.Formatter):
     """JSON log formatter for structured logging."""

     def format(self, record: logging.LogRecord) -> str:
          log_data: dict[str, Any] = {
               "timestamp": datetime.now(timezone.utc).isoformat(),
               "level": record.levelname,
               "logger": record.name,
               "message": record.getMessage(),
          }

          if record.exc_info:
               log_data["exception"] = self.formatException(record.exc_info)

          if hasattr(record, "extra"):
               log_data.update(record.extra)

          return json.dumps(log_data)


def get_logger(name: str) -> logging.Logger:
     """Get a logger with the given name (usually __name__)."""
     return logging.getLogger(name)
