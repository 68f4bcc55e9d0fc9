"""JSON logging configuration for PKI operations."""

import logging
import os
import re

from pythonjsonlogger.json import JsonFormatter

_PASS_VALUE = re.compile(r'pass:"(?:\\.|[^"\\])*"')


class CustomJsonFormatter(JsonFormatter):
    """Custom JSON formatter with focused field set.

    Includes only 6 fields: timestamp, level, message, exc_info, funcName, lineno.
    """

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        if "levelname" in log_record:
            log_record["level"] = log_record.pop("levelname")

        allowed_fields = {
            "timestamp",
            "level",
            "message",
            "exc_info",
            "funcName",
            "lineno",
        }
        keys_to_remove = [key for key in log_record if key not in allowed_fields]
        for key in keys_to_remove:
            log_record.pop(key)


def redact_passwords(command: str) -> str:
    """Replace every `pass:"..."` value in an easyrsa argument string."""
    return _PASS_VALUE.sub("pass:[REDACTED]", command)


def _setup_logger() -> logging.Logger:
    """Initialize and configure singleton logger.

    Level comes from PKI_OPERATIONS_LOG_LEVEL (default INFO).
    """
    logger = logging.getLogger("pki_operations")

    # Prevent duplicate handlers if module reloaded
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    formatter = CustomJsonFormatter(
        fmt="%(timestamp)s %(levelname)s %(funcName)s %(lineno)d %(message)s",
        timestamp=True,
    )
    handler.setFormatter(formatter)

    level_name = os.getenv("PKI_OPERATIONS_LOG_LEVEL", "INFO").upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))
    logger.addHandler(handler)
    logger.propagate = False

    return logger


# Singleton logger instance - import this in other modules
LOGGER = _setup_logger()
