"""JSON logging configuration for the authorizer Lambda."""

import logging
import os
import sys

from pythonjsonlogger.json import JsonFormatter

LOGGER_NAME = "authorizer"

# Structured fields attached through ``extra=`` by the engine and stores
AUDIT_FIELDS = frozenset(
    {
        "fingerprint",
        "canonicalIdentity",
        "outcome",
        "reason",
        "stage",
        "principalId",
        "statementCount",
        "bucket",
        "key",
        "path",
        "invalidFingerprint",
    }
)


class CustomJsonFormatter(JsonFormatter):
    """Custom JSON formatter with focused field set.

    Emits timestamp, level, message, exc_info, funcName and lineno plus the
    known audit fields. Anything else passed through ``extra=`` is dropped.
    """

    def add_fields(self, log_record, record, message_dict):
        """Override to include only specified fields.

        Args:
            log_record: Dict to be logged as JSON
            record: LogRecord object from logging framework
            message_dict: Dict containing message and args
        """
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
        } | AUDIT_FIELDS

        keys_to_remove = [key for key in log_record if key not in allowed_fields]
        for key in keys_to_remove:
            log_record.pop(key)


def _setup_logger() -> logging.Logger:
    """Initialize and configure singleton logger.

    Returns:
        Configured logger with CustomJsonFormatter writing to stdout
    """
    logger = logging.getLogger(LOGGER_NAME)

    # Prevent duplicate handlers if module reloaded
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        fmt="%(timestamp)s %(levelname)s %(funcName)s %(lineno)d %(message)s",
        timestamp=True,
    )
    handler.setFormatter(formatter)

    level = logging.getLevelName(os.environ.get("LOG_LEVEL", "INFO").upper())
    logger.setLevel(level if isinstance(level, int) else logging.INFO)
    logger.addHandler(handler)
    logger.propagate = False

    return logger


# Singleton logger instance - import this in other modules
LOGGER = _setup_logger()
