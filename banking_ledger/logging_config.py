"""
Structured Logging Configuration Module

Provides JSON-formatted structured logging for all ledger operations.
PINs and other credentials are never passed to these helpers.
"""

import logging
import json
from datetime import datetime, timezone
from typing import Optional

from .config import LedgerConfig

# Record attributes copied into the JSON entry when a log call sets them
STRUCTURED_FIELDS = ("user_id", "action", "resource", "details")


class JSONFormatter(logging.Formatter):
    """One JSON object per record, stamped with the record's creation time"""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field_name in STRUCTURED_FIELDS:
            value = getattr(record, field_name, None)
            if value is not None:
                log_entry[field_name] = value

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "INFO", logger_name: str = "banking_ledger",
                  log_format: str = "json", log_file: Optional[str] = None) -> logging.Logger:
    """
    Setup structured logging for the ledger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        logger_name: Name of the root ledger logger
        log_format: "json" for structured output, "text" for plain lines
        log_file: Optional file path; logs go to stderr when omitted

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(logger_name)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    handler = logging.FileHandler(log_file) if log_file else logging.StreamHandler()
    if log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper()))

    # Prevent propagation to avoid duplicate logs
    logger.propagate = False

    return logger


def setup_logging_from_config(cfg: LedgerConfig) -> logging.Logger:
    """Setup logging using the values of a LedgerConfig"""
    return setup_logging(
        level=cfg.log_level,
        logger_name=cfg.logger_name,
        log_format=cfg.log_format,
        log_file=cfg.log_file
    )


def get_logger(name: str = "banking_ledger") -> logging.Logger:
    """Get logger instance"""
    return logging.getLogger(name)


def log_action(logger: logging.Logger, level: str, message: str,
               user_id: Optional[str] = None, action: Optional[str] = None,
               resource: Optional[str] = None, details: Optional[dict] = None):
    """
    Log a ledger action with structured fields.

    Args:
        logger: Logger instance
        level: Log level name (info, warning, error, ...)
        message: Log message
        user_id: Identity id or account number the action concerns
        action: Action being performed, e.g. "withdraw_rejected"
        resource: Kind of entity acted upon
        details: Additional structured data such as amounts
    """
    fields = {'user_id': user_id, 'action': action, 'resource': resource, 'details': details}
    logger.log(
        getattr(logging, level.upper()),
        message,
        extra={k: v for k, v in fields.items() if v},
        stacklevel=2
    )
