# metarwx/logging.py
"""
Structured logging for metarwx.

Provides JSON-formatted logging with consistent fields:
- timestamp: ISO 8601
- level: DEBUG/INFO/WARNING/ERROR/CRITICAL
- logger: Module name
- message: Event name
- **kwargs: Additional structured fields

Usage:
    from metarwx.logging import get_logger
    logger = get_logger(__name__)
    logger.debug("metar_rejected", reason="INVALID_STATION", raw=raw)
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .settings import settings


class StructuredLogFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs each log line as a JSON object with consistent fields.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, "structured_data"):
            log_data.update(record.structured_data)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if record.levelno >= logging.ERROR:
            log_data["source"] = {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            }

        return json.dumps(log_data, default=str)


class StructuredLogger:
    """
    Thin wrapper around a stdlib logger that accepts keyword fields.

    Example:
        logger = get_logger(__name__)
        logger.info("metar_decoded", station_id="KSFO", tokens=9)
    """

    def __init__(self, name: str):
        self._logger = logging.getLogger(name)

    def _log(self, level: int, message: str, exc_info: bool = False, **kwargs):
        self._logger.log(
            level, message, exc_info=exc_info, extra={"structured_data": kwargs}
        )

    def debug(self, message: str, **kwargs):
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs):
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs):
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, exc_info: bool = False, **kwargs):
        self._log(logging.ERROR, message, exc_info=exc_info, **kwargs)


# Silent unless the host application configures logging
logging.getLogger("metarwx").addHandler(logging.NullHandler())


_configured = False


def configure_logging(
    level: Optional[str] = None,
    json_output: Optional[bool] = None,
    log_file: Optional[str] = None,
):
    """
    Configure root logging for the service.

    Called from the service entry points only. Importing the decoder
    leaves the host's logging untouched.

    Args:
        level: Log level name; defaults to settings.log_level
        json_output: JSON (True) or plain text (False); defaults to settings.log_json
        log_file: Optional file path to also write JSON logs to
    """
    global _configured
    if _configured:
        return
    _configured = True

    level = level or settings.log_level
    json_output = settings.log_json if json_output is None else json_output
    log_file = log_file or settings.log_file

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    if json_output:
        console_handler.setFormatter(StructuredLogFormatter())
    else:
        console_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(StructuredLogFormatter())
        root_logger.addHandler(file_handler)

    # Reduce noise from the HTTP stack
    logging.getLogger("uvicorn").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger. Does not configure handlers."""
    return StructuredLogger(name)


def get_decoder_logger() -> StructuredLogger:
    """Get logger for the report decoder."""
    return get_logger("metarwx.decoder")


def get_api_logger() -> StructuredLogger:
    """Get logger for API routes."""
    return get_logger("metarwx.api")
