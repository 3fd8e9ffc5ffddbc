# 📄 File: hub/shared/utils/logging.py

# 🧭 Purpose (Layman Explanation):
# Sets up how the back office writes its logs, either as readable lines or as JSON records,
# and stamps every line with the request it belongs to so one request can be followed end to end.

# 🧪 Purpose (Technical Summary):
# Structured logging with python-json-logger formatting, a request-scoped ContextVar for
# request/account correlation, and a one-shot root logger configuration helper.

# 🔗 Dependencies:
# - python-json-logger: JSON log formatting
# - logging: Python standard logging
# - contextvars: Request context tracking

# 🔄 Connected Modules / Calls From:
# Used by: hub.main (startup), request logging and error handling middleware

import logging
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional
from uuid import uuid4

from pythonjsonlogger.json import JsonFormatter

# Context variables for request tracking
request_id_var: ContextVar[str] = ContextVar("request_id", default="")
account_id_var: ContextVar[str] = ContextVar("account_id", default="")

SERVICE_NAME = "stexcore-hub"

_logging_configured = False


class ContextualFormatter(logging.Formatter):
    """
    Text formatter that adds the request context to every record.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.hostname = os.uname().nodename if hasattr(os, "uname") else "unknown"

    def format(self, record):
        record.request_id = request_id_var.get() or "-"
        record.account_id = account_id_var.get() or "-"
        record.hostname = self.hostname
        record.service = SERVICE_NAME
        record.timestamp = datetime.now(timezone.utc).isoformat()
        return super().format(record)


class JSONFormatter(JsonFormatter):
    """
    JSON formatter for structured logging.

    Outputs one JSON object per record with a consistent structure for
    log aggregation tools.
    """

    def __init__(self):
        super().__init__(
            "%(levelname)s %(name)s %(message)s %(module)s %(funcName)s %(lineno)d",
            rename_fields={"levelname": "level", "name": "logger", "funcName": "function", "lineno": "line"},
        )
        self.hostname = os.uname().nodename if hasattr(os, "uname") else "unknown"

    def add_fields(self, log_data: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_data, record, message_dict)
        log_data["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_data["service"] = SERVICE_NAME
        log_data["hostname"] = self.hostname

        if request_id_var.get():
            log_data["request_id"] = request_id_var.get()
        if account_id_var.get():
            log_data["account_id"] = account_id_var.get()


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "text",
) -> logging.Logger:
    """
    Setup application logging configuration.

    Installs a single stdout handler on the root logger. Later calls are no-ops
    so that building several applications in one process (tests) does not
    stack handlers.

    Args:
        log_level: Logging level name
        log_format: ``json`` or ``text``

    Returns:
        The startup logger
    """
    global _logging_configured

    if _logging_configured:
        return logging.getLogger("startup")

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    if log_format.lower() == "json":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = ContextualFormatter(
            "%(timestamp)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    _logging_configured = True
    return logging.getLogger("startup")


@contextmanager
def log_context(request_id: Optional[str] = None, account_id: Optional[str] = None) -> Iterator[str]:
    """
    Context manager binding a request id (generated when missing) to all logs
    emitted inside it.
    """
    if request_id is None:
        request_id = str(uuid4())

    request_token = request_id_var.set(request_id)
    account_token = account_id_var.set(account_id or "")

    try:
        yield request_id
    finally:
        request_id_var.reset(request_token)
        account_id_var.reset(account_token)
