"""
Log formatters.

  - JsonFormatter: one JSON object per line for log collectors. Standard
    fields plus service/env/version/request_id and any `extra` keys.
  - ColorFormatter: compact ANSI-coloured lines for a developer terminal.
"""

import json
import logging
from logging import LogRecord
from typing import Any

from countries_api.utils.logging import get_project_version

PROJECT_VERSION = get_project_version()

# Attributes every LogRecord has; anything else on the record came from `extra`.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime", "taskName"}


class JsonFormatter(logging.Formatter):

    def __init__(self, *, env: str | None = None, service: str = "countries-api", datefmt: str | None = None):
        super().__init__(datefmt=datefmt)
        self.env = env
        self.service = service

    def format(self, record: LogRecord) -> str:
        log_record: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "pathname": record.pathname,
            "lineno": record.lineno,
            "request_id": getattr(record, "request_id", "-"),
            "service": self.service,
            "env": self.env,
            "version": PROJECT_VERSION,
        }

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            log_record["stack_info"] = self.formatStack(record.stack_info)

        for key, value in record.__dict__.items():
            if key in log_record or key in _RESERVED_ATTRS or key.startswith("_"):
                continue
            try:
                json.dumps(value)
                log_record[key] = value
            except (TypeError, ValueError):
                log_record[key] = str(value)

        # default=str: the formatter must never raise
        return json.dumps(log_record, ensure_ascii=False, default=str)


class ColorFormatter(logging.Formatter):
    """Development-friendly coloured formatter. The level name is wrapped in ANSI codes."""

    COLOR_CODES = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[1;41m",
        "RESET": "\033[0m",
    }

    def format(self, record: LogRecord) -> str:
        original_levelname = record.levelname
        color = self.COLOR_CODES.get(original_levelname, "")
        if color:
            record.levelname = f"{color}{original_levelname:<8}{self.COLOR_CODES['RESET']}"
        try:
            return super().format(record)
        finally:
            # other handlers share the same record
            record.levelname = original_levelname
