"""Structured JSON logging correlated with discovery traces."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
import logging
import sys
from typing import TYPE_CHECKING, Any

import orjson

from resource_discovery.observability.context import current_context


if TYPE_CHECKING:
    from resource_discovery.config import Settings


_RECORD_ATTRIBUTES = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """One JSON object per record, carrying the bound trace and query ids."""

    REDACT_KEYS = frozenset({"password", "token", "api_key", "secret", "authorization"})
    MAX_MESSAGE_LEN = 2000
    MAX_FIELD_LEN = 500

    def format(self, record: logging.LogRecord) -> str:
        ctx = current_context()
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "message": self._truncate(record.getMessage(), self.MAX_MESSAGE_LEN),
            "logger": record.name,
            "trace_id": ctx.get("trace_id", ""),
            "span_id": ctx.get("span_id", ""),
        }
        for key in ("query_id", "search_mode"):
            if value := ctx.get(key):
                entry[key] = value

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key in _RECORD_ATTRIBUTES or key.startswith("_"):
                continue
            entry[key] = self._redact(key, value)

        return orjson.dumps(entry, default=self._json_default).decode("utf-8")

    @staticmethod
    def _truncate(text: str, limit: int) -> str:
        return text if len(text) <= limit else text[:limit] + "..."

    def _redact(self, key: str, value: Any) -> Any:
        if key.lower() in self.REDACT_KEYS:
            return "[REDACTED]"
        if isinstance(value, str):
            return self._truncate(value, self.MAX_FIELD_LEN)
        return value

    @staticmethod
    def _json_default(value: Any) -> Any:
        if isinstance(value, Enum):
            return value.value
        if isinstance(value, (set, frozenset)):
            try:
                return sorted(value)
            except TypeError:
                return list(value)
        if isinstance(value, tuple):
            return list(value)
        if isinstance(value, Exception):
            return str(value)
        return repr(value)


def configure_logging(
    level: str = "INFO",
    json_output: bool = True,
    *,
    logger_levels: dict[str, str] | None = None,
) -> None:
    """Replace the root handlers with a single stdout handler.

    Args:
        level: Root log level name, case-insensitive
        json_output: Use :class:`JsonFormatter` when True, a plain text line otherwise
        logger_levels: Per-logger overrides (logger name -> level name)
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    if json_output:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
    root.addHandler(handler)

    for logger_name, logger_level in (logger_levels or {}).items():
        logging.getLogger(logger_name).setLevel(getattr(logging, logger_level.upper(), logging.INFO))


def configure_from_settings(settings: Settings) -> None:
    configure_logging(settings.log_level, settings.log_json)
