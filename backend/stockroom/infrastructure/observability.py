"""Structured Logging — JSON and text formatters for catalog operation logs.

Invariants:
    - Every record carries timestamp, level, logger name, and message
    - Catalog fields (operation, item_id, collection, item_count, error_code, path)
      are emitted whenever a call site passes them via extra=
    - setup_logging is idempotent: calling it again replaces its own handler,
      it never stacks a second one

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - Text format appends the same catalog fields as key=value pairs, so a
      dev console shows which item and operation a line is about
    - sqlalchemy.engine pinned to WARNING: per-statement INFO lines would
      drown the one-line-per-remote-call orchestrator log
"""

import logging
import json
from datetime import datetime, timezone

EXTRA_FIELDS = (
    "operation", "item_id", "collection", "item_count", "error_code", "path",
)

_HANDLER_NAME = "stockroom"


def _catalog_fields(record: logging.LogRecord) -> dict:
    return {
        key: record.__dict__[key] for key in EXTRA_FIELDS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line, catalog fields at top level."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_catalog_fields(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


class CatalogTextFormatter(logging.Formatter):
    """Human-readable line with catalog fields appended as key=value."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = _catalog_fields(record)
        if not fields:
            return line
        return line + " " + " ".join(f"{k}={v}" for k, v in fields.items())


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install (or replace) the application handler on the root logger."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else CatalogTextFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    return handler
