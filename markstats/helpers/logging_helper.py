"""
Logging helpers: identity/role tags derived from logger names plus per-cycle context.

Every module logs through ``logging.getLogger(__name__)``. StatsLogFilter turns the
module suffix into readable tags so a line reads like:

    2024-01-01 12:00:00 INFO [Mount Coordinator] [Service] [cycle=3 mount=markstats-section] Rendered

Suffix → role:
- _svc    → [Service]
- _wf     → [Workflow]
- _comp   → [Component]
- _helper → [Helper]
- _dto    → [DTO]
- _cli    → [CLI]

Anything else (third-party loggers, package modules) keeps the full logger name.
"""

from __future__ import annotations

import contextvars
import logging
from typing import Any

_ROLE_SUFFIXES: dict[str, str] = {
    "_svc": "[Service]",
    "_wf": "[Workflow]",
    "_comp": "[Component]",
    "_helper": "[Helper]",
    "_dto": "[DTO]",
    "_cli": "[CLI]",
}

_log_context: contextvars.ContextVar[dict[str, Any] | None] = contextvars.ContextVar(
    "markstats_log_context", default=None
)

LOG_FORMAT = "%(asctime)s %(levelname)s %(stats_identity_tag)s %(stats_role_tag)s %(context_str)s%(message)s"


def set_log_context(**kwargs: Any) -> None:
    """
    Add key/value pairs to the logging context of the current task.

    Context is stored in a ContextVar, so each asyncio task sees its own copy.
    """
    current = dict(_log_context.get() or {})
    current.update(kwargs)
    _log_context.set(current)


def clear_log_context() -> None:
    """Drop all context values for the current task."""
    _log_context.set(None)


def get_log_context() -> dict[str, Any]:
    """Return a copy of the current logging context."""
    return dict(_log_context.get() or {})


def _derive_tags(name: str) -> tuple[str, str]:
    """Split a logger name into (identity_tag, role_tag)."""
    module = name.rsplit(".", 1)[-1]
    for suffix, role in _ROLE_SUFFIXES.items():
        if module.endswith(suffix):
            stem = module[: -len(suffix)]
            if not stem:
                return name, ""
            words = [part.capitalize() for part in stem.split("_") if part]
            return f"[{' '.join(words)}]", role
    return name, ""


class StatsLogFilter(logging.Filter):
    """
    Attach identity/role tags and context to every record.

    Never suppresses a record and never raises.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            identity, role = _derive_tags(str(record.name or ""))
        except Exception:
            identity, role = str(getattr(record, "name", "")), ""
        record.stats_identity_tag = identity
        record.stats_role_tag = role

        context = _log_context.get()
        if context:
            pairs = " ".join(f"{k}={v}" for k, v in context.items())
            record.context_str = f"[{pairs}] "
        else:
            record.context_str = ""
        return True


def configure_logging(level: str | int = "INFO") -> None:
    """
    Configure root logging once for the whole process.

    Safe to call more than once: an existing markstats handler is reused.
    """
    root = logging.getLogger()
    root.setLevel(level if isinstance(level, int) else level.upper())

    for handler in root.handlers:
        if getattr(handler, "_markstats", False):
            return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(StatsLogFilter())
    handler._markstats = True  # type: ignore[attr-defined]
    root.addHandler(handler)
