"""Logging context: ContextVar-based log enrichment for request handling.

Every log record is automatically enriched with an ``[op:button]`` prefix
via a `ContextFilter` attached to the root logger handlers.

Operation codes: ``page`` (GET /), ``click`` (POST /), ``shutdown``.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar

ctx_operation: ContextVar[str | None] = ContextVar("ctx_operation", default=None)
ctx_button_id: ContextVar[int | None] = ContextVar("ctx_button_id", default=None)


class ContextFilter(logging.Filter):
    """Inject ContextVar values into every LogRecord as ``record.ctx``."""

    def filter(self, record: logging.LogRecord) -> bool:
        op = ctx_operation.get(None)
        button_id = ctx_button_id.get(None)
        parts: list[str] = []
        if op:
            parts.append(op)
        if button_id is not None:
            parts.append(str(button_id))
        record.ctx = f"[{':'.join(parts)}] " if parts else ""
        return True


def set_log_context(
    *,
    operation: str | None = None,
    button_id: int | None = None,
) -> None:
    """Set logging context for the current asyncio task.

    Values propagate to all coroutines called within the same task and to
    worker threads started through ``asyncio.to_thread()``.
    """
    if operation is not None:
        ctx_operation.set(operation)
    if button_id is not None:
        ctx_button_id.set(button_id)
