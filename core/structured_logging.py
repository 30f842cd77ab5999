"""Structured logging helpers with resolution-run correlation context.

Every record carries ``run_id`` (one per CLI run), ``phase`` (traverse,
merge or complete) and ``document`` (the schema file being visited).
"""

from __future__ import annotations

import contextvars
import logging
import os
import uuid
from contextlib import contextmanager
from typing import Any, Callable, Iterator

_RUN_ID_VAR: contextvars.ContextVar[str] = contextvars.ContextVar(
    "run_id", default="-"
)
_PHASE_VAR: contextvars.ContextVar[str] = contextvars.ContextVar(
    "phase", default="-"
)
_DOCUMENT_VAR: contextvars.ContextVar[str] = contextvars.ContextVar(
    "document", default="-"
)


class _RunContextFilter(logging.Filter):
    """Inject run correlation fields into all log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = _RUN_ID_VAR.get("-")
        record.phase = _PHASE_VAR.get("-")
        record.document = _DOCUMENT_VAR.get("-")
        return True


def _ensure_filter_on_root_handlers() -> None:
    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        has_filter = any(isinstance(f, _RunContextFilter) for f in handler.filters)
        if not has_filter:
            handler.addFilter(_RunContextFilter())


def resolve_debug_logging() -> bool:
    """Debug output is on when ``DEBUG`` is set, unless ``SCHEMA_IMPORT_NODEBUG`` is."""
    return bool(os.getenv("DEBUG")) and not os.getenv("SCHEMA_IMPORT_NODEBUG")


def configure_structured_logging(level: int | None = None) -> None:
    """Configure root logging format with run/phase context.

    Without an explicit level, DEBUG is used when ``resolve_debug_logging()``
    says so and INFO otherwise.
    """
    if level is None:
        level = logging.DEBUG if resolve_debug_logging() else logging.INFO
    fmt = (
        "%(asctime)s | %(levelname)s | run_id=%(run_id)s | phase=%(phase)s | "
        "doc=%(document)s | %(name)s | %(message)s"
    )
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(level=level, format=fmt)
    else:
        root_logger.setLevel(level)
        formatter = logging.Formatter(fmt)
        for handler in root_logger.handlers:
            handler.setFormatter(formatter)
    _ensure_filter_on_root_handlers()


def set_run_id(run_id: str | None = None) -> str:
    """Set or generate run correlation ID."""
    value = run_id or str(uuid.uuid4())
    _RUN_ID_VAR.set(value)
    return value


def get_run_id() -> str:
    """Get current run correlation ID."""
    return _RUN_ID_VAR.get("-")


def get_phase() -> str:
    return _PHASE_VAR.get("-")


def get_document() -> str:
    return _DOCUMENT_VAR.get("-")


def bind_context(func: Callable[..., Any]) -> Callable[..., Any]:
    """Wrap ``func`` to run in a copy of the current run/phase context.

    Worker threads start with an empty context, so work handed to a pool
    is wrapped here to keep its log records tagged with the caller's
    run_id and phase.
    """
    context = contextvars.copy_context()

    def run(*args: Any, **kwargs: Any) -> Any:
        return context.copy().run(func, *args, **kwargs)

    return run


@contextmanager
def phase_scope(phase: str) -> Iterator[None]:
    """Temporarily set phase context (traverse, merge, complete) for emitted logs."""
    token = _PHASE_VAR.set(phase)
    try:
        yield
    finally:
        _PHASE_VAR.reset(token)


@contextmanager
def document_scope(location: str) -> Iterator[None]:
    """Tag logs emitted while visiting one schema document."""
    token = _DOCUMENT_VAR.set(location)
    try:
        yield
    finally:
        _DOCUMENT_VAR.reset(token)
