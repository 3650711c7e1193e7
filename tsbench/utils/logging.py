# SPDX-License-Identifier: MIT
"""Structured JSON logging utilities for tsbench.

Database adapters log through :class:`StructuredLogger` so every record carries
the correlation identifier of the benchmark client that produced it together
with arbitrary keyword fields (table names, statement counts, durations).
"""
from __future__ import annotations

import json
import logging
import sys
import time
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Iterator, Optional
from uuid import uuid4


_CORRELATION_ID_VAR: ContextVar[Optional[str]] = ContextVar(
    "tsbench_correlation_id", default=None
)


def generate_correlation_id() -> str:
    """Generate a new correlation identifier."""

    return uuid4().hex


def get_correlation_id() -> Optional[str]:
    """Return the currently active correlation identifier, if any."""

    return _CORRELATION_ID_VAR.get()


@contextmanager
def correlation_context(correlation_id: Optional[str] = None) -> Iterator[str]:
    """Bind a correlation identifier for the duration of the block."""

    resolved = correlation_id or generate_correlation_id()
    token = _CORRELATION_ID_VAR.set(resolved)
    try:
        yield resolved
    finally:
        _CORRELATION_ID_VAR.reset(token)


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if hasattr(record, "correlation_id"):
            log_data["correlation_id"] = record.correlation_id

        if hasattr(record, "extra_fields"):
            log_data.update(record.extra_fields)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class StructuredLogger:
    """Wrapper around a standard logger that accepts keyword fields."""

    def __init__(self, name: str, correlation_id: Optional[str] = None):
        self.logger = logging.getLogger(name)
        self._correlation_id = correlation_id

    def _resolve_correlation_id(self, explicit: Optional[str] = None) -> str:
        if explicit:
            return explicit

        current = get_correlation_id()
        if current:
            return current

        if self._correlation_id is None:
            self._correlation_id = generate_correlation_id()
        return self._correlation_id

    def _log(self, level: int, msg: str, **kwargs: Any) -> None:
        correlation_id = kwargs.pop("correlation_id", None)
        resolved_id = self._resolve_correlation_id(correlation_id)
        extra_data: Dict[str, Any] = {"correlation_id": resolved_id}
        if kwargs:
            extra_data["extra_fields"] = kwargs
        self.logger.log(level, msg, extra=extra_data)

    def debug(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, **kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, **kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, **kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, msg, **kwargs)

    def failure(
        self, msg: str, error: BaseException, *, level: int = logging.ERROR, **kwargs: Any
    ) -> None:
        """Log a handled error as ``error_type`` and ``error_message`` fields."""
        self._log(
            level,
            msg,
            error_type=type(error).__name__,
            error_message=str(error),
            **kwargs,
        )

    @contextmanager
    def operation(
        self, operation_name: str, *, correlation_id: Optional[str] = None, **context: Any
    ) -> Iterator[Dict[str, Any]]:
        """Track timing and outcome of an operation.

        Args:
            operation_name: Name of the operation being tracked
            **context: Additional context fields to log

        Yields:
            Dictionary the caller may enrich with result fields

        Example:
            >>> logger = StructuredLogger("tsbench.db")
            >>> with logger.operation("register_schema", tables=5) as op:
            ...     op["created"] = 5
        """
        start_time = time.perf_counter()
        resolved_id = self._resolve_correlation_id(correlation_id)
        op_context: Dict[str, Any] = {"operation": operation_name, **context}

        with correlation_context(resolved_id):
            self.debug(f"Starting operation: {operation_name}", **op_context)

            try:
                yield op_context
            except Exception as e:
                op_context.setdefault("status", "failure")
                self.failure(
                    f"Failed operation: {operation_name}",
                    e,
                    **op_context,
                    duration_seconds=time.perf_counter() - start_time,
                )
                raise
            op_context.setdefault("status", "success")
            self.info(
                f"Completed operation: {operation_name}",
                **op_context,
                duration_seconds=time.perf_counter() - start_time,
            )


def configure_logging(
    level: str = "INFO",
    use_json: bool = True,
    stream: Any = None
) -> None:
    """Configure application-wide logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        use_json: Whether to use JSON formatting
        stream: Output stream (defaults to sys.stdout)
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stdout)
    if use_json:
        json_formatter: logging.Formatter = JSONFormatter()
        handler.setFormatter(json_formatter)
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        handler.setFormatter(formatter)
    root_logger.addHandler(handler)


def get_logger(name: str, correlation_id: Optional[str] = None) -> StructuredLogger:
    """Return a structured logger, typically for ``__name__``."""

    return StructuredLogger(name, correlation_id)


__all__ = [
    "JSONFormatter",
    "StructuredLogger",
    "configure_logging",
    "get_logger",
    "correlation_context",
    "generate_correlation_id",
    "get_correlation_id",
]
