"""Rendering of Python values as T-SQL literals."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any

from tsbench.schema.types import PhysicalType

__all__ = ["TIMESTAMP_FORMAT", "format_timestamp", "render_threshold", "render_value"]

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_timestamp(timestamp_ms: int) -> str:
    """Render epoch milliseconds as ``YYYY-MM-dd HH:mm:ss`` in UTC.

    Milliseconds are truncated: the stored precision is one second.
    """

    instant = datetime.fromtimestamp(timestamp_ms // 1_000, tz=timezone.utc)
    return instant.strftime(TIMESTAMP_FORMAT)


def _require_finite(number: float) -> None:
    if isinstance(number, float) and not math.isfinite(number):
        raise ValueError(f"{number!r} has no T-SQL literal")


def render_value(value: Any, physical: PhysicalType) -> str:
    """Render one reading; ``None`` becomes ``NULL`` in every column type."""

    if value is None:
        return "NULL"
    if physical is PhysicalType.BIT:
        return "1" if value else "0"
    if physical is PhysicalType.TEXT:
        return f"'{value}'"
    _require_finite(value)
    return str(value)


def render_threshold(threshold: float) -> str:
    number = float(threshold)
    _require_finite(number)
    return repr(number)
