"""Uniform result value returned by every adapter operation."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["Status"]


@dataclass(frozen=True, slots=True)
class Status:
    """Outcome of one insert or query call.

    ``query_result_point_num`` counts the rows returned across all
    sub-queries of a query call and is zero for inserts.
    """

    is_ok: bool
    query_result_point_num: int = 0
    exception: BaseException | None = None
    error_message: str | None = None

    @classmethod
    def ok(cls, query_result_point_num: int = 0) -> "Status":
        return cls(True, query_result_point_num)

    @classmethod
    def failure(cls, exception: BaseException) -> "Status":
        return cls(False, 0, exception, str(exception))

    def __bool__(self) -> bool:
        return self.is_ok
