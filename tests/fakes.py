"""Test doubles mimicking the SQLAlchemy connection surface used by tsbench."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any

from sqlalchemy.exc import OperationalError

Row = tuple[Any, ...]
Responder = Callable[[str], Iterable[Row]]


class FakeResult:
    """Result object yielding canned rows and tracking whether it was closed."""

    def __init__(self, rows: Iterable[Row], rowcount: int = -1) -> None:
        self.rows = list(rows)
        self.rowcount = rowcount if rowcount >= 0 else len(self.rows)
        self.closed = False

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def close(self) -> None:
        self.closed = True


class FakeConnection:
    """Record executed SQL and answer it through ``responder``.

    Any statement containing ``fail_on`` raises :class:`OperationalError`
    the way SQLAlchemy wraps driver failures.
    """

    def __init__(self, responder: Responder | None = None, *, fail_on: str | None = None) -> None:
        self.responder = responder or (lambda statement: [])
        self.fail_on = fail_on
        self.executed: list[str] = []
        self.execution_options: list[Mapping[str, Any] | None] = []
        self.results: list[FakeResult] = []
        self.commits = 0
        self.rollbacks = 0
        self.closed = False

    def exec_driver_sql(
        self,
        statement: str,
        parameters: Any = None,
        execution_options: Mapping[str, Any] | None = None,
    ) -> FakeResult:
        self.executed.append(statement)
        self.execution_options.append(execution_options)
        if self.fail_on is not None and self.fail_on in statement:
            raise OperationalError(statement, None, Exception("boom"))
        result = FakeResult(self.responder(statement), rowcount=statement.count("INSERT INTO"))
        self.results.append(result)
        return result

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1

    def close(self) -> None:
        self.closed = True
