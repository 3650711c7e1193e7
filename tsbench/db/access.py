"""Scoped statement execution over the adapter's single connection.

The :class:`StatementExecutor` wraps a SQLAlchemy :class:`~sqlalchemy.engine.Connection`
(or anything exposing the same ``exec_driver_sql``/``commit``/``rollback``/``close``
surface) and guarantees that:

* every result object is closed before the call returns, on success and on
  failure alike;
* mutating statements are committed on success and rolled back on failure;
* SQL text is handed to the driver verbatim, without parameter substitution.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from contextlib import suppress
from dataclasses import dataclass
from typing import Any, Mapping, Protocol, TypeVar

from sqlalchemy.exc import SQLAlchemyError

ResultT = TypeVar("ResultT")

__all__ = ["StatementExecutor", "SupportsDriverSql"]

# Literal SQL may contain characters that look like pyformat markers.
_NO_PARAMETERS: Mapping[str, Any] = {"no_parameters": True}


class SupportsDriverSql(Protocol):
    """Protocol representing the minimum surface of a SQLAlchemy connection."""

    def exec_driver_sql(
        self,
        statement: str,
        parameters: Any = None,
        execution_options: Mapping[str, Any] | None = None,
    ) -> Any:  # pragma: no cover - runtime duck typing
        """Execute SQL text directly on the DBAPI cursor."""

    def commit(self) -> None:  # pragma: no cover - runtime duck typing
        """Commit the current transaction."""

    def rollback(self) -> None:  # pragma: no cover - runtime duck typing
        """Rollback the current transaction."""

    def close(self) -> None:  # pragma: no cover - runtime duck typing
        """Close the connection and release the underlying resources."""


@dataclass(slots=True)
class StatementExecutor:
    """Run SQL text against one exclusively owned connection.

    Parameters
    ----------
    connection:
        Open connection; the executor never reconnects.
    """

    connection: SupportsDriverSql

    # ------------------------------------------------------------------
    # Public helpers
    def execute(self, statement: str) -> int:
        """Execute a mutating statement and commit it.

        Returns the affected row count reported by the driver, ``-1`` when
        unknown. On failure the transaction is rolled back and the exception
        is propagated to the caller.
        """

        def _command(result: Any) -> int:
            return int(getattr(result, "rowcount", -1))

        return self._run(statement, _command, commit_on_success=True)

    def execute_batch(self, statements: Sequence[str]) -> int:
        """Submit ``statements`` as one batch in a single round trip.

        SQL Server stops the batch at the first failing statement.
        """

        if not statements:
            return 0
        return self.execute(";\n".join(statements))

    def count_rows(self, query: str) -> int:
        """Execute *query* and drain its result set, returning the row count."""

        def _command(result: Any) -> int:
            return sum(1 for _ in result)

        return self._run(query, _command, commit_on_success=False)

    def fetch_all(self, query: str) -> list[Any]:
        """Execute *query* and return all rows."""

        def _command(result: Any) -> list[Any]:
            return list(result)

        return self._run(query, _command, commit_on_success=False)

    def close(self) -> None:
        self.connection.close()

    # ------------------------------------------------------------------
    # Internal helpers
    def _run(
        self,
        statement: str,
        command: Callable[[Any], ResultT],
        *,
        commit_on_success: bool,
    ) -> ResultT:
        result = None
        try:
            result = self.connection.exec_driver_sql(
                statement, execution_options=_NO_PARAMETERS
            )
            value = command(result)
        except Exception:
            # keep the statement error if the rollback fails as well
            with suppress(SQLAlchemyError):
                self.connection.rollback()
            raise
        else:
            if commit_on_success:
                self.connection.commit()
            return value
        finally:
            close = getattr(result, "close", None)
            if callable(close):
                close()
