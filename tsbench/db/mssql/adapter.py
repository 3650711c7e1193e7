"""SQL Server implementation of the benchmark storage adapter.

One adapter instance belongs to one benchmark client thread and owns a single
connection from :meth:`MsSqlServerAdapter.init` to
:meth:`MsSqlServerAdapter.close`. Rows live in one table per physical value
type (see :mod:`tsbench.db.mssql.schema`), keyed by the series key of
:mod:`tsbench.db.mssql.encoding` and the timestamp.

Insert and query failures are reported through :class:`~tsbench.db.status.Status`
and never retried. Connection failures and malformed identifiers raise.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from types import TracebackType

from sqlalchemy.exc import SQLAlchemyError

from tsbench.exceptions import DatabaseError, DBConnectError
from tsbench.schema.device import DeviceSchema
from tsbench.schema.registry import SensorTypeLookup
from tsbench.utils.logging import StructuredLogger, get_logger
from tsbench.workload.ingestion import Batch
from tsbench.workload.queries import (
    AggRangeQuery,
    AggRangeValueQuery,
    AggValueQuery,
    GroupByQuery,
    LatestPointQuery,
    PreciseQuery,
    RangeQuery,
    ValueRangeQuery,
)

from ..access import StatementExecutor, SupportsDriverSql
from ..config import BenchmarkConfig, DatabaseSettings
from ..engine import open_connection
from ..status import Status
from .encoding import SeriesKeyEncoder
from .query import MsSqlQueryBuilder
from .schema import MsSqlSchemaCompiler
from .writer import MsSqlBatchWriter

__all__ = ["ConnectionFactory", "MsSqlServerAdapter"]

ConnectionFactory = Callable[[DatabaseSettings], SupportsDriverSql]


class MsSqlServerAdapter:
    """Runs benchmark inserts and queries against Microsoft SQL Server."""

    def __init__(
        self,
        config: BenchmarkConfig,
        registry: SensorTypeLookup,
        *,
        connection_factory: ConnectionFactory | None = None,
        logger: StructuredLogger | None = None,
    ) -> None:
        settings = config.database
        self._settings = settings
        self._encoder = SeriesKeyEncoder.from_fleet(config.fleet)
        self._schema = MsSqlSchemaCompiler(settings.db_name, settings.compression)
        self._writer = MsSqlBatchWriter(settings.db_name, self._encoder, registry)
        self._queries = MsSqlQueryBuilder(settings.db_name, self._encoder)
        self._connection_factory = connection_factory or open_connection
        self._executor: StatementExecutor | None = None
        self._logger = logger or get_logger(__name__)

    @property
    def encoder(self) -> SeriesKeyEncoder:
        return self._encoder

    @property
    def schema_compiler(self) -> MsSqlSchemaCompiler:
        return self._schema

    # ------------------------------------------------------------------
    # Lifecycle
    def init(self) -> None:
        """Open the connection; called once per adapter instance."""

        with self._logger.operation(
            "init", host=self._settings.host, port=self._settings.port, database=self._settings.db_name
        ):
            try:
                connection = self._connection_factory(self._settings)
            except (SQLAlchemyError, OSError) as exc:
                raise DBConnectError("Connect Error!") from exc
        self._executor = StatementExecutor(connection)

    def cleanup(self) -> None:
        """Drop every table of the benchmark database, best effort."""

        executor = self._require_executor()
        for statement in self._schema.drop_table_statements():
            try:
                executor.execute(statement)
            except SQLAlchemyError as exc:
                self._logger.failure("No need to clean!", exc, level=logging.WARNING, statement=statement)

    def close(self) -> None:
        """Release the connection. Safe to call on an adapter that never connected."""

        executor, self._executor = self._executor, None
        if executor is None:
            return
        try:
            executor.close()
        except SQLAlchemyError as exc:
            raise DatabaseError("Failed to close") from exc

    def __enter__(self) -> "MsSqlServerAdapter":
        self.init()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def register_schema(self, device_schemas: Sequence[DeviceSchema]) -> None:
        """Create the per-type tables.

        Tables are shared by all devices, so ``device_schemas`` only matters for
        logging. A table that cannot be created (usually because it exists) is
        logged and skipped.
        """

        executor = self._require_executor()
        created = 0
        for statement in self._schema.create_table_statements():
            try:
                executor.execute(statement)
            except SQLAlchemyError as exc:
                self._logger.failure("Failed to register", exc, level=logging.WARNING, statement=statement)
            else:
                created += 1
        self._logger.info("Registered schema", devices=len(device_schemas), tables_created=created)

    # ------------------------------------------------------------------
    # Ingestion
    def insert_batch(self, batch: Batch) -> Status:
        return self._write("insert_batch", self._writer.insert_statements(batch))

    def insert_single_sensor_batch(self, batch: Batch) -> Status:
        return self._write("insert_single_sensor_batch", self._writer.single_sensor_statements(batch))

    # ------------------------------------------------------------------
    # Queries
    def precise_query(self, query: PreciseQuery) -> Status:
        return self._count("precise_query", self._queries.precise(query))

    def range_query(self, query: RangeQuery) -> Status:
        return self._count("range_query", self._queries.range(query))

    def value_range_query(self, query: ValueRangeQuery) -> Status:
        return self._count("value_range_query", self._queries.value_range(query))

    def agg_range_query(self, query: AggRangeQuery) -> Status:
        return self._count("agg_range_query", self._queries.agg_range(query))

    def agg_value_query(self, query: AggValueQuery) -> Status:
        return self._count("agg_value_query", self._queries.agg_value(query))

    def agg_range_value_query(self, query: AggRangeValueQuery) -> Status:
        return self._count("agg_range_value_query", self._queries.agg_range_value(query))

    def group_by_query(self, query: GroupByQuery) -> Status:
        return self._count("group_by_query", self._queries.group_by(query))

    def latest_point_query(self, query: LatestPointQuery) -> Status:
        return self._count("latest_point_query", self._queries.latest_point(query))

    def range_query_order_by_desc(self, query: RangeQuery) -> Status:
        return self._count("range_query_order_by_desc", self._queries.range_order_by_desc(query))

    def value_range_query_order_by_desc(self, query: ValueRangeQuery) -> Status:
        return self._count(
            "value_range_query_order_by_desc", self._queries.value_range_order_by_desc(query)
        )

    # ------------------------------------------------------------------
    # Internal helpers
    def _require_executor(self) -> StatementExecutor:
        if self._executor is None:
            raise DBConnectError("Adapter is not connected; call init() first")
        return self._executor

    def _write(self, operation: str, statements: Sequence[str]) -> Status:
        executor = self._require_executor()
        try:
            executor.execute_batch(statements)
        except SQLAlchemyError as exc:
            self._logger.failure(
                "Write batch failed", exc, operation=operation, statements=len(statements)
            )
            return Status.failure(exc)
        return Status.ok()

    def _count(self, operation: str, statements: Sequence[str]) -> Status:
        executor = self._require_executor()
        result = 0
        for statement in statements:
            try:
                result += executor.count_rows(statement)
            except SQLAlchemyError as exc:
                self._logger.failure(f"{operation} Error!", exc, statement=statement)
                return Status.failure(exc)
        return Status.ok(result)
