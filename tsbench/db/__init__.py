"""Database connectivity and the SQL Server storage adapter."""

from tsbench.exceptions import DatabaseError, DBConnectError, InvalidIdentifierError

from .access import StatementExecutor, SupportsDriverSql
from .config import BenchmarkConfig, DatabaseRuntimeConfig, DatabaseSettings, FleetConfig
from .engine import create_engine_from_config, open_connection
from .mssql import MsSqlServerAdapter, SeriesKeyEncoder
from .status import Status

__all__ = [
    "BenchmarkConfig",
    "DBConnectError",
    "DatabaseError",
    "DatabaseRuntimeConfig",
    "DatabaseSettings",
    "FleetConfig",
    "InvalidIdentifierError",
    "MsSqlServerAdapter",
    "SeriesKeyEncoder",
    "StatementExecutor",
    "Status",
    "SupportsDriverSql",
    "create_engine_from_config",
    "open_connection",
]
