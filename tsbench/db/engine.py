"""Helpers for opening the adapter's single SQL Server connection."""

from __future__ import annotations

from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.pool import NullPool

from .config import DatabaseRuntimeConfig, DatabaseSettings

__all__ = ["create_engine_from_config", "open_connection"]


def _build_connect_args(runtime: DatabaseRuntimeConfig) -> dict[str, Any]:
    """Return connection keyword arguments compatible with pymssql."""

    return {
        "login_timeout": int(runtime.login_timeout_seconds),
        "appname": runtime.application_name,
    }


def create_engine_from_config(settings: DatabaseSettings) -> Engine:
    """Instantiate a SQLAlchemy engine that never pools connections.

    Every adapter owns exactly one connection for its lifetime, so the engine
    is only a factory and :class:`NullPool` closes the DBAPI connection as
    soon as the adapter releases it.
    """

    return create_engine(
        settings.url(),
        echo=settings.echo_statements,
        poolclass=NullPool,
        connect_args=_build_connect_args(settings.runtime),
    )


def open_connection(settings: DatabaseSettings) -> Connection:
    """Open an autocommit connection to the configured server.

    Each statement commits on its own, so a failing batch may leave the
    statements that preceded the failure applied.
    """

    connection = create_engine_from_config(settings).connect()
    return connection.execution_options(isolation_level="AUTOCOMMIT")
