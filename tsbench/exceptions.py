"""Exceptions raised by the tsbench storage adapter."""

from __future__ import annotations

__all__ = ["DBConnectError", "DatabaseError", "InvalidIdentifierError"]


class DatabaseError(RuntimeError):
    """Base class for database access related failures."""


class DBConnectError(DatabaseError):
    """The adapter could not reach the server and cannot proceed."""


class InvalidIdentifierError(DatabaseError, ValueError):
    """A group, device or sensor identifier could not be mapped to an ordinal."""
