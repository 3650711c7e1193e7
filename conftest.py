# SPDX-License-Identifier: MIT
"""Pytest bootstrap.

Ensures the repository root is importable so tests resolve the in-tree
``tsbench`` package without installing it, and registers the markers used
across the suite.
"""

from __future__ import annotations

import os
import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: requires a live SQL Server reachable through TSBENCH_MSSQL_HOST",
    )


def pytest_report_header(config: pytest.Config) -> str:
    host = os.environ.get("TSBENCH_MSSQL_HOST")
    return f"tsbench integration target: {host or 'not configured'}"
