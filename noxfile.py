"""Nox sessions for tsbench automation."""

from __future__ import annotations

import os
import pathlib

import nox

REPO_ROOT = pathlib.Path(__file__).parent

nox.options.sessions = ["tests-3.11", "tests-3.12", "lint"]
nox.options.error_on_missing_interpreters = False


def _install_requirements(session: nox.Session, extra: str = "test") -> None:
    session.install("-e", f".[{extra}]")


@nox.session(name="tests-3.11", python="3.11")
def tests_3_11(session: nox.Session) -> None:
    """Run the primary pytest suite under Python 3.11."""

    _install_requirements(session)
    session.run(
        "pytest",
        "tests/unit/",
        "tests/property/",
        "tests/integration/",
        env={"PYTHONPATH": str(REPO_ROOT)},
    )


@nox.session(name="tests-3.12", python="3.12")
def tests_3_12(session: nox.Session) -> None:
    """Run the pytest suite under Python 3.12."""

    _install_requirements(session)
    session.run(
        "pytest",
        "tests/unit/",
        "tests/property/",
        env={"PYTHONPATH": str(REPO_ROOT)},
    )


@nox.session
def integration(session: nox.Session) -> None:
    """Run the live SQL Server suite; needs ``TSBENCH_MSSQL_HOST``.

    The pytest module skips itself without a server, so this session refuses
    to start instead of reporting a green run that checked nothing.
    """

    if not os.environ.get("TSBENCH_MSSQL_HOST"):
        session.error("TSBENCH_MSSQL_HOST must point at a SQL Server instance")
    _install_requirements(session)
    session.run(
        "pytest",
        "-m",
        "integration",
        "-rs",
        "tests/integration/",
        env={"PYTHONPATH": str(REPO_ROOT)},
    )


@nox.session
def lint(session: nox.Session) -> None:
    """Run linters via ruff and mypy."""

    _install_requirements(session, extra="dev")
    session.run("ruff", "check", str(REPO_ROOT / "tsbench"), str(REPO_ROOT / "tests"))
    session.run("mypy", "tsbench")
