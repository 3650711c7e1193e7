"""Typed configuration objects for the SQL Server adapter."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

__all__ = [
    "BenchmarkConfig",
    "DatabaseRuntimeConfig",
    "DatabaseSettings",
    "FleetConfig",
]


class FleetConfig(BaseModel):
    """Static fleet dimensions shared by every benchmark client."""

    model_config = ConfigDict(frozen=True)

    group_number: PositiveInt = Field(
        ..., description="Number of groups the fleet's devices are spread across."
    )
    device_number: PositiveInt = Field(
        ..., description="Total number of devices in the fleet."
    )
    sensor_number: PositiveInt = Field(
        ..., description="Number of sensors attached to every device."
    )

    @model_validator(mode="after")
    def _validate_topology(self) -> "FleetConfig":
        if self.group_number > self.device_number:
            raise ValueError("group_number must not exceed device_number")
        return self

    def group_of(self, device_ordinal: int) -> int:
        """Return the ordinal of the group owning ``device_ordinal``."""

        return device_ordinal % self.group_number


class DatabaseRuntimeConfig(BaseModel):
    """Session level options applied when the connection is opened."""

    model_config = ConfigDict(frozen=True)

    application_name: str = Field(
        "tsbench",
        min_length=1,
        description="Program name reported to SQL Server (visible in sys.dm_exec_sessions).",
    )
    login_timeout_seconds: PositiveInt = Field(
        5,
        description="Timeout, in seconds, for establishing the connection.",
    )


class DatabaseSettings(BaseSettings):
    """Endpoint, credentials and table options of the target server.

    Values can be supplied through ``TSBENCH_DB_*`` environment variables,
    e.g. ``TSBENCH_DB_HOST`` or ``TSBENCH_DB_RUNTIME__LOGIN_TIMEOUT_SECONDS``.
    """

    model_config = SettingsConfigDict(
        env_prefix="TSBENCH_DB_",
        env_nested_delimiter="__",
        frozen=True,
    )

    host: str = Field("127.0.0.1", min_length=1)
    port: PositiveInt = Field(1433, le=65_535)
    db_name: str = Field(
        "test",
        pattern=r"^[A-Za-z_][A-Za-z0-9_]*$",
        description="Database name; also the prefix of every physical table.",
    )
    username: str = Field("sa", min_length=1)
    password: SecretStr = Field(SecretStr(""), description="Password of ``username``.")
    compression: Literal["NONE", "ROW", "PAGE"] | None = Field(
        default=None,
        description="DATA_COMPRESSION applied to created tables. Null omits the clause.",
    )
    driver: str = Field(
        "mssql+pymssql",
        description="SQLAlchemy dialect+driver name used to open the connection.",
    )
    runtime: DatabaseRuntimeConfig = Field(default_factory=DatabaseRuntimeConfig)
    echo_statements: bool = Field(
        False,
        description="Enable SQLAlchemy statement logging. Very noisy under benchmark load.",
    )

    def url(self) -> URL:
        return URL.create(
            self.driver,
            username=self.username,
            password=self.password.get_secret_value() or None,
            host=self.host,
            port=self.port,
            database=self.db_name,
        )


class BenchmarkConfig(BaseModel):
    """Complete configuration handed to a storage adapter at construction."""

    model_config = ConfigDict(frozen=True)

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    fleet: FleetConfig
