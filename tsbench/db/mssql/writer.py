"""Translation of ingestion batches into INSERT statements."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from tsbench.schema.registry import SensorTypeLookup
from tsbench.schema.types import PhysicalType, physical_type
from tsbench.workload.ingestion import Batch

from .encoding import SeriesKeyEncoder
from .literals import format_timestamp, render_value
from .schema import table_name

__all__ = ["MsSqlBatchWriter"]


class MsSqlBatchWriter:
    """Build one literal-valued INSERT per stored row.

    The destination table of each row follows the sensor's declared type as
    reported by the schema registry.
    """

    def __init__(self, db_name: str, encoder: SeriesKeyEncoder, registry: SensorTypeLookup) -> None:
        self._db_name = db_name
        self._encoder = encoder
        self._registry = registry

    def insert_statements(self, batch: Batch) -> list[str]:
        """Statements for a multi-sensor batch: one row per sensor per record."""

        if batch.is_single_sensor:
            return self.single_sensor_statements(batch)
        schema = batch.device_schema
        targets = [
            self._target(schema.device, sensor, key)
            for sensor, key in zip(schema.sensors, self._encoder.series_keys(schema))
        ]
        statements = []
        for record in batch.records:
            time = format_timestamp(record.timestamp)
            for target, value in zip(targets, record.values):
                statements.append(_insert(target, time, value))
        return statements

    def single_sensor_statements(self, batch: Batch) -> list[str]:
        """Statements for a batch pinned to ``batch.col_index``."""

        if batch.col_index is None:
            raise ValueError("single-sensor batches must set col_index")
        schema = batch.device_schema
        key = self._encoder.series_keys(schema)[batch.col_index]
        target = self._target(schema.device, schema.sensors[batch.col_index], key)
        return [
            _insert(target, format_timestamp(record.timestamp), record.values[0])
            for record in batch.records
        ]

    def _target(self, device: str, sensor: str, series_key: int) -> "_Target":
        physical = physical_type(self._registry.sensor_value_type(device, sensor))
        return _Target(table_name(self._db_name, physical), physical, series_key)


@dataclass(frozen=True, slots=True)
class _Target:
    table: str
    physical: PhysicalType
    series_key: int


def _insert(target: _Target, time: str, value: Any) -> str:
    return (
        f"INSERT INTO {target.table} "
        f"VALUES ({target.series_key},'{time}',{render_value(value, target.physical)})"
    )
