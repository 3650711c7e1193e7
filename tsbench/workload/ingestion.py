"""Ingestion payloads handed to storage adapters by the benchmark driver."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from tsbench.schema.device import DeviceSchema

__all__ = ["Batch", "Record"]


@dataclass(frozen=True, slots=True)
class Record:
    """Values of one device at one instant.

    ``timestamp`` is expressed in milliseconds since the Unix epoch and
    ``values`` follows the sensor order of the owning batch.
    """

    timestamp: int
    values: tuple[Any, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))


@dataclass(frozen=True, slots=True)
class Batch:
    """Records of a single device.

    When ``col_index`` is set the batch is a single-sensor batch: each record
    carries exactly one value, destined for ``device_schema.sensors[col_index]``.
    """

    device_schema: DeviceSchema
    records: tuple[Record, ...] = field(default_factory=tuple)
    col_index: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "records", tuple(self.records))
        if self.col_index is None:
            width = len(self.device_schema.sensors)
            for record in self.records:
                if len(record.values) != width:
                    msg = (
                        f"Record at {record.timestamp} has {len(record.values)} values, "
                        f"expected {width} for {self.device_schema.device}"
                    )
                    raise ValueError(msg)
            return
        if not 0 <= self.col_index < len(self.device_schema.sensors):
            raise ValueError(f"col_index {self.col_index} is outside the sensor list")
        if any(len(record.values) != 1 for record in self.records):
            raise ValueError("Single-sensor batches carry exactly one value per record")

    @property
    def is_single_sensor(self) -> bool:
        return self.col_index is not None

    def __len__(self) -> int:
        return len(self.records)
