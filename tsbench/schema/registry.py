"""Lookup of the declared value type of every sensor in the fleet."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Protocol

from .device import DeviceSchema
from .types import ValueType

__all__ = ["SchemaRegistry", "SensorTypeLookup"]


class SensorTypeLookup(Protocol):
    """Minimal surface the storage adapter needs from a schema registry."""

    def sensor_value_type(self, device: str, sensor: str) -> ValueType:  # pragma: no cover - protocol
        """Return the declared type of ``sensor`` on ``device``."""


class SchemaRegistry:
    """In-memory registry built once from the workload description.

    The registry is populated before the benchmark starts and only read
    afterwards.
    """

    def __init__(self) -> None:
        self._types: dict[tuple[str, str], ValueType] = {}
        self._devices: dict[str, DeviceSchema] = {}

    @classmethod
    def from_mapping(
        cls,
        schemas: Iterable[DeviceSchema],
        types: Mapping[str, Mapping[str, ValueType | str]],
    ) -> "SchemaRegistry":
        """Build a registry from ``{device: {sensor: type}}``."""

        registry = cls()
        for schema in schemas:
            registry.register(schema, types[schema.device])
        return registry

    def register(self, schema: DeviceSchema, sensor_types: Mapping[str, ValueType | str]) -> None:
        missing = [sensor for sensor in schema.sensors if sensor not in sensor_types]
        if missing:
            msg = f"No value type declared for sensors {missing} of {schema.device}"
            raise ValueError(msg)
        self._devices[schema.device] = schema
        for sensor in schema.sensors:
            self._types[(schema.device, sensor)] = ValueType(sensor_types[sensor])

    def sensor_value_type(self, device: str, sensor: str) -> ValueType:
        try:
            return self._types[(device, sensor)]
        except KeyError:
            raise KeyError(f"Sensor {sensor!r} of device {device!r} is not registered") from None

    def device_schema(self, device: str) -> DeviceSchema:
        return self._devices[device]

    def device_schemas(self) -> tuple[DeviceSchema, ...]:
        return tuple(self._devices.values())

    def __len__(self) -> int:
        return len(self._types)
