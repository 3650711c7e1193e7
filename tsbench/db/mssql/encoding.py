"""Mapping of (group, device, sensor) identifiers to a single series key.

SQL Server has no notion of a series, so every row carries one ``bigint``
identifying its sensor. The key is derived from the ordinals embedded in the
identifiers::

    prefix = S * D * (device + G * group)
    key    = prefix + sensor

with ``G``, ``D`` and ``S`` the fleet's group, device and sensor counts.
Devices are numbered across the whole fleet and ``group == device % G``;
the encoder rejects any other pairing, which keeps the mapping injective and
reversible.
"""

from __future__ import annotations

from dataclasses import dataclass

from tsbench.db.config import FleetConfig
from tsbench.exceptions import InvalidIdentifierError
from tsbench.schema.device import DeviceSchema, parse_ordinal

__all__ = ["SeriesKeyEncoder"]


@dataclass(frozen=True, slots=True)
class SeriesKeyEncoder:
    group_number: int
    device_number: int
    sensor_number: int

    def __post_init__(self) -> None:
        for name in ("group_number", "device_number", "sensor_number"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")

    @classmethod
    def from_fleet(cls, fleet: FleetConfig) -> "SeriesKeyEncoder":
        return cls(fleet.group_number, fleet.device_number, fleet.sensor_number)

    def encode(self, group: str, device: str, sensor: str | None = None) -> int:
        """Return the series key, or the device's prefix when ``sensor`` is omitted."""

        group_ordinal = parse_ordinal(group)
        device_ordinal = parse_ordinal(device)
        sensor_ordinal = 0 if sensor is None else parse_ordinal(sensor)
        return self.encode_ordinals(group_ordinal, device_ordinal, sensor_ordinal)

    def encode_ordinals(self, group: int, device: int, sensor: int = 0) -> int:
        """Encode ordinals; ``group`` must be the one owning ``device``.

        Raises:
            InvalidIdentifierError: when an ordinal is out of range or the
                device does not belong to ``group``.
        """

        self._check_bounds(group, device, sensor)
        owner = device % self.group_number
        if group != owner:
            raise InvalidIdentifierError(
                f"Device ordinal {device} belongs to group {owner}, not group {group}"
            )
        prefix = self.sensor_number * self.device_number * (device + self.group_number * group)
        return prefix + sensor

    def prefix(self, schema: DeviceSchema) -> int:
        return self.encode(schema.group, schema.device)

    def series_keys(self, schema: DeviceSchema) -> tuple[int, ...]:
        """Keys of every sensor of ``schema``, in sensor order."""

        prefix = self.prefix(schema)
        keys = []
        for sensor in schema.sensors:
            ordinal = parse_ordinal(sensor)
            self._check_bounds(0, 0, ordinal)
            keys.append(prefix + ordinal)
        return tuple(keys)

    def decode(self, key: int) -> tuple[int, int, int]:
        """Return the ``(group, device, sensor)`` ordinals encoded in ``key``."""

        if key < 0:
            raise InvalidIdentifierError(f"Series key {key} is negative")
        sensor = key % self.sensor_number
        slot, remainder = divmod(key // self.sensor_number, self.device_number)
        if remainder:
            raise InvalidIdentifierError(f"Series key {key} was not produced by this fleet")
        group = slot % self.group_number
        device = slot - self.group_number * group
        self._check_bounds(group, device, sensor)
        return group, device, sensor

    def _check_bounds(self, group: int, device: int, sensor: int) -> None:
        if not 0 <= group < self.group_number:
            raise InvalidIdentifierError(
                f"Group ordinal {group} is outside the fleet of {self.group_number} groups"
            )
        if not 0 <= device < self.device_number:
            raise InvalidIdentifierError(
                f"Device ordinal {device} is outside the fleet of {self.device_number} devices"
            )
        if not 0 <= sensor < self.sensor_number:
            raise InvalidIdentifierError(
                f"Sensor ordinal {sensor} is outside the {self.sensor_number} sensors per device"
            )
