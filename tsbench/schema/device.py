"""Device schemas and the naming convention of fleet identifiers."""

from __future__ import annotations

import re
from dataclasses import dataclass

from tsbench.exceptions import InvalidIdentifierError

__all__ = [
    "DEVICE_NAME_PREFIX",
    "DeviceSchema",
    "GROUP_NAME_PREFIX",
    "SENSOR_NAME_PREFIX",
    "device_name",
    "group_name",
    "parse_ordinal",
    "sensor_name",
]

GROUP_NAME_PREFIX = "group_"
DEVICE_NAME_PREFIX = "device_"
SENSOR_NAME_PREFIX = "sensor_"

_ORDINAL_SUFFIX = re.compile(r"^(?P<stem>.*)_(?P<ordinal>[0-9]+)$")


def parse_ordinal(identifier: str) -> int:
    """Return the numeric suffix of ``identifier`` (``"device_7"`` -> ``7``).

    Raises:
        InvalidIdentifierError: when the identifier has no ``_`` separator or
            the part after the last separator is not a decimal number.
    """

    match = _ORDINAL_SUFFIX.fullmatch(identifier)
    if match is None:
        raise InvalidIdentifierError(
            f"Identifier {identifier!r} does not end with '_<ordinal>'"
        )
    return int(match.group("ordinal"))


def group_name(ordinal: int) -> str:
    return f"{GROUP_NAME_PREFIX}{ordinal}"


def device_name(ordinal: int) -> str:
    return f"{DEVICE_NAME_PREFIX}{ordinal}"


def sensor_name(ordinal: int) -> str:
    return f"{SENSOR_NAME_PREFIX}{ordinal}"


@dataclass(frozen=True, slots=True)
class DeviceSchema:
    """A device of the fleet together with its ordered sensor names."""

    group: str
    device: str
    sensors: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.sensors:
            raise ValueError("A device schema requires at least one sensor")
        # Accept any sequence from callers but store an immutable tuple.
        object.__setattr__(self, "sensors", tuple(self.sensors))

    @property
    def group_ordinal(self) -> int:
        return parse_ordinal(self.group)

    @property
    def device_ordinal(self) -> int:
        return parse_ordinal(self.device)

    def sensor_ordinals(self) -> tuple[int, ...]:
        return tuple(parse_ordinal(sensor) for sensor in self.sensors)
