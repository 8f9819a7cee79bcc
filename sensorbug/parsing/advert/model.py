from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

TEMPERATURE_SCALE = 0.0625


@dataclass(frozen=True)
class LightReading:
    is_ir: bool
    resolution: int
    range: int
    value: int


@dataclass(frozen=True)
class TemperatureReading:
    raw: int

    @property
    def celsius(self) -> float:
        return self.raw * TEMPERATURE_SCALE


RecordValue = Union[LightReading, TemperatureReading]


@dataclass(frozen=True)
class Reading:
    """
    A decoded SensorBug advertisement.

    Attributes:
        battery: Battery level in percent, always present.
        records: Light and temperature values in the order they appeared in
            the payload. Records that carry no value are not kept.
        encrypted: Whether decoding stopped at the encryption marker.
    """
    battery: int
    records: tuple[RecordValue, ...] = field(default_factory=tuple)
    encrypted: bool = False

    @property
    def temperature(self) -> Optional[float]:
        for record in reversed(self.records):
            if isinstance(record, TemperatureReading):
                return record.celsius
        return None

    @property
    def light(self) -> Optional[LightReading]:
        for record in reversed(self.records):
            if isinstance(record, LightReading):
                return record
        return None
