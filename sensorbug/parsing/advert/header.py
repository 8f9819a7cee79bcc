from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

# Company id 0x0085 (little-endian) followed by the SensorBug device class.
MAGIC_PREFIX: bytes = bytes([0x85, 0x00, 0x02, 0x00, 0x3C])

HEADER_LENGTH = 7
BATTERY_INDEX = 5


@dataclass(frozen=True)
class AdvertHeader:
    battery: int
    reserved: int
    records_offset: int = HEADER_LENGTH


def parse_header(data: bytes) -> Optional[AdvertHeader]:
    """
    Validate the fixed 7-byte header of a manufacturer-data payload.

    Args:
        data: Raw manufacturer data, company id included.

    Returns:
        An ``AdvertHeader`` when the payload belongs to a SensorBug, otherwise
        ``None``. A foreign or short payload is not an error.
    """
    if len(data) < HEADER_LENGTH:
        return None
    if bytes(data[: len(MAGIC_PREFIX)]) != MAGIC_PREFIX:
        return None
    return AdvertHeader(battery=data[BATTERY_INDEX], reserved=data[BATTERY_INDEX + 1])
