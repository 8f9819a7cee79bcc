"""
Decoder for SensorBug manufacturer-data payloads.

After the 7-byte header the payload is a stream of records. Each record opens
with a control byte (see ``control``), optionally followed by one alert byte,
optionally followed by a payload whose shape depends on the data type. Only
types with a known payload length can be skipped, so an unknown type with data
ends the decode with ``DecodeError``.
"""
from __future__ import annotations

from enum import IntEnum
from typing import Callable, Optional

from sensorbug.core.binary import BufferUnderrun, ByteCursor
from sensorbug.parsing.advert.control import ControlByte, LightDescriptor
from sensorbug.parsing.advert.header import HEADER_LENGTH, parse_header
from sensorbug.parsing.advert.model import LightReading, Reading, RecordValue, TemperatureReading


class DecodeError(ValueError):
    pass


class RecordType(IntEnum):
    ACCELEROMETER = 0x01
    LIGHT = 0x02
    TEMPERATURE = 0x03
    PAIRING = 0x2F
    ENCRYPTION = 0x3F


def _decode_accelerometer(cursor: ByteCursor) -> Optional[RecordValue]:
    # Alert state only.
    cursor.skip(2)
    return None


def _decode_light(cursor: ByteCursor) -> Optional[RecordValue]:
    descriptor = LightDescriptor.parse(cursor.read_u8())
    if descriptor.length_code == 2:
        value = cursor.read_u16_le()
    elif descriptor.length_code == 1:
        value = cursor.read_u8()
    else:
        raise DecodeError(f"unsupported light value length code {descriptor.length_code}")
    return LightReading(
        is_ir=descriptor.is_ir,
        resolution=descriptor.resolution,
        range=descriptor.range,
        value=value,
    )


def _decode_temperature(cursor: ByteCursor) -> Optional[RecordValue]:
    return TemperatureReading(raw=cursor.read_i16_le())


def _decode_pairing(cursor: ByteCursor) -> Optional[RecordValue]:
    cursor.skip(1)
    return None


RECORD_DECODERS: dict[RecordType, Callable[[ByteCursor], Optional[RecordValue]]] = {
    RecordType.ACCELEROMETER: _decode_accelerometer,
    RecordType.LIGHT: _decode_light,
    RecordType.TEMPERATURE: _decode_temperature,
    RecordType.PAIRING: _decode_pairing,
}


def decode_records(data: bytes, offset: int = HEADER_LENGTH) -> tuple[tuple[RecordValue, ...], bool]:
    """
    Walk the record stream starting at ``offset``.

    Returns:
        The decoded values in encounter order, and whether decoding stopped at
        the encryption marker.

    Raises:
        DecodeError: On an unknown data type carrying data, an unsupported
            light length code, or a record truncated by the end of the buffer.
    """
    cursor = ByteCursor(data, offset)
    values: list[RecordValue] = []
    try:
        while not cursor.at_end():
            control = ControlByte.parse(cursor.read_u8())
            if control.data_type == RecordType.ENCRYPTION:
                # Everything after the marker is encrypted.
                return tuple(values), True
            if control.has_alert:
                cursor.skip(1)
            if not control.has_data:
                continue
            try:
                record_type = RecordType(control.data_type)
            except ValueError:
                raise DecodeError(
                    f"unknown record type 0x{control.data_type:02x} at offset {cursor.position - 1}"
                ) from None
            value = RECORD_DECODERS[record_type](cursor)
            if value is not None:
                values.append(value)
    except BufferUnderrun as exc:
        raise DecodeError(f"truncated record: {exc}") from exc
    return tuple(values), False


def decode_advertisement(data: bytes) -> Optional[Reading]:
    """
    Decode a raw manufacturer-data payload.

    Args:
        data: Manufacturer data as broadcast, company id included.

    Returns:
        A ``Reading``, or ``None`` if the payload is not from a SensorBug.

    Raises:
        DecodeError: If the payload is a SensorBug payload that cannot be decoded.
    """
    header = parse_header(data)
    if header is None:
        return None
    records, encrypted = decode_records(data, header.records_offset)
    return Reading(battery=header.battery, records=records, encrypted=encrypted)
