"""
SensorBug advertisement codec.

This sub-package validates the manufacturer-data header, walks the record
stream that follows it, and renders the resulting reading as a summary line.
"""
from sensorbug.parsing.advert.control import ControlByte, LightDescriptor
from sensorbug.parsing.advert.decode import (
    DecodeError,
    RecordType,
    decode_advertisement,
    decode_records,
)
from sensorbug.parsing.advert.header import MAGIC_PREFIX, AdvertHeader, parse_header
from sensorbug.parsing.advert.model import LightReading, Reading, TemperatureReading
from sensorbug.parsing.advert.summary import build_summary

__all__ = [
    "AdvertHeader",
    "build_summary",
    "ControlByte",
    "decode_advertisement",
    "decode_records",
    "DecodeError",
    "LightDescriptor",
    "LightReading",
    "MAGIC_PREFIX",
    "parse_header",
    "Reading",
    "RecordType",
    "TemperatureReading",
]
