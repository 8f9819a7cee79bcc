"""
Bit-level helpers for the record control byte and the light descriptor byte.

Control byte layout::

    bit 7     has-alert (one uninterpreted alert byte follows)
    bit 6     has-data (a type-specific payload follows)
    bits 5-0  data type

Light descriptor layout::

    bit 7     infrared channel
    bit 6     unused
    bits 5-4  resolution code
    bits 3-2  range code
    bits 1-0  value length code (1 or 2 bytes)
"""
from __future__ import annotations

from dataclasses import dataclass

from sensorbug.core.binary import bit_field, get_bit


def data_type(control: int) -> int:
    return bit_field(control, 0, 6)


def has_data(control: int) -> bool:
    return get_bit(control, 6)


def has_alert(control: int) -> bool:
    return get_bit(control, 7)


def light_is_ir(descriptor: int) -> bool:
    return get_bit(descriptor, 7)


def light_resolution(descriptor: int) -> int:
    return bit_field(descriptor, 4, 2)


def light_range(descriptor: int) -> int:
    return bit_field(descriptor, 2, 2)


def light_length_code(descriptor: int) -> int:
    return bit_field(descriptor, 0, 2)


@dataclass(frozen=True)
class ControlByte:
    data_type: int
    has_data: bool
    has_alert: bool

    @classmethod
    def parse(cls, control: int) -> "ControlByte":
        return cls(
            data_type=data_type(control),
            has_data=has_data(control),
            has_alert=has_alert(control),
        )


@dataclass(frozen=True)
class LightDescriptor:
    is_ir: bool
    resolution: int
    range: int
    length_code: int

    @classmethod
    def parse(cls, descriptor: int) -> "LightDescriptor":
        return cls(
            is_ir=light_is_ir(descriptor),
            resolution=light_resolution(descriptor),
            range=light_range(descriptor),
            length_code=light_length_code(descriptor),
        )
