from __future__ import annotations


class BufferUnderrun(ValueError):
    pass


def get_bit(byte_value: int, bit_index: int) -> bool:
    if bit_index < 0 or bit_index > 7:
        raise ValueError("bit_index must be between 0 and 7")
    return bool(byte_value & (1 << bit_index))


def bit_field(byte_value: int, shift: int, width: int) -> int:
    if width < 1 or shift < 0 or shift + width > 8:
        raise ValueError("bit field must fit within a single byte")
    return (byte_value >> shift) & ((1 << width) - 1)


class ByteCursor:
    """
    Forward-only reader over a byte buffer.

    Every read checks the remaining length first and raises ``BufferUnderrun``
    instead of slicing past the end, so a truncated payload can never be read
    out of bounds.
    """

    def __init__(self, data: bytes, offset: int = 0) -> None:
        if offset < 0 or offset > len(data):
            raise ValueError("offset outside buffer")
        self._data = bytes(data)
        self._pos = offset

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def at_end(self) -> bool:
        return self._pos >= len(self._data)

    def _require(self, count: int) -> None:
        if count > self.remaining:
            raise BufferUnderrun(
                f"need {count} byte(s) at offset {self._pos}, only {self.remaining} left"
            )

    def skip(self, count: int) -> None:
        self._require(count)
        self._pos += count

    def read_u8(self) -> int:
        self._require(1)
        value = self._data[self._pos]
        self._pos += 1
        return value

    def read_u16_le(self) -> int:
        self._require(2)
        value = int.from_bytes(self._data[self._pos:self._pos + 2], byteorder="little", signed=False)
        self._pos += 2
        return value

    def read_i16_le(self) -> int:
        self._require(2)
        value = int.from_bytes(self._data[self._pos:self._pos + 2], byteorder="little", signed=True)
        self._pos += 2
        return value
