"""Primitive and tagged value readers for the NuCache record format.

Every multi-byte integer is big-endian. Lengths and type tags use the
variable-length encoding (7 bits per byte, least significant group first).
Strings are a length followed by one variable-length value per UTF-16 code
unit, so a string of ``n`` ASCII characters costs ``n + 1`` bytes.
"""

import struct
import uuid
from datetime import datetime, timedelta
from typing import BinaryIO

from umbraco_export.errors import RecordDecodeError

TAG_NULL = "N"
TAG_STRING = "S"
TAG_INT = "I"
TAG_LONG = "L"
TAG_FLOAT = "F"
TAG_DOUBLE = "B"
TAG_DATETIME = "D"

VALUE_TAGS = frozenset({TAG_NULL, TAG_STRING, TAG_INT, TAG_LONG, TAG_FLOAT, TAG_DOUBLE, TAG_DATETIME})

# Length written in place of a string's length when the string is null.
NULL_STRING_LENGTH = -(2**31)

_TICKS_MASK = 0x3FFF_FFFF_FFFF_FFFF
_TICKS_CEILING = 0x4000_0000_0000_0000
_KIND_LOCAL = 2
_TICKS_PER_DAY = 864_000_000_000
_EPOCH = datetime(1, 1, 1)

TypedValue = str | int | float | datetime | None


def read_exact(stream: BinaryIO, size: int) -> bytes:
    """Read exactly ``size`` bytes or fail with a decode error."""
    data = stream.read(size)
    if len(data) != size:
        msg = f"Unexpected end of stream: wanted {size} bytes, got {len(data)}"
        raise RecordDecodeError(msg)
    return data


def read_varint(stream: BinaryIO) -> int:
    """Read a variable-length 32-bit value, returned as a signed int."""
    result = 0
    shift = 0
    while True:
        byte = read_exact(stream, 1)[0]
        result |= (byte & 0x7F) << shift
        if not byte & 0x80:
            break
        shift += 7
        if shift > 28:
            msg = "Variable-length integer is longer than 5 bytes"
            raise RecordDecodeError(msg)
    result &= 0xFFFF_FFFF
    return result - 2**32 if result >= 2**31 else result


def read_bool(stream: BinaryIO) -> bool:
    return read_exact(stream, 1)[0] != 0


def read_int(stream: BinaryIO) -> int:
    return struct.unpack(">i", read_exact(stream, 4))[0]


def read_long(stream: BinaryIO) -> int:
    return struct.unpack(">q", read_exact(stream, 8))[0]


def read_float(stream: BinaryIO) -> float:
    return struct.unpack(">f", read_exact(stream, 4))[0]


def read_double(stream: BinaryIO) -> float:
    return struct.unpack(">d", read_exact(stream, 8))[0]


def read_char(stream: BinaryIO) -> str:
    code = read_varint(stream)
    if not 0 <= code <= 0xFFFF:
        msg = f"Invalid character code {code}"
        raise RecordDecodeError(msg)
    return chr(code)


def read_string(stream: BinaryIO) -> str | None:
    """Read a length-prefixed string; the null-length marker yields None."""
    length = read_varint(stream)
    if length == NULL_STRING_LENGTH:
        return None
    if length < 0:
        msg = f"Invalid string length {length}"
        raise RecordDecodeError(msg)
    units = bytearray()
    for _ in range(length):
        unit = read_varint(stream)
        if not 0 <= unit <= 0xFFFF:
            msg = f"Invalid UTF-16 code unit {unit}"
            raise RecordDecodeError(msg)
        units += unit.to_bytes(2, "little")
    # surrogatepass keeps lone surrogates instead of failing the whole record
    return units.decode("utf-16-le", errors="surrogatepass")


def read_guid(stream: BinaryIO) -> uuid.UUID:
    return uuid.UUID(bytes_le=read_exact(stream, 16))


def read_datetime(stream: BinaryIO) -> datetime:
    """Read a timestamp stored as 62 bits of ticks plus a 2-bit kind.

    Ticks are 100ns intervals since 0001-01-01. The result is always naive;
    local-kind values are stored as UTC ticks and are returned in UTC.
    """
    raw = read_long(stream) & 0xFFFF_FFFF_FFFF_FFFF
    kind = raw >> 62
    ticks = raw & _TICKS_MASK
    if kind == _KIND_LOCAL and ticks > _TICKS_CEILING - _TICKS_PER_DAY:
        # Local minimum value pushed before the epoch by a positive UTC offset.
        return _EPOCH
    try:
        return _EPOCH + timedelta(microseconds=ticks // 10)
    except OverflowError as exc:
        msg = f"Timestamp out of range: {ticks} ticks"
        raise RecordDecodeError(msg) from exc


_READERS = {
    TAG_STRING: read_string,
    TAG_INT: read_int,
    TAG_LONG: read_long,
    TAG_FLOAT: read_float,
    TAG_DOUBLE: read_double,
    TAG_DATETIME: read_datetime,
}


def read_tagged(stream: BinaryIO, expected: str) -> TypedValue:
    """Read a nullable value that must carry ``expected`` or the null tag."""
    tag = read_char(stream)
    if tag == TAG_NULL:
        return None
    if tag != expected:
        msg = f"Cannot deserialize type '{tag}', expected '{expected}'."
        raise RecordDecodeError(msg)
    return _READERS[expected](stream)


def read_string_object(stream: BinaryIO) -> str | None:
    return read_tagged(stream, TAG_STRING)  # type: ignore[return-value]


def read_int_object(stream: BinaryIO) -> int | None:
    return read_tagged(stream, TAG_INT)  # type: ignore[return-value]


def read_long_object(stream: BinaryIO) -> int | None:
    return read_tagged(stream, TAG_LONG)  # type: ignore[return-value]


def read_float_object(stream: BinaryIO) -> float | None:
    return read_tagged(stream, TAG_FLOAT)  # type: ignore[return-value]


def read_double_object(stream: BinaryIO) -> float | None:
    return read_tagged(stream, TAG_DOUBLE)  # type: ignore[return-value]


def read_datetime_object(stream: BinaryIO) -> datetime | None:
    return read_tagged(stream, TAG_DATETIME)  # type: ignore[return-value]


def read_object(stream: BinaryIO) -> TypedValue:
    """Read a value of whatever type its tag announces."""
    tag = read_char(stream)
    if tag == TAG_NULL:
        return None
    reader = _READERS.get(tag)
    if reader is None:
        expected = "|".join(sorted(VALUE_TAGS))
        msg = f"Cannot deserialize unknown type '{tag}', expected one of '{expected}'."
        raise RecordDecodeError(msg)
    return reader(stream)
