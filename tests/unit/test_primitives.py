"""Tests for the primitive and tagged value readers."""

import io
import re
import uuid
from datetime import datetime

import pytest

from tests.unit import encoding as enc
from umbraco_export.core.decoding import primitives as p
from umbraco_export.errors import RecordDecodeError


def _stream(*chunks: bytes) -> io.BytesIO:
    return io.BytesIO(b"".join(chunks))


def test_integers_are_big_endian() -> None:
    assert p.read_int(_stream(b"\x00\x00\x04\x4c")) == 1100
    assert p.read_int(_stream(b"\xff\xff\xff\xff")) == -1
    assert p.read_long(_stream(enc.int64(-(2**40)))) == -(2**40)


def test_varint_spans_several_bytes() -> None:
    assert p.read_varint(_stream(b"\x7f")) == 127
    assert p.read_varint(_stream(b"\xac\x02")) == 300
    assert p.read_varint(_stream(enc.varint(-(2**31)))) == -(2**31)


def test_varint_longer_than_five_bytes_fails() -> None:
    with pytest.raises(RecordDecodeError, match="longer than 5 bytes"):
        p.read_varint(_stream(b"\x80\x80\x80\x80\x80\x01"))


def test_truncated_stream_fails() -> None:
    with pytest.raises(RecordDecodeError, match="wanted 4 bytes, got 2"):
        p.read_int(_stream(b"\x00\x01"))


def test_bool_is_one_byte() -> None:
    stream = _stream(b"\x01\x00")
    assert p.read_bool(stream) is True
    assert p.read_bool(stream) is False


def test_ascii_string_costs_length_plus_one_bytes() -> None:
    raw = enc.string("home")
    assert len(raw) == 5
    assert p.read_string(_stream(raw)) == "home"


def test_string_with_non_ascii_and_surrogate_pairs() -> None:
    assert p.read_string(_stream(enc.string("Tatovering æøå"))) == "Tatovering æøå"
    assert p.read_string(_stream(enc.string("rocket \U0001f680"))) == "rocket \U0001f680"


def test_null_string_length_yields_none() -> None:
    assert p.read_string(_stream(enc.string(None))) is None


def test_negative_string_length_fails() -> None:
    with pytest.raises(RecordDecodeError, match="Invalid string length -5"):
        p.read_string(_stream(enc.varint(-5)))


def test_guid_uses_mixed_endian_layout() -> None:
    value = "ec4aafcc-0c25-4f25-a8fe-705bfae1d324"
    assert p.read_guid(_stream(enc.guid(value))) == uuid.UUID(value)


def test_datetime_from_ticks() -> None:
    value = datetime(2019, 6, 25, 8, 4, 17, 123456)
    assert p.read_datetime(_stream(enc.timestamp(value))) == value


def test_datetime_kind_bits_are_ignored_for_utc() -> None:
    value = datetime(2019, 6, 25, 8, 4, 17)
    assert p.read_datetime(_stream(enc.timestamp(value, kind=1))) == value


def test_datetime_sub_microsecond_ticks_are_dropped() -> None:
    value = datetime(2019, 6, 25, 8, 4, 17)
    assert p.read_datetime(_stream(enc.timestamp(value, extra_ticks=7))) == value


def test_datetime_is_naive() -> None:
    assert p.read_datetime(_stream(enc.timestamp(datetime(2020, 1, 1)))).tzinfo is None


def test_read_tagged_accepts_expected_tag_or_null() -> None:
    assert p.read_string_object(_stream(enc.tagged("x"))) == "x"
    assert p.read_int_object(_stream(enc.tagged(7))) == 7
    assert p.read_string_object(_stream(enc.tagged(None))) is None


def test_read_tagged_rejects_other_tags() -> None:
    with pytest.raises(RecordDecodeError, match="Cannot deserialize type 'I', expected 'S'."):
        p.read_string_object(_stream(enc.tagged(5)))


def test_read_object_dispatches_on_tag() -> None:
    stream = _stream(
        enc.tagged("text"),
        enc.tagged(42),
        enc.tagged(2**40),
        enc.tagged(2.5),
        enc.tagged(datetime(2019, 10, 19, 13, 15)),
        enc.tagged(None),
        enc.char("F") + b"\x3f\xc0\x00\x00",
    )
    assert p.read_object(stream) == "text"
    assert p.read_object(stream) == 42
    assert p.read_object(stream) == 2**40
    assert p.read_object(stream) == 2.5
    assert p.read_object(stream) == datetime(2019, 10, 19, 13, 15)
    assert p.read_object(stream) is None
    assert p.read_object(stream) == 1.5


def test_read_object_rejects_unknown_tag() -> None:
    with pytest.raises(RecordDecodeError, match=re.escape("unknown type 'X', expected one of 'B|D|F|I|L|N|S'")):
        p.read_object(_stream(enc.char("X")))


def test_local_minimum_before_epoch_clamps_to_epoch() -> None:
    # Local-kind minimum written on a machine ten hours ahead of UTC.
    raw = (2 << 62) | (2**62 - 36_000_000_000)
    assert p.read_datetime(_stream(enc.int64(raw - 2**64))) == datetime.min


def test_local_kind_in_range_is_read_as_stored() -> None:
    value = datetime(2019, 6, 25, 8, 4, 17)
    assert p.read_datetime(_stream(enc.timestamp(value, kind=2))) == value
