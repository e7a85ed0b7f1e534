"""Decoding of column values carried in row events."""

from __future__ import annotations

import io
import struct
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, Callable, Union

from .column_type import ColumnType
from .errors import UnexpectedDataError, UnsupportedColumnTypeError

_U32 = (1 << 32) - 1
_U64 = (1 << 64) - 1

_DIG_PER_DEC = 9
_COMPRESSED_BYTES = (0, 1, 1, 2, 2, 3, 3, 4, 4, 4)


class ValueKind(Enum):
    """The kind of a decoded column value."""

    NONE = "none"
    TINY = "tiny"
    SHORT = "short"
    LONG = "long"
    LONGLONG = "longlong"
    FLOAT = "float"
    DOUBLE = "double"
    DECIMAL = "decimal"
    TIME = "time"
    DATE = "date"
    DATETIME = "datetime"
    TIMESTAMP = "timestamp"
    YEAR = "year"
    STRING = "string"
    BLOB = "blob"
    BIT = "bit"
    SET = "set"
    ENUM = "enum"
    JSON = "json"


@dataclass(frozen=True)
class ColumnValue:
    """A decoded column value.

    Integers keep their signed binlog width (unsigned columns come back
    wrapped), strings and blobs are raw bytes since the charset is not in the
    binlog, timestamps are microseconds since the epoch and JSON is the raw
    binary document.
    """

    kind: ValueKind
    value: Union[int, float, str, bytes, None] = None


def _read_exact(reader: BinaryIO, size: int) -> bytes:
    data = reader.read(size)
    if data is None or len(data) != size:
        got = 0 if data is None else len(data)
        raise UnexpectedDataError(f"expected {size} bytes, got {got}")
    return bytes(data)


def _check_width(size: int) -> None:
    if not 1 <= size <= 8:
        raise UnexpectedDataError(f"invalid integer width: {size}")


def _uint_le(reader: BinaryIO, size: int) -> int:
    _check_width(size)
    return int.from_bytes(_read_exact(reader, size), "little")


def _int_le(reader: BinaryIO, size: int) -> int:
    _check_width(size)
    return int.from_bytes(_read_exact(reader, size), "little", signed=True)


def _uint_be(reader: BinaryIO, size: int) -> int:
    _check_width(size)
    return int.from_bytes(_read_exact(reader, size), "big")


def _bit_slice(value: int, bit_offset: int, num_bits: int, payload_bits: int) -> int:
    return (value >> (payload_bits - (bit_offset + num_bits))) & ((1 << num_bits) - 1)


def _parse_bit(reader: BinaryIO, column_meta: int) -> int:
    bit_count = (column_meta >> 8) * 8 + (column_meta & 0xFF)
    data = _read_exact(reader, (bit_count + 7) // 8)
    return int.from_bytes(data, "big") & ((1 << bit_count) - 1)


def _parse_date(reader: BinaryIO) -> str:
    # Day in bits 1-5, month in bits 6-9, year in the rest.
    value = _uint_le(reader, 3)
    day = value % 32
    month = (value >> 5) % 16
    year = value >> 9
    return f"{year}-{month:02d}-{day:02d}"


def _parse_time(reader: BinaryIO) -> str:
    value = _uint_le(reader, 3)
    hour = value // 10000
    minute = (value // 100) % 100
    second = value % 100
    return f"{hour:02d}:{minute:02d}:{second:02d}"


def _parse_time2(reader: BinaryIO, column_meta: int) -> str:
    # Big endian: 1 bit sign (1 = non-negative), 1 reserved bit, 10 bits hour,
    # 6 bits minute, 6 bits second, then the fractional-seconds bytes.
    fraction_bytes = (column_meta + 1) // 2
    payload_bytes = 3 + fraction_bytes
    payload_bits = payload_bytes * 8

    time = _uint_be(reader, payload_bytes)
    negative = _bit_slice(time, 0, 1, payload_bits) == 0
    if negative:
        time = (-time) & _U64

    hour = _bit_slice(time, 2, 10, payload_bits)
    minute = _bit_slice(time, 12, 6, payload_bits)
    second = _bit_slice(time, 18, 6, payload_bits)

    micro_second = 0
    if fraction_bytes > 0:
        fraction = _bit_slice(time, 24, fraction_bytes * 8, payload_bits)
        micro_second = fraction * 10_000 // 100 ** (fraction_bytes - 1)

    sign = "-" if negative else ""
    return f"{sign}{hour:02d}:{minute:02d}:{second:02d}.{micro_second:06d}"


def _parse_fraction(reader: BinaryIO, column_meta: int) -> int:
    length = (column_meta + 1) // 2
    if length == 0:
        return 0
    return (_uint_be(reader, length) * 100 ** (3 - length)) & _U32


def _parse_timestamp(reader: BinaryIO) -> int:
    return _uint_le(reader, 4) * 1_000_000


def _parse_timestamp2(reader: BinaryIO, column_meta: int) -> int:
    seconds = _uint_be(reader, 4)
    micros = _parse_fraction(reader, column_meta)
    return 1_000_000 * seconds + micros


def _parse_datetime(reader: BinaryIO) -> str:
    raw = (_uint_le(reader, 8) * 1000) & _U64
    date_val, time_val = divmod(raw, 1_000_000)
    year = (date_val // 10000) & _U32
    month = (date_val // 100) % 100
    day = date_val % 100
    hour = (time_val // 10000) & _U32
    minute = (time_val // 100) % 100
    second = time_val % 100
    return f"{year}-{month:02d}-{day:02d} {hour:02d}:{minute:02d}:{second:02d}"


def _parse_datetime2(reader: BinaryIO, column_meta: int) -> str:
    value = (_uint_be(reader, 5) - 0x8000000000) & _U64
    micros = _parse_fraction(reader, column_meta)
    d_val = value >> 17
    t_val = value % (1 << 17)
    year = ((d_val >> 5) // 13) & _U32
    month = (d_val >> 5) % 13
    day = d_val % (1 << 5)
    hour = (value >> 12) % (1 << 5)
    minute = (t_val >> 6) % (1 << 6)
    second = t_val % (1 << 6)
    return (
        f"{year}-{month:02d}-{day:02d} "
        f"{hour:02d}:{minute:02d}:{second:02d}.{micros:06d}"
    )


def _parse_string(reader: BinaryIO, column_meta: int) -> bytes:
    size = _uint_le(reader, 1) if column_meta < 256 else _uint_le(reader, 2)
    return _read_exact(reader, size)


def _parse_blob(reader: BinaryIO, column_meta: int) -> bytes:
    size = _uint_le(reader, column_meta)
    return _read_exact(reader, size)


def parse_decimal(reader: BinaryIO, precision: int, scale: int) -> str:
    """Decode a packed DECIMAL(precision, scale) value into its text form.

    The integral and fractional parts are stored big endian as groups of nine
    digits in four bytes, with the leftover digits of each part compressed
    into one to four bytes on the outer side.
    """
    if scale > precision:
        raise UnexpectedDataError(f"decimal scale {scale} exceeds precision {precision}")

    integral = precision - scale
    uncomp_intg, comp_intg = divmod(integral, _DIG_PER_DEC)
    uncomp_frac, comp_frac = divmod(scale, _DIG_PER_DEC)
    comp_intg_bytes = _COMPRESSED_BYTES[comp_intg]
    comp_frac_bytes = _COMPRESSED_BYTES[comp_frac]

    total_bytes = 4 * uncomp_intg + 4 * uncomp_frac + comp_intg_bytes + comp_frac_bytes
    if total_bytes == 0:
        raise UnexpectedDataError(f"empty decimal: precision {precision}, scale {scale}")

    buf = bytearray(_read_exact(reader, total_bytes))
    negative = (buf[0] & 0x80) == 0
    buf[0] ^= 0x80
    if negative:
        buf = bytearray(b ^ 0xFF for b in buf)

    digits = io.BytesIO(bytes(buf))

    intg = ""
    if comp_intg_bytes:
        value = _uint_be(digits, comp_intg_bytes)
        if value > 0:
            intg = str(value)
    for _ in range(uncomp_intg):
        value = _uint_be(digits, 4)
        if intg:
            intg += f"{value:0{_DIG_PER_DEC}d}"
        elif value > 0:
            intg = str(value)
    if not intg:
        intg = "0"

    frac = "".join(f"{_uint_be(digits, 4):0{_DIG_PER_DEC}d}" for _ in range(uncomp_frac))
    if comp_frac_bytes:
        frac += f"{_uint_be(digits, comp_frac_bytes):0{comp_frac}d}"

    text = ("-" if negative else "") + intg
    return f"{text}.{frac}" if frac else text


def _parse_new_decimal(reader: BinaryIO, meta: int, _length: int) -> ColumnValue:
    precision = meta & 0xFF
    scale = meta >> 8
    return ColumnValue(ValueKind.DECIMAL, parse_decimal(reader, precision, scale))


def _float(reader: BinaryIO, _meta: int, _length: int) -> ColumnValue:
    return ColumnValue(ValueKind.FLOAT, struct.unpack("<f", _read_exact(reader, 4))[0])


def _double(reader: BinaryIO, _meta: int, _length: int) -> ColumnValue:
    return ColumnValue(ValueKind.DOUBLE, struct.unpack("<d", _read_exact(reader, 8))[0])


def _blob(reader: BinaryIO, meta: int, _length: int) -> ColumnValue:
    return ColumnValue(ValueKind.BLOB, _parse_blob(reader, meta))


def _var_string(reader: BinaryIO, meta: int, _length: int) -> ColumnValue:
    return ColumnValue(ValueKind.STRING, _parse_string(reader, meta))


_Decoder = Callable[[BinaryIO, int, int], ColumnValue]

_DECODERS: dict[ColumnType, _Decoder] = {
    ColumnType.BIT: lambda r, m, n: ColumnValue(ValueKind.BIT, _parse_bit(r, m)),
    ColumnType.TINY: lambda r, m, n: ColumnValue(ValueKind.TINY, _int_le(r, 1)),
    ColumnType.SHORT: lambda r, m, n: ColumnValue(ValueKind.SHORT, _int_le(r, 2)),
    ColumnType.INT24: lambda r, m, n: ColumnValue(ValueKind.LONG, _int_le(r, 3)),
    ColumnType.LONG: lambda r, m, n: ColumnValue(ValueKind.LONG, _int_le(r, 4)),
    ColumnType.LONGLONG: lambda r, m, n: ColumnValue(ValueKind.LONGLONG, _int_le(r, 8)),
    ColumnType.FLOAT: _float,
    ColumnType.DOUBLE: _double,
    ColumnType.NEWDECIMAL: _parse_new_decimal,
    ColumnType.DATE: lambda r, m, n: ColumnValue(ValueKind.DATE, _parse_date(r)),
    ColumnType.TIME: lambda r, m, n: ColumnValue(ValueKind.TIME, _parse_time(r)),
    ColumnType.TIME2: lambda r, m, n: ColumnValue(ValueKind.TIME, _parse_time2(r, m)),
    ColumnType.TIMESTAMP: lambda r, m, n: ColumnValue(ValueKind.TIMESTAMP, _parse_timestamp(r)),
    ColumnType.TIMESTAMP2: lambda r, m, n: ColumnValue(
        ValueKind.TIMESTAMP, _parse_timestamp2(r, m)
    ),
    ColumnType.DATETIME: lambda r, m, n: ColumnValue(ValueKind.DATETIME, _parse_datetime(r)),
    ColumnType.DATETIME2: lambda r, m, n: ColumnValue(
        ValueKind.DATETIME, _parse_datetime2(r, m)
    ),
    ColumnType.YEAR: lambda r, m, n: ColumnValue(ValueKind.YEAR, _uint_le(r, 1) + 1900),
    ColumnType.VARCHAR: _var_string,
    ColumnType.VAR_STRING: _var_string,
    ColumnType.STRING: lambda r, m, n: ColumnValue(ValueKind.STRING, _parse_string(r, n)),
    ColumnType.BLOB: _blob,
    ColumnType.GEOMETRY: _blob,
    ColumnType.TINY_BLOB: _blob,
    ColumnType.MEDIUM_BLOB: _blob,
    ColumnType.LONG_BLOB: _blob,
    ColumnType.ENUM: lambda r, m, n: ColumnValue(ValueKind.ENUM, _int_le(r, n) & _U32),
    ColumnType.SET: lambda r, m, n: ColumnValue(ValueKind.SET, _int_le(r, n) & _U64),
    ColumnType.JSON: lambda r, m, n: ColumnValue(ValueKind.JSON, _parse_blob(r, m)),
}


def parse_column_value(
    reader: BinaryIO, column_type: Union[ColumnType, int], column_meta: int, column_length: int
) -> ColumnValue:
    """Read one column value of the given type from a binary stream.

    column_meta is the metadata from the table map event; column_length is the
    resolved length of STRING, ENUM and SET columns.
    """
    kind = ColumnType.from_code(int(column_type))
    decoder = _DECODERS.get(kind)
    if decoder is None:
        raise UnsupportedColumnTypeError(kind.name)
    return decoder(reader, column_meta, column_length)