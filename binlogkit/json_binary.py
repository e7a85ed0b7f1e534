"""Decoding of the binary JSON format stored in JSON columns."""

from __future__ import annotations

import io
import struct
from dataclasses import dataclass
from typing import Optional, Union

from .column_type import ColumnType
from .column_value import parse_decimal
from .errors import ParseJsonError, UnexpectedDataError
from .json_formatter import JsonFormatter
from .json_string_formatter import JsonStringFormatter
from .json_value_type import JsonValueType

_U32_MAX = (1 << 32) - 1


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _trunc_rem(a: int, b: int) -> int:
    """Remainder carrying the sign of the dividend."""
    r = abs(a) % abs(b)
    return -r if a < 0 else r


@dataclass
class _KeyEntry:
    offset: int
    length: int
    name: str = ""


@dataclass
class _ValueEntry:
    value_type: JsonValueType
    offset: int = 0
    resolved: bool = False
    # A resolved entry holds either a literal (True, False or None) or an int.
    value: Union[bool, int, None] = None


class _JsonReader:
    """Walks one binary JSON document and feeds a formatter."""

    def __init__(self, data: bytes, formatter: JsonFormatter) -> None:
        self._data = bytes(data)
        self._pos = 0
        self._formatter = formatter

    # -- low level reads -------------------------------------------------

    def _read(self, size: int) -> bytes:
        end = self._pos + size
        if size < 0 or end > len(self._data):
            available = max(0, len(self._data) - self._pos)
            raise UnexpectedDataError(f"expected {size} bytes, got {available}")
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def _unpack(self, fmt: str) -> int:
        return struct.unpack(fmt, self._read(struct.calcsize(fmt)))[0]

    def _seek(self, position: int) -> None:
        if position < 0:
            raise UnexpectedDataError(f"invalid seek to {position}")
        self._pos = position

    def _skip(self, count: int) -> None:
        self._seek(self._pos + count)

    def _u8(self) -> int:
        return self._unpack("<B")

    def _int16(self) -> int:
        return self._unpack("<h")

    def _uint16(self) -> int:
        return self._unpack("<H")

    def _int32(self) -> int:
        return self._unpack("<i")

    def _uint32(self) -> int:
        return self._unpack("<I")

    def _int64(self) -> int:
        return self._unpack("<q")

    def _uint64(self) -> int:
        return self._unpack("<Q")

    def _text(self, length: int) -> str:
        return self._read(length).decode("utf-8", errors="replace")

    def _var_int(self) -> int:
        length = 0
        for i in range(5):
            b = self._u8()
            length |= (b & 0x7F) << (7 * i)
            if not b & 0x80:
                return length
        raise ParseJsonError("Unexpected byte sequence")

    def _literal(self) -> Optional[bool]:
        b = self._u8()
        if b == 0x00:
            return None
        if b == 0x01:
            return True
        if b == 0x02:
            return False
        raise ParseJsonError(f"Unexpected value: '{b:02X} ' for literal")

    def read_value_type(self) -> JsonValueType:
        b = self._u8()
        value_type = JsonValueType.by_code(b)
        if value_type is None:
            raise ParseJsonError(f"Unknown value type code: '{b:02X} '")
        return value_type

    def _unsigned_index(self, max_value: int, is_small: bool, desc: str) -> int:
        result = self._uint16() if is_small else self._uint32()
        if result > max_value:
            raise ParseJsonError(
                f"{desc}, the JSON document is {result} and is too big for the "
                f"binary form of the document ({max_value})"
            )
        return result

    # -- values ----------------------------------------------------------

    def parse_value(self, value_type: JsonValueType) -> None:
        fmt = self._formatter
        if value_type is JsonValueType.SMALL_DOCUMENT:
            self._parse_object(is_small=True, is_array=False)
        elif value_type is JsonValueType.LARGE_DOCUMENT:
            self._parse_object(is_small=False, is_array=False)
        elif value_type is JsonValueType.SMALL_ARRAY:
            self._parse_object(is_small=True, is_array=True)
        elif value_type is JsonValueType.LARGE_ARRAY:
            self._parse_object(is_small=False, is_array=True)
        elif value_type is JsonValueType.LITERAL:
            self._emit_literal(self._literal())
        elif value_type is JsonValueType.INT16:
            fmt.value_int(self._int16())
        elif value_type is JsonValueType.UINT16:
            fmt.value_int(self._uint16())
        elif value_type is JsonValueType.INT32:
            fmt.value_int(self._int32())
        elif value_type is JsonValueType.UINT32:
            fmt.value_long(self._uint32())
        elif value_type is JsonValueType.INT64:
            fmt.value_long(self._int64())
        elif value_type is JsonValueType.UINT64:
            fmt.value_big_int(self._uint64())
        elif value_type is JsonValueType.DOUBLE:
            fmt.value_double(struct.unpack("<d", self._read(8))[0])
        elif value_type is JsonValueType.STRING:
            fmt.value_string(self._text(self._var_int()))
        else:
            self._parse_opaque()

    def _emit_literal(self, value: Optional[bool]) -> None:
        if value is None:
            self._formatter.value_null()
        else:
            self._formatter.value_bool(value)

    def _parse_object(self, is_small: bool, is_array: bool) -> None:
        fmt = self._formatter
        object_offset = self._pos

        num_elements = self._unsigned_index(_U32_MAX, is_small, "number of elements in")
        num_bytes = self._unsigned_index(_U32_MAX, is_small, "size of")
        value_size = 2 if is_small else 4

        keys: list[_KeyEntry] = []
        if not is_array:
            for _ in range(num_elements):
                offset = self._unsigned_index(num_bytes, is_small, "key offset in")
                keys.append(_KeyEntry(offset, self._uint16()))

        entries: list[_ValueEntry] = []
        for _ in range(num_elements):
            value_type = self.read_value_type()
            entry: Optional[_ValueEntry] = None
            if value_type is JsonValueType.LITERAL:
                entry = _ValueEntry(value_type, resolved=True, value=self._literal())
                self._skip(value_size - 1)
            elif value_type is JsonValueType.INT16:
                entry = _ValueEntry(value_type, resolved=True, value=self._int16())
                self._skip(value_size - 2)
            elif value_type is JsonValueType.UINT16:
                entry = _ValueEntry(value_type, resolved=True, value=self._uint16())
                self._skip(value_size - 2)
            elif value_type is JsonValueType.INT32 and not is_small:
                entry = _ValueEntry(value_type, resolved=True, value=self._int32())
            elif value_type is JsonValueType.UINT32 and not is_small:
                entry = _ValueEntry(value_type, resolved=True, value=self._uint32())

            if entry is None:
                offset = self._unsigned_index(num_bytes, is_small, "value offset in")
                entry = _ValueEntry(value_type, offset=offset)
            entries.append(entry)

        # Keys may not follow the entries directly (holes left by partial updates).
        for key in keys:
            self._seek(object_offset + key.offset)
            key.name = self._text(key.length)

        if is_array:
            fmt.begin_array(num_elements)
        else:
            fmt.begin_object(num_elements)

        for i, entry in enumerate(entries):
            if i:
                fmt.next_entry()
            if not is_array:
                fmt.name(keys[i].name)
            if entry.resolved:
                if entry.value_type is JsonValueType.LITERAL:
                    self._emit_literal(entry.value)  # type: ignore[arg-type]
                else:
                    fmt.value_long(int(entry.value))  # type: ignore[arg-type]
            else:
                self._seek(object_offset + entry.offset)
                self.parse_value(entry.value_type)

        if is_array:
            fmt.end_array()
        else:
            fmt.end_object()

    def _parse_opaque(self) -> None:
        column_type = ColumnType.from_code(self._u8())
        length = self._var_int()

        if column_type in (ColumnType.DECIMAL, ColumnType.NEWDECIMAL):
            self._parse_decimal(length)
        elif column_type is ColumnType.DATE:
            self._parse_date()
        elif column_type in (ColumnType.TIME, ColumnType.TIME2):
            self._parse_time()
        elif column_type in (
            ColumnType.DATETIME,
            ColumnType.DATETIME2,
            ColumnType.TIMESTAMP,
            ColumnType.TIMESTAMP2,
        ):
            self._parse_datetime()
        else:
            self._formatter.value_opaque(column_type, self._read(length))

    def _parse_decimal(self, length: int) -> None:
        if length < 2:
            raise ParseJsonError(f"decimal value too short: {length} bytes")
        precision = self._u8()
        scale = self._u8()
        body = self._read(length - 2)
        self._formatter.value_decimal(parse_decimal(io.BytesIO(body), precision, scale))

    def _parse_date(self) -> None:
        value = self._int64() >> 24
        year_month = _trunc_rem(value >> 22, 1 << 17)
        year = _trunc_div(year_month, 13)
        month = _trunc_rem(year_month, 13)
        day = _trunc_rem(value >> 17, 1 << 5)
        self._formatter.value_date(year, month, day)

    def _parse_time(self) -> None:
        raw = self._int64()
        value = raw >> 24
        hour = _trunc_rem(value >> 12, 1 << 10)
        minute = _trunc_rem(value >> 6, 1 << 6)
        second = _trunc_rem(value, 1 << 6)
        if value < 0:
            hour = -hour
        micro_seconds = _trunc_rem(raw, 1 << 24)
        self._formatter.value_time(hour, minute, second, micro_seconds)

    def _parse_datetime(self) -> None:
        raw = self._int64()
        value = raw >> 24
        year_month = _trunc_rem(value >> 22, 1 << 17)
        year = _trunc_div(year_month, 13)
        month = _trunc_rem(year_month, 13)
        day = _trunc_rem(value >> 17, 1 << 5)
        hour = _trunc_rem(value >> 12, 1 << 5)
        minute = _trunc_rem(value >> 6, 1 << 6)
        second = _trunc_rem(value, 1 << 6)
        micro_seconds = _trunc_rem(raw, 1 << 24)
        self._formatter.value_datetime(year, month, day, hour, minute, second, micro_seconds)


def parse(data: bytes, formatter: JsonFormatter) -> None:
    """Walk a binary JSON document, reporting its parts to formatter."""
    reader = _JsonReader(data, formatter)
    reader.parse_value(reader.read_value_type())


def parse_as_string(data: bytes) -> str:
    """Render a binary JSON document as JSON text.

    Values that are already JSON text (as some servers store them) are
    returned decoded as they are.
    """
    if not data:
        raise ParseJsonError("empty JSON value")
    if data[0] > 0x0F:
        return bytes(data).decode("utf-8", errors="replace")
    formatter = JsonStringFormatter()
    parse(data, formatter)
    return formatter.getvalue()