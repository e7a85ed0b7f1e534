"""Formatter that renders a binary JSON document as JSON text."""

import base64
import math
from decimal import Decimal

from .column_type import ColumnType
from .json_formatter import JsonFormatter

_TWO_CHAR_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "\b": "b",
    "\t": "t",
    "\f": "f",
    "\n": "n",
    "\r": "r",
}


def _escape(text: str) -> str:
    out = []
    for ch in text:
        code = ord(ch)
        if ch in _TWO_CHAR_ESCAPES:
            out.append("\\" + _TWO_CHAR_ESCAPES[ch])
        elif code < 32:
            out.append(f"\\u{code:04X}")
        else:
            out.append(ch)
    return "".join(out)


def _format_double(value: float) -> str:
    """Shortest round-trip digits, never in exponent notation."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _six_digits(value: int, trim_trailing_zeros: bool) -> str:
    digits = f"{value:06d}"
    if trim_trailing_zeros:
        digits = digits.rstrip("0") or "0"
    return digits


class JsonStringFormatter(JsonFormatter):
    """Builds JSON text from formatter callbacks."""

    def __init__(self) -> None:
        self._parts: list[str] = []

    def getvalue(self) -> str:
        """Return the text produced so far."""
        return "".join(self._parts)

    def _append_date(self, year: int, month: int, day: int) -> None:
        sign = "-" if year < 0 else ""
        self._parts.append(f"{sign}{abs(year):04d}-{month:02d}-{day:02d}")

    def _append_time(self, hour: int, minute: int, second: int, micro_seconds: int) -> None:
        self._parts.append(f"{hour:02d}:{minute:02d}:{second:02d}")
        if micro_seconds != 0:
            self._parts.append("." + _six_digits(micro_seconds, True))

    def begin_object(self, num_elements: int) -> None:
        self._parts.append("{")

    def begin_array(self, num_elements: int) -> None:
        self._parts.append("[")

    def end_object(self) -> None:
        self._parts.append("}")

    def end_array(self) -> None:
        self._parts.append("]")

    def name(self, name: str) -> None:
        self._parts.append(f'"{_escape(name)}":')

    def value_string(self, value: str) -> None:
        self._parts.append(f'"{_escape(value)}"')

    def value_int(self, value: int) -> None:
        self._parts.append(str(value))

    def value_long(self, value: int) -> None:
        self._parts.append(str(value))

    def value_double(self, value: float) -> None:
        self._parts.append(_format_double(value))

    def value_big_int(self, value: int) -> None:
        self._parts.append(str(value))

    def value_decimal(self, value: str) -> None:
        self._parts.append(value)

    def value_bool(self, value: bool) -> None:
        self._parts.append("true" if value else "false")

    def value_null(self) -> None:
        self._parts.append("null")

    def value_year(self, year: int) -> None:
        self._parts.append(str(year))

    def value_date(self, year: int, month: int, day: int) -> None:
        self._parts.append('"')
        self._append_date(year, month, day)
        self._parts.append('"')

    def value_datetime(
        self,
        year: int,
        month: int,
        day: int,
        hour: int,
        minute: int,
        second: int,
        micro_seconds: int,
    ) -> None:
        self._parts.append('"')
        self._append_date(year, month, day)
        self._parts.append(" ")
        self._append_time(hour, minute, second, micro_seconds)
        self._parts.append('"')

    def value_time(self, hour: int, minute: int, second: int, micro_seconds: int) -> None:
        self._parts.append('"')
        if hour < 0:
            self._parts.append("-")
            hour = -hour
        self._append_time(hour, minute, second, micro_seconds)
        self._parts.append('"')

    def value_timestamp(self, seconds_past_epoch: int, micro_seconds: int) -> None:
        self._parts.append(str(seconds_past_epoch))
        self._parts.append(_six_digits(micro_seconds, False))

    def value_opaque(self, column_type: ColumnType, value: bytes) -> None:
        self._parts.append('"' + base64.b64encode(value).decode("ascii") + '"')

    def next_entry(self) -> None:
        self._parts.append(",")