"""Callback interface used while walking a binary JSON document."""

from abc import ABC, abstractmethod

from .column_type import ColumnType


class JsonFormatter(ABC):
    """Receives the parts of a binary JSON document in document order."""

    @abstractmethod
    def begin_object(self, num_elements: int) -> None:
        """Start an object holding num_elements members."""

    @abstractmethod
    def begin_array(self, num_elements: int) -> None:
        """Start an array holding num_elements items."""

    @abstractmethod
    def end_object(self) -> None:
        """Finish the current object."""

    @abstractmethod
    def end_array(self) -> None:
        """Finish the current array."""

    @abstractmethod
    def name(self, name: str) -> None:
        """Emit the key of the next object member."""

    @abstractmethod
    def value_string(self, value: str) -> None:
        """Emit a string value."""

    @abstractmethod
    def value_int(self, value: int) -> None:
        """Emit a 32-bit integer value."""

    @abstractmethod
    def value_long(self, value: int) -> None:
        """Emit a 64-bit integer value."""

    @abstractmethod
    def value_double(self, value: float) -> None:
        """Emit a floating point value."""

    @abstractmethod
    def value_big_int(self, value: int) -> None:
        """Emit an integer that may exceed 64 signed bits."""

    @abstractmethod
    def value_decimal(self, value: str) -> None:
        """Emit a decimal value given as its text form."""

    @abstractmethod
    def value_bool(self, value: bool) -> None:
        """Emit a boolean value."""

    @abstractmethod
    def value_null(self) -> None:
        """Emit null."""

    @abstractmethod
    def value_year(self, year: int) -> None:
        """Emit a year value."""

    @abstractmethod
    def value_date(self, year: int, month: int, day: int) -> None:
        """Emit a date value."""

    @abstractmethod
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
        """Emit a date-time value."""

    @abstractmethod
    def value_time(self, hour: int, minute: int, second: int, micro_seconds: int) -> None:
        """Emit a time value; a negative hour marks a negative time."""

    @abstractmethod
    def value_timestamp(self, seconds_past_epoch: int, micro_seconds: int) -> None:
        """Emit a timestamp value."""

    @abstractmethod
    def value_opaque(self, column_type: ColumnType, value: bytes) -> None:
        """Emit an opaque value of the given column type."""

    @abstractmethod
    def next_entry(self) -> None:
        """Separate two entries of an object or array."""