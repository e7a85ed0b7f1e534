"""Column type codes as they appear in table map events."""

from enum import IntEnum


class ColumnType(IntEnum):
    """Column type codes used in the binlog."""

    UNKNOWN = -1
    DECIMAL = 0
    TINY = 1
    SHORT = 2
    LONG = 3
    FLOAT = 4
    DOUBLE = 5
    NULL = 6
    TIMESTAMP = 7
    LONGLONG = 8
    INT24 = 9
    DATE = 10
    TIME = 11
    DATETIME = 12
    YEAR = 13
    # Only used internally; never present in a binlog.
    NEWDATE = 14
    VARCHAR = 15
    BIT = 16
    TIMESTAMP2 = 17
    DATETIME2 = 18
    TIME2 = 19
    JSON = 245
    NEWDECIMAL = 246
    # The following five are only used internally; never present in a binlog.
    ENUM = 247
    SET = 248
    TINY_BLOB = 249
    MEDIUM_BLOB = 250
    LONG_BLOB = 251
    BLOB = 252
    VAR_STRING = 253
    STRING = 254
    GEOMETRY = 255

    @classmethod
    def from_code(cls, code: int) -> "ColumnType":
        """Return the type for a code, or UNKNOWN if the code is not known."""
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN


def parse_string_column_meta(column_meta: int, column_type: int) -> tuple[int, int]:
    """Resolve the real type code and length of a STRING column from its metadata.

    ENUM and SET columns are recorded as STRING in the binlog; their real type
    and the column length are packed into the metadata.
    """
    real_column_type = column_type
    column_length = column_meta

    if column_type == ColumnType.STRING and column_meta >= 256:
        byte0 = column_meta >> 8
        byte1 = column_meta & 0xFF
        if (byte0 & 0x30) != 0x30:
            real_column_type = (byte0 | 0x30) & 0xFF
            column_length = byte1 | (((byte0 & 0x30) ^ 0x30) << 4)
        else:
            if byte0 in (ColumnType.ENUM, ColumnType.SET):
                real_column_type = byte0
            column_length = byte1

    return real_column_type, column_length