"""Value type codes of the binary JSON format."""

from enum import IntEnum
from typing import Optional


class JsonValueType(IntEnum):
    """Type tag of a value inside a binary JSON document."""

    SMALL_DOCUMENT = 0x00
    LARGE_DOCUMENT = 0x01
    SMALL_ARRAY = 0x02
    LARGE_ARRAY = 0x03
    LITERAL = 0x04
    INT16 = 0x05
    UINT16 = 0x06
    INT32 = 0x07
    UINT32 = 0x08
    INT64 = 0x09
    UINT64 = 0x0A
    DOUBLE = 0x0B
    STRING = 0x0C
    CUSTOM = 0x0F

    @classmethod
    def by_code(cls, code: int) -> Optional["JsonValueType"]:
        """Return the type for a code, or None if the code is not known."""
        try:
            return cls(code)
        except ValueError:
            return None