import pytest

from binlogkit.column_type import ColumnType, parse_string_column_meta


@pytest.mark.parametrize("member", [m for m in ColumnType if m is not ColumnType.UNKNOWN])
def test_from_code_round_trip(member):
    assert ColumnType.from_code(int(member)) is member


@pytest.mark.parametrize("code", [20, 100, 244])
def test_from_code_unknown(code):
    assert ColumnType.from_code(code) is ColumnType.UNKNOWN


def test_from_code_known_types():
    assert ColumnType.from_code(254) is ColumnType.STRING
    assert ColumnType.from_code(245) is ColumnType.JSON


def test_short_meta_is_unchanged():
    assert parse_string_column_meta(200, ColumnType.STRING) == (ColumnType.STRING, 200)


def test_non_string_type_is_unchanged():
    assert parse_string_column_meta(1020, ColumnType.VARCHAR) == (ColumnType.VARCHAR, 1020)


@pytest.mark.parametrize("member", [ColumnType.ENUM, ColumnType.SET])
def test_enum_and_set_are_resolved(member):
    meta = (int(member) << 8) | 2
    assert parse_string_column_meta(meta, ColumnType.STRING) == (member, 2)


def test_plain_string_short_length():
    meta = (int(ColumnType.STRING) << 8) | 0x40
    assert parse_string_column_meta(meta, ColumnType.STRING) == (ColumnType.STRING, 0x40)


@pytest.mark.parametrize("length", [256, 300, 765, 1020])
def test_long_string_length_round_trip(length):
    # the server stores the high bits of the length inverted inside the type byte
    byte0 = int(ColumnType.STRING) ^ ((length & 0x300) >> 4)
    meta = (byte0 << 8) | (length & 0xFF)
    assert parse_string_column_meta(meta, ColumnType.STRING) == (ColumnType.STRING, length)