import pytest

from binlogkit.json_value_type import JsonValueType


@pytest.mark.parametrize("member", list(JsonValueType))
def test_by_code_round_trip(member):
    assert JsonValueType.by_code(int(member)) is member


@pytest.mark.parametrize("code", [0x0D, 0x0E, 0x10, 0xFF])
def test_by_code_unknown(code):
    assert JsonValueType.by_code(code) is None


def test_custom_and_string_codes():
    assert JsonValueType.by_code(0x0F) is JsonValueType.CUSTOM
    assert JsonValueType.by_code(0x0C) is JsonValueType.STRING