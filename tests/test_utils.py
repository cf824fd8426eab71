import json

import pytest

from evm_mcp.tools.utils import clean, format_ether, format_gwei, format_units, parse_ether


@pytest.mark.parametrize(
    "value,decimals,expected",
    [
        (0, 18, "0"),
        (1, 18, "0.000000000000000001"),
        (10**18, 18, "1"),
        (1500000000000000000, 18, "1.5"),
        (123456789012345678901234567890, 18, "123456789012.34567890123456789"),
        (-25, 1, "-2.5"),
        (42, 0, "42"),
    ],
)
def test_format_units(value, decimals, expected):
    assert format_units(value, decimals) == expected


def test_format_ether_and_gwei():
    assert format_ether(2 * 10**18 + 1) == "2.000000000000000001"
    assert format_gwei(30_500_000_000) == "30.5"
    assert format_gwei(1) == "0.000000001"


def test_parse_ether():
    assert parse_ether("1") == 10**18
    assert parse_ether("0.000000000000000001") == 1
    assert parse_ether("1.25") == 1250000000000000000


def test_clean_produces_json_safe_structure():
    payload = {
        "number": 2**70,
        "flag": True,
        "ratio": 0.5,
        "missing": None,
        "_internal": "x",
        "raw": b"\x01\x02",
        "nested": [{"value": 1, "none": None}, (2, 3)],
    }
    cleaned = clean(payload)
    assert cleaned == {
        "number": str(2**70),
        "flag": True,
        "ratio": 0.5,
        "raw": "0x0102",
        "nested": [{"value": "1"}, ["2", "3"]],
    }
    json.dumps(cleaned)


def test_clean_passes_through_scalars():
    assert clean(None) is None
    assert clean("0xabc") == "0xabc"
    assert clean(False) is False
