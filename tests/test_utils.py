from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from latapp.utils import (
    FormatError,
    SwapConfig,
    amount_to_string,
    hex_upper,
    parse_swap_config,
    u32_from_be,
    uint256_to_decimal,
)


def test_hex_upper_uses_uppercase_digits():
    assert hex_upper(b"\xde\xad") == "DEAD"


@given(st.binary(max_size=40))
def test_hex_upper_round_trip(data):
    text = hex_upper(data)
    assert bytes.fromhex(text) == data
    assert text == text.upper()


@given(st.integers(min_value=0, max_value=2**32 - 1), st.booleans())
def test_u32_from_be_round_trip(value, strict):
    assert u32_from_be(value.to_bytes(4, "big"), strict) == value


def test_u32_from_be_empty_is_zero():
    assert u32_from_be(b"", True) == 0


def test_u32_from_be_strict_rejects_long_input():
    with pytest.raises(FormatError):
        u32_from_be(bytes(range(1, 6)), True)


def test_u32_from_be_lenient_reads_first_four_bytes():
    data = bytes(range(1, 7))
    assert u32_from_be(data, False) == int.from_bytes(data[:4], "big")


@given(st.integers(min_value=0, max_value=2**256 - 1))
def test_uint256_to_decimal_matches_integer(value):
    assert uint256_to_decimal(value.to_bytes(32, "big")) == str(value)


def test_uint256_to_decimal_zero():
    assert uint256_to_decimal(bytes(5)) == "0"


def test_uint256_to_decimal_rejects_long_value():
    with pytest.raises(ValueError):
        uint256_to_decimal(bytes(33))


def test_uint256_to_decimal_rejects_small_output():
    with pytest.raises(ValueError):
        uint256_to_decimal((12345).to_bytes(2, "big"), 5)
    with pytest.raises(ValueError):
        uint256_to_decimal(b"\x00", 1)


def test_amount_to_string_one_ether():
    assert amount_to_string((10**18).to_bytes(8, "big"), 18, "LAT ", 30) == "LAT 1"


@given(
    st.integers(min_value=1, max_value=2**128),
    st.integers(min_value=0, max_value=30),
)
def test_amount_to_string_value_is_scaled(value, decimals):
    ticker = "ABC "
    text = amount_to_string(value.to_bytes(32, "big"), decimals, ticker)
    assert text.startswith(ticker)
    number = text[len(ticker):]
    assert Decimal(number) == Decimal(value).scaleb(-decimals)
    if "." in number:
        assert not number.endswith("0")


def test_amount_to_string_rejects_oversized_amount():
    with pytest.raises(FormatError):
        amount_to_string(bytes(40), 18, "LAT ", 30)


def test_amount_to_string_rejects_small_buffer():
    with pytest.raises(ValueError):
        amount_to_string(b"\xff" * 32, 0, "LAT ", 30)


def test_parse_swap_config_valid():
    config = bytes([3]) + b"LAT" + bytes([18])
    assert parse_swap_config(config) == SwapConfig(ticker="LAT ", decimals=18)


@pytest.mark.parametrize(
    "config",
    [
        b"",
        bytes([0]) + bytes([18]),
        bytes([11]) + b"ABCDEFGHIJK" + bytes([18]),
        bytes([5]) + b"LAT",
        bytes([3]) + b"LAT",
    ],
)
def test_parse_swap_config_rejects_bad_input(config):
    with pytest.raises(FormatError):
        parse_swap_config(config)