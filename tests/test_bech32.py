import pytest
from hypothesis import given
from hypothesis import strategies as st

from latapp.bech32 import CHARSET, Bech32Error, convert_bits, decode, encode

ADDRESS = bytes(range(1, 21))


@given(st.binary(min_size=20, max_size=20))
def test_round_trip(address):
    assert decode(encode(address, "lat"), "lat") == address


@given(st.binary(max_size=64))
def test_convert_bits_round_trip(data):
    five = convert_bits(data, 8, 5, True)
    assert all(0 <= v < 32 for v in five)
    assert convert_bits(five, 5, 8, False) == list(data)


def test_convert_bits_pads_last_group():
    assert convert_bits([0xFF], 8, 5, True) == [31, 28]


def test_convert_bits_rejects_nonzero_padding():
    with pytest.raises(Bech32Error):
        convert_bits([31, 31], 5, 8, False)


def test_convert_bits_rejects_out_of_range_value():
    with pytest.raises(Bech32Error):
        convert_bits([256], 8, 5, True)


def test_encoded_shape():
    text = encode(ADDRESS, "lat")
    assert text.startswith("lat1")
    assert len(text) == 3 + 1 + 32 + 6
    assert all(char in CHARSET for char in text[4:])


def test_encode_rejects_wrong_length():
    with pytest.raises(ValueError):
        encode(bytes(19), "lat")


def test_decode_accepts_upper_case():
    text = encode(ADDRESS, "lat").upper()
    assert decode(text, "lat") == ADDRESS


def test_decode_rejects_mixed_case():
    text = encode(ADDRESS, "lat")
    mixed = text[:5] + text[5:].upper()
    with pytest.raises(Bech32Error):
        decode(mixed, "lat")


def test_decode_rejects_corrupted_checksum():
    text = encode(ADDRESS, "lat")
    last = text[-1]
    replacement = CHARSET[(CHARSET.index(last) + 1) % 32]
    with pytest.raises(Bech32Error):
        decode(text[:-1] + replacement, "lat")


def test_decode_rejects_other_prefix():
    text = encode(ADDRESS, "atp")
    with pytest.raises(Bech32Error):
        decode(text, "lat")


def test_decode_rejects_invalid_character():
    text = encode(ADDRESS, "lat")
    with pytest.raises(Bech32Error):
        decode(text[:6] + "b" + text[7:], "lat")


def test_decode_rejects_missing_separator():
    with pytest.raises(Bech32Error):
        decode("latqqqqqqqqqq", "lat")


def test_decode_rejects_too_long():
    with pytest.raises(Bech32Error):
        decode("lat1" + "q" * 90, "lat")