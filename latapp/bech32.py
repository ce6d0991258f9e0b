"""Bech32 encoding of 20-byte account addresses."""

from __future__ import annotations

from collections.abc import Iterable

CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"

_CHARSET_REV = {
    **{char: index for index, char in enumerate(CHARSET)},
    **{char.upper(): index for index, char in enumerate(CHARSET)},
}

_GENERATORS = (0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3)

_ADDRESS_LENGTH = 20
_CHECKSUM_LENGTH = 6
_MAX_LENGTH = 90


class Bech32Error(ValueError):
    """Raised when a bech32 string or bit group cannot be decoded."""


def _polymod(values: Iterable[int]) -> int:
    chk = 1
    for value in values:
        top = chk >> 25
        chk = ((chk & 0x1FFFFFF) << 5) ^ value
        for index, generator in enumerate(_GENERATORS):
            if (top >> index) & 1:
                chk ^= generator
    return chk


def _expand_hrp(hrp: str) -> list[int]:
    codes = [ord(char) for char in hrp]
    return [code >> 5 for code in codes] + [0] + [code & 0x1F for code in codes]


def _create_checksum(hrp: str, values: list[int]) -> list[int]:
    mod = _polymod(_expand_hrp(hrp) + values + [0] * _CHECKSUM_LENGTH) ^ 1
    return [(mod >> (5 * (5 - i))) & 31 for i in range(_CHECKSUM_LENGTH)]


def _verify_checksum(hrp: str, values: list[int]) -> bool:
    return _polymod(_expand_hrp(hrp) + values) == 1


def convert_bits(
    data: Iterable[int], from_bits: int, to_bits: int, pad: bool
) -> list[int]:
    """Regroup a sequence of ``from_bits``-wide values into ``to_bits``-wide ones.

    With ``pad`` the last group is zero-padded; without it, leftover bits must
    be fewer than ``from_bits`` and all zero, or ``Bech32Error`` is raised.
    """
    acc = 0
    bits = 0
    maxv = (1 << to_bits) - 1
    max_acc = (1 << (from_bits + to_bits - 1)) - 1
    out: list[int] = []
    for value in data:
        if value < 0 or value >> from_bits:
            raise Bech32Error(f"value {value} does not fit in {from_bits} bits")
        acc = ((acc << from_bits) | value) & max_acc
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            out.append((acc >> bits) & maxv)
    if pad:
        if bits:
            out.append((acc << (to_bits - bits)) & maxv)
    elif bits >= from_bits or ((acc << (to_bits - bits)) & maxv):
        raise Bech32Error("invalid padding in bit conversion")
    return out


def encode(address: bytes, hrp: str) -> str:
    """Encode a 20-byte address with the human-readable part ``hrp``."""
    data = bytes(address)
    if len(data) != _ADDRESS_LENGTH:
        raise ValueError(f"address must be {_ADDRESS_LENGTH} bytes, got {len(data)}")
    if not hrp:
        raise ValueError("human-readable part must not be empty")
    values = convert_bits(data, 8, 5, True)
    combined = values + _create_checksum(hrp, values)
    return hrp + "1" + "".join(CHARSET[value] for value in combined)


def decode(address: str, hrp: str) -> bytes:
    """Decode a bech32 address whose human-readable part must equal ``hrp``.

    Returns the 20 address bytes; raises ``Bech32Error`` on any malformed
    string, wrong prefix, bad checksum or wrong payload length.
    """
    if any(not 33 <= ord(char) <= 126 for char in address):
        raise Bech32Error("address contains characters outside the printable range")
    has_lower = any("a" <= char <= "z" for char in address)
    has_upper = any("A" <= char <= "Z" for char in address)
    if has_lower and has_upper:
        raise Bech32Error("address mixes upper and lower case")

    pos = address.rfind("1")
    if len(address) > _MAX_LENGTH or pos < 1 or pos + 7 > len(address):
        raise Bech32Error("address has an invalid length or separator position")

    values = []
    for char in address[pos + 1 :]:
        value = _CHARSET_REV.get(char)
        if value is None:
            raise Bech32Error(f"invalid bech32 character {char!r}")
        values.append(value)

    prefix = address[:pos].lower()
    if prefix != hrp:
        raise Bech32Error(f"expected prefix {hrp!r}, got {prefix!r}")
    if not _verify_checksum(prefix, values):
        raise Bech32Error("checksum mismatch")

    converted = convert_bits(values[:-_CHECKSUM_LENGTH], 5, 8, False)
    if len(converted) != _ADDRESS_LENGTH:
        raise Bech32Error(
            f"payload is {len(converted)} bytes, expected {_ADDRESS_LENGTH}"
        )
    return bytes(converted)