"""RLP header decoding, address derivation and decimal formatting helpers."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from Crypto.Hash import keccak

from latapp.bech32 import encode

PLATON_MAINNET_CHAINID = 100


class ChainKind(enum.Enum):
    """Family of chain the application runs for."""

    PLATON = 0
    PLATON_CLASSIC = 1


@dataclass(frozen=True)
class ChainConfig:
    """Static description of a chain: ticker, id, kind and address prefix."""

    coin_name: str
    chain_id: int
    kind: ChainKind
    hrp: str


PLATON = ChainConfig(coin_name="LAT", chain_id=210425, kind=ChainKind.PLATON, hrp="lat")


@dataclass(frozen=True)
class RlpHeader:
    """Decoded RLP item header: payload length, header size and list flag."""

    length: int
    offset: int
    is_list: bool


class RlpError(ValueError):
    """Raised when an RLP header is malformed or unsupported."""


def keccak256(data: bytes) -> bytes:
    """Return the Keccak-256 digest of ``data``."""
    return keccak.new(digest_bits=256, data=bytes(data)).digest()


def rlp_can_decode(buffer: bytes) -> bool:
    """Tell whether ``buffer`` holds enough bytes to decode an RLP header.

    Raises ``RlpError`` once it is known that the header uses a length of
    more than four bytes, which is not supported.
    """
    if not buffer:
        return False
    first = buffer[0]
    if 0xB7 < first <= 0xBF:
        if len(buffer) < 1 + (first - 0xB7):
            return False
        if first > 0xBB:
            raise RlpError("string length wider than 32 bits")
    elif first > 0xF7:
        if len(buffer) < 1 + (first - 0xF7):
            return False
        if first > 0xFB:
            raise RlpError("list length wider than 32 bits")
    return True


def rlp_decode_length(buffer: bytes) -> RlpHeader:
    """Decode the RLP header at the start of ``buffer``."""
    if not buffer:
        raise RlpError("empty RLP buffer")
    first = buffer[0]
    if first <= 0x7F:
        return RlpHeader(length=1, offset=0, is_list=False)
    if first <= 0xB7:
        return RlpHeader(length=first - 0x80, offset=1, is_list=False)
    if first <= 0xBF:
        size, is_list = first - 0xB7, False
    elif first <= 0xF7:
        return RlpHeader(length=first - 0xC0, offset=1, is_list=True)
    else:
        size, is_list = first - 0xF7, True
    if size > 4:
        raise RlpError("length wider than 32 bits")
    if len(buffer) < 1 + size:
        raise RlpError("truncated RLP length")
    length = int.from_bytes(bytes(buffer[1 : 1 + size]), "big")
    return RlpHeader(length=length, offset=1 + size, is_list=is_list)


def address_from_public_key(public_key: bytes) -> bytes:
    """Derive the 20-byte address from a 65-byte uncompressed public key."""
    key = bytes(public_key)
    if len(key) != 65:
        raise ValueError(f"public key must be 65 bytes, got {len(key)}")
    return keccak256(key[1:])[12:]


def address_string_from_binary(address: bytes, chain_config: ChainConfig) -> str:
    """Render a 20-byte address as a bech32 string with the chain's prefix."""
    return encode(address, chain_config.hrp)


def address_string_from_key(public_key: bytes, chain_config: ChainConfig) -> str:
    """Derive and render the bech32 address of an uncompressed public key."""
    return address_string_from_binary(address_from_public_key(public_key), chain_config)


def adjust_decimals(amount: str, decimals: int, target_length: int | None = None) -> str:
    """Insert a decimal point ``decimals`` digits from the right of ``amount``.

    Trailing zeros of the fractional part are dropped, and so is a point
    left with nothing after it. ``target_length`` is the size of the output
    buffer including its terminator; ``ValueError`` is raised if the
    result could not fit.
    """
    if not amount or not amount.isdigit():
        raise ValueError(f"amount must be a string of digits, got {amount!r}")
    if decimals < 0:
        raise ValueError("decimals must not be negative")
    size = len(amount)

    if amount == "0":
        if target_length is not None and target_length < 2:
            raise ValueError("output too small")
        return "0"

    if size <= decimals:
        delta = decimals - size
        if target_length is not None and target_length < size + 3 + delta:
            raise ValueError("output too small")
        prefix = "0." + "0" * delta
        fraction = amount
    else:
        delta = size - decimals
        if target_length is not None and target_length < size + 2:
            raise ValueError("output too small")
        prefix = amount[:delta] + ("." if decimals else "")
        fraction = amount[delta:]

    stripped = fraction.rstrip("0")
    if stripped != fraction and not stripped and prefix.endswith("."):
        prefix = prefix[:-1]
    return prefix + stripped