"""Hex, integer and amount formatting helpers shared by the signing flows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from latapp.latutils import adjust_decimals

MAX_TICKER_LEN = 12  # 10 characters + ' ' + terminator
WEI_TO_ETHER = 18
INT256_LENGTH = 32

_DECIMAL_BUFFER_SIZE = 100
AMOUNT_FORMAT_ERROR = 0x6504


class FormatError(ValueError):
    """Raised when binary input does not have the expected format."""


@dataclass(frozen=True)
class SwapConfig:
    """Coin configuration sent by the exchange: ticker (with a trailing space) and decimals."""

    ticker: str
    decimals: int


def hex_upper(data: bytes) -> str:
    """Render ``data`` as uppercase hexadecimal."""
    return bytes(data).hex().upper()


def u32_from_be(data: bytes, strict: bool = False) -> int:
    """Read a big-endian unsigned integer of at most four bytes.

    Longer input raises ``FormatError`` when ``strict``; otherwise only the
    first four bytes are read.
    """
    raw = bytes(data)
    if len(raw) > 4:
        if strict:
            raise FormatError(f"expected at most 4 bytes, got {len(raw)}")
        raw = raw[:4]
    return int.from_bytes(raw, "big")


def uint256_to_decimal(value: bytes, out_length: Optional[int] = None) -> str:
    """Render a big-endian integer of up to 32 bytes in decimal.

    ``out_length`` is the size of the output buffer including its
    terminator; ``ValueError`` is raised if the digits would not fit.
    """
    raw = bytes(value)
    if len(raw) > INT256_LENGTH:
        raise ValueError(f"value is {len(raw)} bytes, at most {INT256_LENGTH} allowed")
    text = str(int.from_bytes(raw, "big"))
    if out_length is not None and len(text) >= out_length:
        raise ValueError(f"{len(text)} digits do not fit in a buffer of {out_length}")
    return text


def amount_to_string(
    amount: bytes, decimals: int, ticker: str, out_size: Optional[int] = None
) -> str:
    """Format a raw big-endian amount as ``ticker`` followed by a decimal number.

    ``out_size`` is the size of the output buffer including its terminator.
    """
    try:
        digits = uint256_to_decimal(amount, _DECIMAL_BUFFER_SIZE)
    except ValueError as exc:
        raise FormatError(f"cannot format amount (status {AMOUNT_FORMAT_ERROR:#06x})") from exc

    ticker = ticker[:MAX_TICKER_LEN]
    if out_size is None:
        return ticker + adjust_decimals(digits, decimals)
    number = adjust_decimals(digits, decimals, out_size - len(ticker) - 1)
    return (ticker + number)[: out_size - 1]


def parse_swap_config(config: bytes) -> SwapConfig:
    """Parse a coin configuration: a length-prefixed ticker followed by decimals."""
    raw = bytes(config)
    if not raw:
        raise FormatError("empty coin configuration")
    ticker_len = raw[0]
    if ticker_len == 0 or ticker_len > MAX_TICKER_LEN - 2 or len(raw) - 1 < ticker_len:
        raise FormatError(f"invalid ticker length {ticker_len}")
    ticker = raw[1 : 1 + ticker_len].decode("latin-1") + " "
    rest = raw[1 + ticker_len :]
    if not rest:
        raise FormatError("coin configuration lacks decimals")
    return SwapConfig(ticker=ticker, decimals=rest[0])