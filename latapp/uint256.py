"""Fixed-width unsigned 128- and 256-bit arithmetic on Python integers.

Values are plain ``int`` objects constrained to the range of the width.
Addition, subtraction, multiplication and left shifts wrap around modulo
2**width, as fixed-width machine integers do.
"""

from __future__ import annotations

_DIGITS = "0123456789abcdef"

_MASK128 = (1 << 128) - 1
_MASK256 = (1 << 256) - 1


def _check(value: int, width: int) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"expected an int, got {type(value).__name__}")
    if value < 0 or value >> width:
        raise ValueError(f"value does not fit in an unsigned {width}-bit integer")
    return value


def _read_be(buffer: bytes, width: int) -> int:
    size = width // 8
    data = bytes(buffer)
    if len(data) < size:
        raise ValueError(f"need {size} bytes, got {len(data)}")
    return int.from_bytes(data[:size], "big")


def read_u128_be(buffer: bytes) -> int:
    """Read a big-endian 128-bit integer from the first 16 bytes of ``buffer``."""
    return _read_be(buffer, 128)


def read_u256_be(buffer: bytes) -> int:
    """Read a big-endian 256-bit integer from the first 32 bytes of ``buffer``."""
    return _read_be(buffer, 256)


def add128(a: int, b: int) -> int:
    """Return ``a + b`` modulo 2**128."""
    return (_check(a, 128) + _check(b, 128)) & _MASK128


def add256(a: int, b: int) -> int:
    """Return ``a + b`` modulo 2**256."""
    return (_check(a, 256) + _check(b, 256)) & _MASK256


def sub128(a: int, b: int) -> int:
    """Return ``a - b`` modulo 2**128."""
    return (_check(a, 128) - _check(b, 128)) & _MASK128


def sub256(a: int, b: int) -> int:
    """Return ``a - b`` modulo 2**256."""
    return (_check(a, 256) - _check(b, 256)) & _MASK256


def mul128(a: int, b: int) -> int:
    """Return the low 128 bits of ``a * b``."""
    return (_check(a, 128) * _check(b, 128)) & _MASK128


def mul256(a: int, b: int) -> int:
    """Return the low 256 bits of ``a * b``."""
    return (_check(a, 256) * _check(b, 256)) & _MASK256


def _shift_left(number: int, bits: int, width: int, mask: int) -> int:
    _check(number, width)
    if bits < 0:
        raise ValueError("shift amount must not be negative")
    if bits >= width:
        return 0
    return (number << bits) & mask


def _shift_right(number: int, bits: int, width: int) -> int:
    _check(number, width)
    if bits < 0:
        raise ValueError("shift amount must not be negative")
    if bits >= width:
        return 0
    return number >> bits


def shift_left128(number: int, bits: int) -> int:
    """Shift left by ``bits``, discarding bits beyond 128; shifts of 128+ give 0."""
    return _shift_left(number, bits, 128, _MASK128)


def shift_left256(number: int, bits: int) -> int:
    """Shift left by ``bits``, discarding bits beyond 256; shifts of 256+ give 0."""
    return _shift_left(number, bits, 256, _MASK256)


def shift_right128(number: int, bits: int) -> int:
    """Logical right shift of a 128-bit value; shifts of 128+ give 0."""
    return _shift_right(number, bits, 128)


def shift_right256(number: int, bits: int) -> int:
    """Logical right shift of a 256-bit value; shifts of 256+ give 0."""
    return _shift_right(number, bits, 256)


def _divmod(left: int, right: int, width: int) -> tuple[int, int]:
    _check(left, width)
    _check(right, width)
    if right == 0:
        raise ZeroDivisionError("division by zero")
    if right > left:
        return 0, left

    # Binary long division: align the divisor with the dividend's top bit,
    # then subtract shifted copies from the remainder.
    diff_bits = left.bit_length() - right.bit_length()
    divisor = right << diff_bits
    adder = 1 << diff_bits
    if divisor > left:
        divisor >>= 1
        adder >>= 1
    quotient = 0
    remainder = left
    while remainder >= right:
        if remainder >= divisor:
            remainder -= divisor
            quotient |= adder
        divisor >>= 1
        adder >>= 1
    return quotient, remainder


def divmod128(left: int, right: int) -> tuple[int, int]:
    """Return ``(quotient, remainder)`` of two 128-bit values."""
    return _divmod(left, right, 128)


def divmod256(left: int, right: int) -> tuple[int, int]:
    """Return ``(quotient, remainder)`` of two 256-bit values."""
    return _divmod(left, right, 256)


def _to_string(number: int, base: int, out_length: int | None, width: int) -> str:
    _check(number, width)
    if not 2 <= base <= 16:
        raise ValueError(f"base must be between 2 and 16, got {base}")
    digits = []
    value = number
    while True:
        value, rem = _divmod(value, base, width)
        digits.append(_DIGITS[rem])
        if value == 0:
            break
    if out_length is not None and len(digits) > out_length:
        raise ValueError(
            f"{len(digits)} digits do not fit in an output of length {out_length}"
        )
    return "".join(reversed(digits))


def to_string128(number: int, base: int = 10, out_length: int | None = None) -> str:
    """Render a 128-bit value in ``base`` (2..16) with lowercase digits.

    Raises ``ValueError`` if the base is out of range or the digits exceed
    ``out_length`` characters.
    """
    return _to_string(number, base, out_length, 128)


def to_string256(number: int, base: int = 10, out_length: int | None = None) -> str:
    """Render a 256-bit value in ``base`` (2..16) with lowercase digits.

    Raises ``ValueError`` if the base is out of range or the digits exceed
    ``out_length`` characters.
    """
    return _to_string(number, base, out_length, 256)