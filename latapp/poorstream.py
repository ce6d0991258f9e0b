"""Big-endian bit writer that packs values into 64-bit words."""

from __future__ import annotations

_WORD_BITS = 64
_WORD_BYTES = 8
_WORD_MASK = (1 << _WORD_BITS) - 1


class PoorStream:
    """Writes bit fields most significant bit first into 64-bit words.

    A word is written out automatically once it is full; ``flush`` writes
    the partly filled current word in place without moving past it.
    """

    def __init__(self) -> None:
        self._out = bytearray()
        self._pos = 0
        self.offset = 0
        self.accumulator = 0

    def write_bits(self, bits: int, num_bits: int) -> None:
        """Append the low ``num_bits`` (1 to 64) bits of ``bits``."""
        if not 1 <= num_bits <= _WORD_BITS:
            raise ValueError(f"num_bits must be between 1 and 64, got {num_bits}")
        if bits < 0 or bits >> num_bits:
            raise ValueError(f"value {bits} does not fit in {num_bits} bits")
        self.offset += num_bits
        if self.offset < _WORD_BITS:
            self.accumulator |= (bits << (_WORD_BITS - self.offset)) & _WORD_MASK
            return
        self.offset -= _WORD_BITS
        head_mask = (1 << (num_bits - self.offset)) - 1
        self.accumulator |= (bits >> self.offset) & head_mask
        self.flush()
        self.accumulator = 0
        self._pos += _WORD_BYTES
        if self.offset:
            tail_mask = (1 << self.offset) - 1
            self.accumulator |= (bits & tail_mask) << (_WORD_BITS - self.offset)

    def flush(self) -> None:
        """Write the current word at the current position."""
        end = self._pos + _WORD_BYTES
        if len(self._out) < end:
            self._out.extend(bytes(end - len(self._out)))
        self._out[self._pos : end] = self.accumulator.to_bytes(_WORD_BYTES, "big")

    def getvalue(self) -> bytes:
        """Return every byte written so far."""
        return bytes(self._out)