"""Streaming RLP parser for legacy and EIP-2930 transactions.

The parser is fed one chunk of the serialized transaction at a time and
keeps a running Keccak-256 of every byte it consumes, so the signing hash is
available as soon as parsing finishes.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Optional

from Crypto.Hash import keccak

from latapp.latutils import rlp_can_decode, rlp_decode_length

TX_FLAG_TYPE = 0x01
ADDRESS_LENGTH = 20
INT256_LENGTH = 32

MIN_TX_TYPE = 0x00
MAX_TX_TYPE = 0x7F

RLP_NONE = 0

_MAX_INT256 = 32
_MAX_ADDRESS = 20
_MAX_V = 4
_RLP_BUFFER_SIZE = 5


class TxType(enum.IntEnum):
    """EIP-2718 transaction type; legacy transactions start at 0xc0."""

    EIP2930 = 0x01
    LEGACY = 0xC0


class ParserStatus(enum.Enum):
    """Outcome of feeding data to the parser."""

    PROCESSING = 0
    SUSPENDED = 1
    FINISHED = 2
    FAULT = 3
    CONTINUE = 4


class CustomStatus(enum.Enum):
    """Answer of a custom field processor."""

    NOT_HANDLED = 0
    HANDLED = 1
    SUSPENDED = 2
    FAULT = 3


class LegacyField(enum.IntEnum):
    """Fields of a legacy transaction, in wire order."""

    NONE = RLP_NONE
    CONTENT = 1
    TYPE = 2
    NONCE = 3
    GASPRICE = 4
    STARTGAS = 5
    TO = 6
    VALUE = 7
    DATA = 8
    V = 9
    R = 10
    S = 11
    DONE = 12


class Eip2930Field(enum.IntEnum):
    """Fields of an EIP-2930 transaction, in wire order."""

    NONE = RLP_NONE
    CONTENT = 1
    TYPE = 2
    CHAINID = 3
    NONCE = 4
    GASPRICE = 5
    GASLIMIT = 6
    TO = 7
    VALUE = 8
    DATA = 9
    ACCESS_LIST = 10
    YPARITY = 11
    SENDER_R = 12
    SENDER_S = 13
    DONE = 14


@dataclass
class TxInt256:
    """Big-endian integer field of up to 32 bytes."""

    value: bytearray = field(default_factory=lambda: bytearray(INT256_LENGTH))
    length: int = 0

    @property
    def data(self) -> bytes:
        """The significant bytes of the field."""
        return bytes(self.value[: self.length])

    def __int__(self) -> int:
        return int.from_bytes(self.data, "big")


@dataclass
class TxContent:
    """Values extracted from a transaction while it is parsed."""

    gasprice: TxInt256 = field(default_factory=TxInt256)
    startgas: TxInt256 = field(default_factory=TxInt256)
    value: TxInt256 = field(default_factory=TxInt256)
    nonce: TxInt256 = field(default_factory=TxInt256)
    chain_id: TxInt256 = field(default_factory=TxInt256)
    destination: bytearray = field(default_factory=lambda: bytearray(ADDRESS_LENGTH))
    destination_length: int = 0
    v: bytearray = field(default_factory=lambda: bytearray(_MAX_V))
    v_length: int = 0


CustomProcessor = Callable[["TxContext"], CustomStatus]


class TxContext:
    """State of an incremental transaction parse.

    A custom processor, if given, is called for every field once its header
    is known; it may handle the field itself, let the default handling run,
    suspend parsing or abort it.
    """

    def __init__(
        self,
        tx_type: int = TxType.LEGACY,
        custom_processor: Optional[CustomProcessor] = None,
        extra: Any = None,
        content: Optional[TxContent] = None,
    ) -> None:
        self.tx_type = tx_type
        self.content = content if content is not None else TxContent()
        self.custom_processor = custom_processor
        self.extra = extra
        self.current_field = RLP_NONE + 1
        self.current_field_length = 0
        self.current_field_pos = 0
        self.current_field_is_list = False
        self.processing_field = False
        self.field_single_byte = False
        self.data_length = 0
        self.processing_flags = 0
        self._rlp_buffer = bytearray()
        self._buffer = b""
        self._pos = 0
        self._sha3 = keccak.new(digest_bits=256, update_after_digest=True)

    @property
    def command_length(self) -> int:
        """Number of bytes of the current chunk not consumed yet."""
        return len(self._buffer) - self._pos

    def digest(self) -> bytes:
        """Keccak-256 of every byte hashed so far."""
        return self._sha3.digest()

    def process(self, data: bytes, processing_flags: int = 0) -> ParserStatus:
        """Feed a new chunk of the transaction and parse as far as possible."""
        self._buffer = bytes(data)
        self._pos = 0
        self.processing_flags = processing_flags
        return self.resume()

    def resume(self) -> ParserStatus:
        """Continue parsing the current chunk, e.g. after a suspension."""
        try:
            return self._process_internal()
        except ValueError:
            return ParserStatus.FAULT

    def read_byte(self) -> int:
        """Consume one byte of the current chunk."""
        if self.command_length < 1:
            raise ValueError("read past the end of the buffer")
        byte = self._buffer[self._pos]
        self._pos += 1
        if self.processing_field:
            self.current_field_pos += 1
        if not (self.processing_field and self.field_single_byte):
            self._sha3.update(bytes((byte,)))
        return byte

    def copy_data(self, length: int) -> bytes:
        """Consume ``length`` bytes of the current chunk and return them."""
        if length < 0 or self.command_length < length:
            raise ValueError("copy past the end of the buffer")
        chunk = self._buffer[self._pos : self._pos + length]
        if not (self.processing_field and self.field_single_byte):
            self._sha3.update(chunk)
        self._pos += length
        if self.processing_field:
            self.current_field_pos += length
        return chunk

    def _next_field(self) -> None:
        self.current_field += 1
        self.processing_field = False

    def _copy_field(
        self,
        label: str,
        limit: Optional[int],
        target: Optional[bytearray] = None,
        anchored: bool = False,
    ) -> bool:
        """Copy the pending part of a scalar field; tell whether it is complete."""
        if self.current_field_is_list:
            raise ValueError(f"invalid type for {label}")
        if limit is not None and self.current_field_length > limit:
            raise ValueError(f"invalid length for {label}")
        if self.current_field_pos < self.current_field_length:
            offset = 0 if anchored else self.current_field_pos
            size = min(self.command_length, self.current_field_length - self.current_field_pos)
            chunk = self.copy_data(size)
            if target is not None:
                target[offset : offset + len(chunk)] = chunk
        return self.current_field_pos == self.current_field_length

    def _process_int(self, label: str, item: TxInt256, anchored: bool = False) -> None:
        if self._copy_field(label, _MAX_INT256, item.value, anchored):
            item.length = self.current_field_length
            self._next_field()

    def _process_content(self) -> None:
        if not self.current_field_is_list:
            raise ValueError("invalid type for RLP content")
        self.data_length = self.current_field_length
        self._next_field()
        if not self.processing_flags & TX_FLAG_TYPE:
            self.current_field += 1

    def _process_type(self) -> None:
        if self._copy_field("type", _MAX_INT256):
            self._next_field()

    def _process_chain_id(self) -> None:
        # Chain id and nonce are always written from the start of the field.
        self._process_int("chain id", self.content.chain_id, anchored=True)

    def _process_nonce(self) -> None:
        self._process_int("nonce", self.content.nonce, anchored=True)

    def _process_gasprice(self) -> None:
        self._process_int("gas price", self.content.gasprice)

    def _process_startgas(self) -> None:
        self._process_int("start gas", self.content.startgas)

    def _process_value(self) -> None:
        self._process_int("value", self.content.value)

    def _process_to(self) -> None:
        if self._copy_field("to", _MAX_ADDRESS, self.content.destination):
            self.content.destination_length = self.current_field_length
            self._next_field()

    def _process_data(self) -> None:
        if self._copy_field("data", None):
            self._next_field()

    def _process_v(self) -> None:
        if self._copy_field("v", _MAX_V, self.content.v):
            self.content.v_length = self.current_field_length
            self._next_field()

    def _process_access_list(self) -> None:
        if not self.current_field_is_list:
            raise ValueError("invalid type for access list")
        if self.current_field_pos < self.current_field_length:
            self.copy_data(
                min(self.command_length, self.current_field_length - self.current_field_pos)
            )
        if self.current_field_pos == self.current_field_length:
            self._next_field()

    def _process_legacy(self) -> None:
        handlers = {
            LegacyField.CONTENT: self._process_content,
            LegacyField.TYPE: self._process_type,
            LegacyField.NONCE: self._process_nonce,
            LegacyField.GASPRICE: self._process_gasprice,
            LegacyField.STARTGAS: self._process_startgas,
            LegacyField.TO: self._process_to,
            LegacyField.VALUE: self._process_value,
            LegacyField.DATA: self._process_data,
            LegacyField.R: self._process_data,
            LegacyField.S: self._process_data,
            LegacyField.V: self._process_v,
        }
        handler = handlers.get(self.current_field)
        if handler is None:
            raise ValueError("invalid RLP decoder state")
        handler()

    def _process_eip2930(self) -> None:
        handlers = {
            Eip2930Field.CONTENT: self._process_content,
            Eip2930Field.TYPE: self._process_type,
            Eip2930Field.CHAINID: self._process_chain_id,
            Eip2930Field.NONCE: self._process_nonce,
            Eip2930Field.GASPRICE: self._process_gasprice,
            Eip2930Field.GASLIMIT: self._process_startgas,
            Eip2930Field.TO: self._process_to,
            Eip2930Field.VALUE: self._process_value,
            Eip2930Field.YPARITY: self._process_v,
            Eip2930Field.ACCESS_LIST: self._process_access_list,
            Eip2930Field.DATA: self._process_data,
            Eip2930Field.SENDER_R: self._process_data,
            Eip2930Field.SENDER_S: self._process_data,
        }
        handler = handlers.get(self.current_field)
        if handler is None:
            raise ValueError("invalid RLP decoder state")
        handler()

    def _parsing_done(self) -> bool:
        return (self.tx_type == TxType.LEGACY and self.current_field == LegacyField.DONE) or (
            self.tx_type == TxType.EIP2930 and self.current_field == Eip2930Field.DONE
        )

    def _at_signature(self) -> bool:
        return (self.tx_type == TxType.LEGACY and self.current_field == LegacyField.V) or (
            self.tx_type == TxType.EIP2930 and self.current_field == Eip2930Field.YPARITY
        )

    def _parse_rlp(self) -> ParserStatus:
        while self.command_length:
            self._rlp_buffer.append(self.read_byte())
            if rlp_can_decode(self._rlp_buffer):
                break
            if len(self._rlp_buffer) == _RLP_BUFFER_SIZE:
                return ParserStatus.FAULT
        else:
            return ParserStatus.PROCESSING

        header = rlp_decode_length(self._rlp_buffer)
        self.current_field_length = header.length
        self.current_field_is_list = header.is_list
        if header.offset == 0:
            # A single self-encoded byte is its own payload: hand it back.
            self._pos -= 1
            self.field_single_byte = True
        else:
            self.field_single_byte = False
        self.current_field_pos = 0
        self._rlp_buffer.clear()
        self.processing_field = True
        return ParserStatus.CONTINUE

    def _process_internal(self) -> ParserStatus:
        while True:
            custom_status = CustomStatus.NOT_HANDLED
            if self._parsing_done():
                return ParserStatus.FINISHED
            if self._at_signature() and self.command_length == 0:
                # Transaction sent without signature fields.
                self.content.v_length = 0
                return ParserStatus.FINISHED
            if self.command_length == 0:
                return ParserStatus.PROCESSING
            if not self.processing_field:
                status = self._parse_rlp()
                if status is not ParserStatus.CONTINUE:
                    return status
            if self.custom_processor is not None:
                custom_status = self.custom_processor(self)
                if custom_status is CustomStatus.SUSPENDED:
                    return ParserStatus.SUSPENDED
                if custom_status not in (CustomStatus.NOT_HANDLED, CustomStatus.HANDLED):
                    return ParserStatus.FAULT
            if custom_status is CustomStatus.NOT_HANDLED:
                if self.tx_type == TxType.LEGACY:
                    self._process_legacy()
                elif self.tx_type == TxType.EIP2930:
                    self._process_eip2930()
                else:
                    return ParserStatus.FAULT