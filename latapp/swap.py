"""Amount formatting and parameter checks requested by the exchange application."""

from __future__ import annotations

from dataclasses import dataclass

from latapp.latutils import ChainConfig
from latapp.utils import (
    MAX_TICKER_LEN,
    WEI_TO_ETHER,
    FormatError,
    amount_to_string,
    parse_swap_config,
)

PRINTABLE_AMOUNT_SIZE = 30
FULL_ADDRESS_SIZE = 43
FULL_AMOUNT_SIZE = 90
MAX_FEE_SIZE = 50

_MAX_AMOUNT_LENGTH = 32
_MAX_FEE_LENGTH = 8
_COIN_NAME_SIZE = 10


@dataclass(frozen=True)
class TransactionStrings:
    """Display strings prepared for a swap transaction."""

    full_address: str
    full_amount: str
    max_fee: str


def get_printable_amount(
    coin_configuration: bytes, amount: bytes, is_fee: bool, chain_config: ChainConfig
) -> str:
    """Format ``amount`` for display.

    Fees are always shown in the chain's own coin with 18 decimals, whatever
    the coin configuration says.
    """
    if len(amount) > _MAX_AMOUNT_LENGTH:
        raise FormatError(
            f"amount is {len(amount)} bytes, at most {_MAX_AMOUNT_LENGTH} allowed"
        )
    config = parse_swap_config(coin_configuration)
    ticker, decimals = config.ticker, config.decimals
    if is_fee:
        ticker = chain_config.coin_name[:_COIN_NAME_SIZE] + " "
        decimals = WEI_TO_ETHER
    return amount_to_string(amount, decimals, ticker, PRINTABLE_AMOUNT_SIZE)


def copy_transaction_parameters(
    coin_configuration: bytes,
    amount: bytes,
    fee_amount: bytes,
    destination_address: str,
    chain_config: ChainConfig,
) -> TransactionStrings:
    """Check the swap parameters and build the strings shown for the transaction."""
    if (
        len(destination_address) >= FULL_ADDRESS_SIZE
        or len(amount) > _MAX_AMOUNT_LENGTH
        or len(fee_amount) > _MAX_FEE_LENGTH
    ):
        raise FormatError("swap transaction parameters exceed their limits")
    config = parse_swap_config(coin_configuration)
    full_amount = amount_to_string(amount, config.decimals, config.ticker, FULL_AMOUNT_SIZE)
    fee_ticker = chain_config.coin_name[: MAX_TICKER_LEN - 1]
    max_fee = amount_to_string(fee_amount, WEI_TO_ETHER, fee_ticker, MAX_FEE_SIZE)
    return TransactionStrings(
        full_address=destination_address, full_amount=full_amount, max_fee=max_fee
    )