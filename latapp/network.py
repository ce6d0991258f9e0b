"""Lookup of known networks by chain id."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from latapp.latutils import ChainConfig
from latapp.ustream import TxContext, TxType
from latapp.utils import u32_from_be

NETWORK_STRING_MAX_SIZE = 12


@dataclass(frozen=True)
class NetworkInfo:
    """A known network: display name, ticker and chain id."""

    name: str
    ticker: str
    chain_id: int


NETWORK_MAPPING: tuple[NetworkInfo, ...] = (
    NetworkInfo(name="Platon", ticker="LAT", chain_id=210425),
)


def get_chain_id(context: TxContext) -> int:
    """Return the chain id of a parsed transaction, or 0 for an unknown type."""
    content = context.content
    if context.tx_type == TxType.LEGACY:
        return u32_from_be(bytes(content.v[: content.v_length]), True)
    if context.tx_type == TxType.EIP2930:
        return u32_from_be(content.chain_id.data, True)
    return 0


def get_network(chain_id: int) -> Optional[NetworkInfo]:
    """Return the network registered for ``chain_id``, if any."""
    return next((net for net in NETWORK_MAPPING if net.chain_id == chain_id), None)


def get_network_name(chain_id: int) -> Optional[str]:
    """Return the name of the network for ``chain_id``, if any."""
    network = get_network(chain_id)
    return network.name if network is not None else None


def get_network_ticker(chain_id: int, chain_config: ChainConfig) -> str:
    """Return the network's ticker, falling back to the chain's coin name."""
    network = get_network(chain_id)
    return network.ticker if network is not None else chain_config.coin_name