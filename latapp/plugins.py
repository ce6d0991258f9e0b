"""Selection of the contract plugin that handles a transaction, and result checks."""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional

SELECTOR_SIZE = 4
ADDRESS_LENGTH = 20
PLUGIN_ID_LENGTH = 30
INTERFACE_VERSION_1 = 1


class PluginMessage(enum.IntEnum):
    """Messages sent to a plugin."""

    INIT_CONTRACT = 0x0101
    PROVIDE_PARAMETER = 0x0102
    FINALIZE = 0x0103
    PROVIDE_TOKEN = 0x0104
    QUERY_CONTRACT_ID = 0x0105
    QUERY_CONTRACT_UI = 0x0106
    CHECK_PRESENCE = 0x01FF


class PluginResult(enum.IntEnum):
    """Result codes reported by a plugin; values up to UNSUCCESSFUL are failures."""

    ERROR = 0x00
    UNAVAILABLE = 0x01
    UNSUCCESSFUL = 0x02
    SUCCESSFUL = 0x03
    OK = 0x04
    OK_ALIAS = 0x05
    FALLBACK = 0x06


class UiType(enum.IntEnum):
    """How the plugin wants its transaction to be displayed."""

    AMOUNT_ADDRESS = 0x01
    GENERIC = 0x02


class PluginMismatchError(Exception):
    """Raised when a registered external plugin does not match the transaction."""


def _check_length(name: str, value: bytes, size: int) -> bytes:
    data = bytes(value)
    if len(data) != size:
        raise ValueError(f"{name} must be {size} bytes, got {len(data)}")
    return data


@dataclass(frozen=True)
class InternalPlugin:
    """A plugin built into the application, chosen by method selector."""

    alias: str
    selectors: tuple[bytes, ...]

    def handles(self, selector: bytes) -> bool:
        """Tell whether ``selector`` is one of this plugin's method selectors."""
        return bytes(selector) in self.selectors


@dataclass(frozen=True)
class ExternalPlugin:
    """A plugin registered for one contract address and method selector."""

    name: str
    contract_address: bytes
    method_selector: bytes

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "contract_address",
            _check_length("contract address", self.contract_address, ADDRESS_LENGTH),
        )
        object.__setattr__(
            self,
            "method_selector",
            _check_length("method selector", self.method_selector, SELECTOR_SIZE),
        )


STAKING_CONTRACT_ADDRESS = bytes.fromhex("1000000000000000000000000000000000000002")
REWARD_CONTRACT_ADDRESS = bytes.fromhex("1000000000000000000000000000000000000006")

PRC20_TRANSFER_SELECTOR = bytes((0xA9, 0x05, 0x9C, 0xBB))
PRC20_APPROVE_SELECTOR = bytes((0x09, 0x5E, 0xA7, 0xB3))
PRC721_TRANSFERFROM_SELECTOR = bytes((0x23, 0xB8, 0x72, 0xDD))

STAKING_PLUGIN = "staking"
REWARD_PLUGIN = "reward"

INTERNAL_PLUGINS: tuple[InternalPlugin, ...] = (
    InternalPlugin("prc20", (PRC20_TRANSFER_SELECTOR, PRC20_APPROVE_SELECTOR)),
    InternalPlugin("prc721", (PRC721_TRANSFERFROM_SELECTOR,)),
)


def select_plugin(
    contract_address: bytes,
    selector: bytes,
    external_plugin: Optional[ExternalPlugin] = None,
    availability: Optional[Mapping[str, bool]] = None,
) -> Optional[str]:
    """Return the name of the plugin handling a call, or ``None`` if there is none.

    A registered external plugin must match both the contract address and
    the method selector, otherwise ``PluginMismatchError`` is raised. The
    staking and reward system contracts take precedence over the built-in
    plugins, which are matched by selector; ``availability`` can mark a
    built-in plugin as unavailable by alias.
    """
    address = _check_length("contract address", contract_address, ADDRESS_LENGTH)
    method = _check_length("selector", selector, SELECTOR_SIZE)

    if external_plugin is not None:
        if address != external_plugin.contract_address:
            raise PluginMismatchError("contract address differs from the registered plugin")
        if method != external_plugin.method_selector:
            raise PluginMismatchError("method selector differs from the registered plugin")
        return external_plugin.name[:PLUGIN_ID_LENGTH]

    if address == STAKING_CONTRACT_ADDRESS:
        return STAKING_PLUGIN
    if address == REWARD_CONTRACT_ADDRESS:
        return REWARD_PLUGIN

    available = availability or {}
    for plugin in INTERNAL_PLUGINS:
        if plugin.handles(method) and available.get(plugin.alias, True):
            return plugin.alias
    return None


_STREAMING_MESSAGES = (
    PluginMessage.PROVIDE_PARAMETER,
    PluginMessage.FINALIZE,
    PluginMessage.PROVIDE_TOKEN,
)


def check_call_result(message: int, result: int) -> PluginResult:
    """Map the result a plugin reported for ``message`` to the overall outcome."""
    try:
        kind = PluginMessage(message)
    except ValueError:
        return PluginResult.UNAVAILABLE
    code = int(result)

    if kind is PluginMessage.INIT_CONTRACT:
        if code == PluginResult.OK:
            return PluginResult.OK
        if code == PluginResult.ERROR:
            return PluginResult.ERROR
        return PluginResult.UNAVAILABLE
    if kind in _STREAMING_MESSAGES:
        if code in (PluginResult.OK, PluginResult.FALLBACK):
            return PluginResult.OK
        if code == PluginResult.ERROR:
            return PluginResult.ERROR
        return PluginResult.UNAVAILABLE
    if kind is PluginMessage.QUERY_CONTRACT_ID:
        if code <= PluginResult.UNSUCCESSFUL:
            return PluginResult.UNAVAILABLE
        return PluginResult.OK
    if kind is PluginMessage.QUERY_CONTRACT_UI:
        if code <= PluginResult.OK:
            return PluginResult.UNAVAILABLE
        return PluginResult.OK
    return PluginResult.UNAVAILABLE