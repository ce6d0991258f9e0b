"""PlatON wallet primitives: uint256 arithmetic, bech32, RLP transaction parsing, amount formatting and plugin selection."""

__version__ = "2.0.0"

__all__ = [
    "bech32",
    "latutils",
    "network",
    "plugins",
    "poorstream",
    "swap",
    "uint256",
    "ustream",
    "utils",
]