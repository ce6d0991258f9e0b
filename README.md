# latapp

Building blocks for a PlatON (LAT) wallet signer, in plain Python:

- `latapp.uint256` – fixed-width 128/256-bit arithmetic on `int` values with
  wrap-around semantics: `add256`, `sub256`, `mul256`, `shift_left256`,
  `shift_right256`, `divmod256`, `to_string256`, `read_u256_be` and their
  128-bit counterparts.
- `latapp.bech32` – bech32 encoding and decoding of 20-byte addresses
  (`encode`, `decode`, `convert_bits`); malformed input raises `Bech32Error`.
- `latapp.latutils` – Keccak-256 (`keccak256`), RLP header decoding
  (`rlp_can_decode`, `rlp_decode_length` returning an `RlpHeader`, errors as
  `RlpError`), address derivation from a 65-byte uncompressed public key
  (`address_from_public_key`, `address_string_from_key`,
  `address_string_from_binary`), decimal adjustment of amounts
  (`adjust_decimals`), and `ChainConfig` / `ChainKind` with the `PLATON`
  configuration (coin `LAT`, chain id 210425, prefix `lat`).
- `latapp.ustream` – an incremental RLP parser (`TxContext`) for legacy and
  EIP-2930 transactions. It is fed in chunks with `process`, can be resumed
  with `resume` after a custom processor suspends it, fills a `TxContent`,
  and keeps a running Keccak-256 of what it reads (`digest`).
- `latapp.utils` – `amount_to_string`, `uint256_to_decimal`, `u32_from_be`,
  `hex_upper` and `parse_swap_config` (returning a `SwapConfig`); bad input
  raises `FormatError`.
- `latapp.network` – chain id of a parsed transaction (`get_chain_id`) and
  lookup of known networks (`get_network`, `get_network_name`,
  `get_network_ticker`).
- `latapp.swap` – `get_printable_amount` and `copy_transaction_parameters`
  (returning `TransactionStrings`) for exchange flows; fees are always shown
  in the chain's coin with 18 decimals.
- `latapp.plugins` – `select_plugin` picks the plugin for a contract call
  (a registered `ExternalPlugin`, the staking and reward system contracts,
  or the built-in `prc20` / `prc721` selectors), and `check_call_result`
  maps a plugin's reported `PluginResult` for a `PluginMessage`.
- `latapp.poorstream` – `PoorStream`, a big-endian bit writer packing fields
  into 64-bit words.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Examples

Encode a 20-byte address as a bech32 `lat` address and decode it back:

```python
from latapp.bech32 import encode, decode

address = bytes(range(20))
text = encode(address, "lat")
assert decode(text, "lat") == address
```

Format a raw amount with a ticker:

```python
from latapp.utils import amount_to_string

amount = (1_500_000_000_000_000_000).to_bytes(32, "big")
print(amount_to_string(amount, 18, "LAT ", 50))  # LAT 1.5
```

Parse a serialized legacy transaction (`raw_transaction` is its bytes):

```python
from latapp.ustream import TxContext, TxType, ParserStatus

context = TxContext(tx_type=TxType.LEGACY)
status = context.process(raw_transaction, 0)
if status is ParserStatus.FINISHED:
    print(int(context.content.value), context.digest().hex())
```

## What this package does not do

It has no device transport or command handling, no key derivation from a
seed, no transaction or message signing and no user interface. The plugin
module chooses which plugin handles a call and interprets result codes, but
carries no plugin implementations that decode contract parameters.