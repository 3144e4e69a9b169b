# xmrcore

Building blocks for working with Monero transactions in pure Python: the
edwards25519 group, Keccak hashing, Pedersen commitments, the binary wire
format, addresses, CLSAG ring signatures, RingCT containers, transactions,
blocks and wallet output scanning. It also contains plain secp256k1 group
arithmetic and an in-memory model of a contract through which validator sets
vote on their multisig keys.

## Modules

- `xmrcore.ed25519`: `Point` (compress, decompress, add, subtract, negate,
  scalar multiplication, `is_torsion_free`, `mul_by_cofactor`) and scalar
  helpers (`base_mul`, `scalar_from_bytes_mod_order`,
  `scalar_from_bytes_mod_order_wide`, `scalar_from_canonical_bytes`,
  `scalar_to_bytes`, `scalar_invert`).
- `xmrcore.primitives`: `keccak256`, `hash_to_scalar`, `random_scalar` and
  `Commitment` (`mask*G + amount*H`).
- `xmrcore.serialize`: varints, scalars, points and vectors on binary streams.
- `xmrcore.hash_to_point`: `hash_to_point`, mapping a point into the
  prime-order subgroup.
- `xmrcore.base58`: block-wise Base58 with `encode`, `decode`,
  `encode_check` and `decode_check` (4-byte Keccak checksum).
- `xmrcore.address`: `Network`, `AddressType` (standard, integrated with an
  8-byte payment ID, subaddress), `AddressMeta`, `Address` (`Address.from_str`,
  `str(address)`), `AddressError` and `ViewPair.address`.
- `xmrcore.ring`: `Decoys` and `offset`, which turns sorted output indexes
  into relative offsets.
- `xmrcore.clsag`: `ClsagInput`, `Clsag.sign`, `Clsag.verify`, serialization
  and `ClsagError`.
- `xmrcore.bulletproofs`: the `Bulletproofs` wire format and
  `Bulletproofs.fee_weight`.
- `xmrcore.ringct`: `generate_key_image`, `RctBase`, `RctPrunable` and
  `RctSignatures`.
- `xmrcore.transaction`: `Input`, `Output`, `Timelock`, `TransactionPrefix`
  and `Transaction` with (de)serialization, `hash()` and `signature_hash()`.
- `xmrcore.block`: `BlockHeader` and `Block`.
- `xmrcore.extra`: `encode_tx_extra` and `parse_tx_extra` for the
  transaction public keys in the extra field.
- `xmrcore.scan`: `scan_transaction`, `SpendableOutput`, `Timelocked`, and
  the helpers `uniqueness`, `shared_key`, `amount_encryption`,
  `amount_decryption`, `commitment_mask` and `key_image_sort_key`.
- `xmrcore.secp256k1`: `AffinePoint`, `generator_mul` and `reduce_scalar`.
- `xmrcore.scale`: SCALE compact integers, byte vectors, options,
  `encode_keys` and `blake2x256`.
- `xmrcore.extension`: the `SeraiExtension` interface and `TestExtension`,
  five fixed validators (`test_validators()`) with one share each.
- `xmrcore.multisig`: `Multisig` with `vote`, `updated_at` and `key`, the
  `Vote` and `KeyGen` events with their topics, `Environment` and
  `MultisigError`.

## Installing

```
pip install xmrcore
```

## Examples

Build an address from a view pair and parse it back:

```python
from xmrcore.address import Address, AddressType, Network, ViewPair
from xmrcore.ed25519 import base_mul
from xmrcore.primitives import random_scalar

pair = ViewPair(spend=base_mul(random_scalar()), view=random_scalar())
addr = pair.address(Network.MAINNET, AddressType.standard(), False)
text = str(addr)
assert Address.from_str(text, Network.MAINNET) == addr
```

Sign and verify a CLSAG:

```python
import secrets
from xmrcore.primitives import Commitment, random_scalar
from xmrcore.ed25519 import base_mul
from xmrcore.ring import Decoys
from xmrcore.ringct import generate_key_image
from xmrcore.clsag import Clsag, ClsagInput

rng = secrets.SystemRandom()
dest, mask = random_scalar(rng), random_scalar(rng)
ring = [[base_mul(random_scalar(rng)), Commitment(random_scalar(rng), 5).calculate()]
        for _ in range(10)]
ring.insert(3, [base_mul(dest), Commitment(mask, 1337).calculate()])
image = generate_key_image(dest)
inp = ClsagInput(Commitment(mask, 1337), Decoys(3, list(range(1, 12)), ring))
(clsag, pseudo_out), = Clsag.sign(rng, [(dest, image, inp)], random_scalar(rng), bytes(32))
clsag.verify(ring, image, pseudo_out, bytes(32))  # raises ClsagError if invalid
```

Scan a transaction for outputs belonging to a wallet:

```python
import io
from xmrcore.transaction import Transaction
from xmrcore.scan import scan_transaction

tx = Transaction.deserialize(io.BytesIO(raw_tx_bytes))
found = scan_transaction(tx, pair, guaranteed=False)
for output in found.ignore_timelock():
    print(output.o, output.commitment.amount)
```

Vote on multisig keys:

```python
from xmrcore.extension import test_validators
from xmrcore.multisig import Multisig

contract = Multisig()
keys = [b"\x00\x01", b"\x02\x03"]
for validator in test_validators():
    contract.env.caller = validator
    contract.vote(keys)
assert contract.updated_at(0) == 1
assert contract.key(0, 1) == b"\x02\x03"
```

## What it does not do

- It does not talk to a Monero daemon: there is no RPC client, so fetching
  blocks, transactions, outputs or fee estimates and publishing transactions
  are left to the caller.
- It does not select decoys from the chain or build and sign whole
  transactions for sending; `Clsag.sign` works on rings the caller supplies.
- `Bulletproofs` covers only the wire format and fee weight; it neither
  creates nor verifies range proofs.
- `xmrcore.secp256k1` is group arithmetic only; there are no Ethereum
  address, `ecrecover` or Schnorr-verifier helpers.
- `Multisig` is an in-memory model; it is not deployed anywhere and keeps no
  storage beyond the object.

## Tests

```
pip install -e ".[test]"
pytest
```