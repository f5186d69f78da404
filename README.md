# soliton

Pure-Python building blocks for AES-256 and ChaCha20, written for clarity
rather than speed. The AES S-box is derived algebraically (inversion in
GF(2^8) followed by the affine transform) rather than typed in as a table;
it is computed once when `soliton.aes` is imported. The package has no
dependencies outside the standard library.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install ".[test]"
```

## Modules

- `soliton.byteops`: little- and big-endian 32- and 64-bit loads and stores
  (`load_le32`, `store_le32`, `load_be32`, `store_be32`, `load_le64`,
  `store_le64`, `load_be64`, `store_be64`), 32-bit rotations (`rotl32`,
  `rotr32`), comparison without early exit (`ct_equal`), selection by masking
  (`ct_select`), zeroing of a mutable buffer in place (`wipe`), and the
  helpers `round_up` and `is_aligned`. Loads raise `ValueError` when too few
  bytes are available.
- `soliton.aes`: AES-256 key expansion into 60 little-endian round-key words
  (`expand_key`), single-block encryption with an expanded schedule
  (`encrypt_block`), the `AES256` class that expands its key once, and the
  GF(2^8) helpers `gf256_mul` and `sbox`. Keys must be 32 bytes and blocks
  16 bytes; anything else raises `ValueError`.
- `soliton.aes_ctr`: AES-256 counter mode. A counter block is the first
  12 bytes of the IV (12 or 16 bytes are accepted) followed by a 32-bit
  big-endian counter that wraps modulo 2^32 (`counter_block`,
  `ctr_keystream`, `ctr_blocks`). `ctr_blocks_batched` does the same work
  `lanes` blocks at a time (8 by default) and gives identical output. Data
  must be a whole number of 16-byte blocks.
- `soliton.chacha`: ChaCha20 as specified in RFC 8439 (`quarter_round`,
  `initial_state`, `chacha20_block`, `chacha20_blocks` for whole 64-byte
  blocks, `chacha20_xor` for data of any length), plus derivation of the
  Poly1305 one-time key from block 0 (`poly1305_key_gen`). The block counter
  wraps modulo 2^32.
- `soliton.chacha_lanes`: ChaCha20 keystream computed for several
  consecutive blocks side by side (`keystream_lanes`,
  `chacha20_blocks_parallel`, 8 lanes by default). The output is the same as
  the single-block functions.

## Examples

AES-256 on a single block:

```python
from soliton.aes import AES256

cipher = AES256(bytes(32))
h = cipher.encrypt_block(bytes(16))
```

AES-256 in counter mode, starting at counter 2 as GCM does for its first
data block:

```python
from soliton.aes import expand_key
from soliton.aes_ctr import ctr_blocks

round_keys = expand_key(bytes(32))
ciphertext = ctr_blocks(round_keys, bytes(12), 2, bytes(16))
```

ChaCha20 on a message of any length:

```python
from soliton.chacha import chacha20_xor

key = bytes(32)
nonce = bytes(12)
ciphertext = chacha20_xor(key, nonce, 1, b"attack at dawn")
assert chacha20_xor(key, nonce, 1, ciphertext) == b"attack at dawn"
```

## What it does not do

- There is no authenticated encryption: no GHASH, no AES-GCM tag, no
  Poly1305 MAC and no ChaCha20-Poly1305 construction. Only the Poly1305 key
  is derived.
- AES decryption is not provided; counter mode needs only the forward
  cipher.
- There is no command-line tool; the package is a library only.

## Notes

This code is meant for study and testing. Python cannot guarantee
constant-time execution, so do not use it to protect real secrets.