"""AES-256 counter mode over an expanded key schedule."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from soliton.aes import BLOCK_SIZE, encrypt_block
from soliton.byteops import MASK32, store_be32

NONCE_SIZE = 12
DEFAULT_LANES = 8

BytesLike = bytes | bytearray | memoryview


def _check_iv(iv: BytesLike) -> bytes:
    iv = bytes(iv)
    if len(iv) not in (NONCE_SIZE, BLOCK_SIZE):
        raise ValueError(
            f"IV must be {NONCE_SIZE} or {BLOCK_SIZE} bytes, got {len(iv)}"
        )
    return iv[:NONCE_SIZE]


def _check_counter(counter: int) -> int:
    if not 0 <= counter <= MASK32:
        raise ValueError(f"counter must fit in 32 bits, got {counter}")
    return counter


def _check_data(data: BytesLike) -> bytes:
    data = bytes(data)
    if len(data) % BLOCK_SIZE:
        raise ValueError(
            f"data length must be a multiple of {BLOCK_SIZE}, got {len(data)}"
        )
    return data


def counter_block(iv: BytesLike, counter: int) -> bytes:
    """Build a counter block: the first 12 IV bytes followed by a big-endian counter."""
    return _check_iv(iv) + store_be32(_check_counter(counter))


def _keystream_blocks(
    round_keys: Sequence[int], nonce: bytes, counter: int, blocks: int
) -> Iterator[bytes]:
    for i in range(blocks):
        yield encrypt_block(round_keys, nonce + store_be32((counter + i) & MASK32))


def ctr_keystream(
    round_keys: Sequence[int], iv: BytesLike, counter: int, blocks: int
) -> bytes:
    """Return ``blocks`` blocks of keystream; the counter wraps modulo 2^32."""
    if blocks < 0:
        raise ValueError(f"block count must be non-negative, got {blocks}")
    nonce = _check_iv(iv)
    counter = _check_counter(counter)
    return b"".join(_keystream_blocks(round_keys, nonce, counter, blocks))


def _xor(data: bytes, keystream: bytes) -> bytes:
    return bytes(x ^ y for x, y in zip(data, keystream))


def ctr_blocks(
    round_keys: Sequence[int], iv: BytesLike, counter: int, data: BytesLike
) -> bytes:
    """XOR whole blocks of ``data`` with the keystream starting at ``counter``."""
    data = _check_data(data)
    keystream = ctr_keystream(round_keys, iv, counter, len(data) // BLOCK_SIZE)
    return _xor(data, keystream)


def ctr_blocks_batched(
    round_keys: Sequence[int],
    iv: BytesLike,
    counter: int,
    data: BytesLike,
    lanes: int = DEFAULT_LANES,
) -> bytes:
    """Counter mode processed ``lanes`` blocks per batch, with the tail done singly.

    The output is identical to :func:`ctr_blocks` for every lane count.
    """
    if lanes <= 0:
        raise ValueError(f"lane count must be positive, got {lanes}")
    nonce = _check_iv(iv)
    counter = _check_counter(counter)
    data = _check_data(data)

    batch_bytes = lanes * BLOCK_SIZE
    full = len(data) - len(data) % batch_bytes
    pieces: list[bytes] = []
    for start in range(0, full, batch_bytes):
        keystream = ctr_keystream(round_keys, nonce, counter, lanes)
        pieces.append(_xor(data[start:start + batch_bytes], keystream))
        counter = (counter + lanes) & MASK32
    tail = data[full:]
    if tail:
        pieces.append(ctr_blocks(round_keys, nonce, counter, tail))
    return b"".join(pieces)