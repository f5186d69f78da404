"""Lane-parallel ChaCha20: several consecutive blocks computed side by side.

The state is held word-sliced, one list of lane values per state word, so
every quarter-round step acts on all lanes at once.  The output is the same
keystream the one-block-at-a-time code produces.
"""

from __future__ import annotations

import struct

from soliton.byteops import MASK32, rotl32
from soliton.chacha import BLOCK_SIZE, DOUBLE_ROUNDS, chacha20_blocks, initial_state

DEFAULT_LANES = 8

BytesLike = bytes | bytearray | memoryview

_WORDS = struct.Struct("<16I")

_COLUMNS = ((0, 4, 8, 12), (1, 5, 9, 13), (2, 6, 10, 14), (3, 7, 11, 15))
_DIAGONALS = ((0, 5, 10, 15), (1, 6, 11, 12), (2, 7, 8, 13), (3, 4, 9, 14))


def _check_lanes(lanes: int) -> int:
    if lanes <= 0:
        raise ValueError(f"lane count must be positive, got {lanes}")
    return lanes


def _add(x: list[int], y: list[int]) -> list[int]:
    return [(p + q) & MASK32 for p, q in zip(x, y)]


def _xor_rotl(x: list[int], y: list[int], n: int) -> list[int]:
    return [rotl32(p ^ q, n) for p, q in zip(x, y)]


def _quarter_round(rows: list[list[int]], a: int, b: int, c: int, d: int) -> None:
    rows[a] = _add(rows[a], rows[b])
    rows[d] = _xor_rotl(rows[d], rows[a], 16)
    rows[c] = _add(rows[c], rows[d])
    rows[b] = _xor_rotl(rows[b], rows[c], 12)
    rows[a] = _add(rows[a], rows[b])
    rows[d] = _xor_rotl(rows[d], rows[a], 8)
    rows[c] = _add(rows[c], rows[d])
    rows[b] = _xor_rotl(rows[b], rows[c], 7)


def keystream_lanes(
    key: BytesLike, nonce: BytesLike, counter: int, lanes: int = DEFAULT_LANES
) -> bytes:
    """Return ``lanes`` consecutive 64-byte keystream blocks starting at ``counter``.

    Lane ``i`` uses counter ``counter + i`` modulo 2^32; blocks are laid out
    in lane order.
    """
    lanes = _check_lanes(lanes)
    base = initial_state(key, nonce, counter)
    initial = [[word] * lanes for word in base]
    initial[12] = [(counter + i) & MASK32 for i in range(lanes)]

    rows = [list(row) for row in initial]
    for _ in range(DOUBLE_ROUNDS):
        for group in (_COLUMNS, _DIAGONALS):
            for a, b, c, d in group:
                _quarter_round(rows, a, b, c, d)

    rows = [_add(row, start) for row, start in zip(rows, initial)]
    return b"".join(
        _WORDS.pack(*(row[lane] for row in rows)) for lane in range(lanes)
    )


def _xor(data: bytes, keystream: bytes) -> bytes:
    if not data:
        return b""
    mixed = int.from_bytes(data, "little") ^ int.from_bytes(
        keystream[: len(data)], "little"
    )
    return mixed.to_bytes(len(data), "little")


def chacha20_blocks_parallel(
    key: BytesLike,
    nonce: BytesLike,
    counter: int,
    data: BytesLike,
    lanes: int = DEFAULT_LANES,
) -> bytes:
    """XOR whole 64-byte blocks of ``data`` with the keystream, ``lanes`` blocks per batch.

    Blocks left over after the last full batch are handled one at a time.
    The result equals :func:`soliton.chacha.chacha20_blocks` for any lane count.
    """
    lanes = _check_lanes(lanes)
    data = bytes(data)
    if len(data) % BLOCK_SIZE:
        raise ValueError(
            f"data length must be a multiple of {BLOCK_SIZE}, got {len(data)}"
        )
    # Validates key, nonce and counter even when no full batch is processed.
    initial_state(key, nonce, counter)

    batch_bytes = lanes * BLOCK_SIZE
    full = len(data) - len(data) % batch_bytes
    pieces: list[bytes] = []
    for start in range(0, full, batch_bytes):
        keystream = keystream_lanes(key, nonce, counter, lanes)
        pieces.append(_xor(data[start:start + batch_bytes], keystream))
        counter = (counter + lanes) & MASK32
    tail = data[full:]
    if tail:
        pieces.append(chacha20_blocks(key, nonce, counter, tail))
    return b"".join(pieces)