"""ChaCha20 stream cipher (RFC 8439) and the Poly1305 one-time key derivation."""

from __future__ import annotations

import struct
from collections.abc import Iterator

from soliton.byteops import MASK32, rotl32

KEY_SIZE = 32
NONCE_SIZE = 12
BLOCK_SIZE = 64
POLY1305_KEY_SIZE = 32
DOUBLE_ROUNDS = 10

CONSTANTS = (0x61707865, 0x3320646E, 0x79622D32, 0x6B206574)  # "expand 32-byte k"

BytesLike = bytes | bytearray | memoryview

_WORDS = struct.Struct("<16I")
_KEY_WORDS = struct.Struct("<8I")
_NONCE_WORDS = struct.Struct("<3I")

_COLUMNS = ((0, 4, 8, 12), (1, 5, 9, 13), (2, 6, 10, 14), (3, 7, 11, 15))
_DIAGONALS = ((0, 5, 10, 15), (1, 6, 11, 12), (2, 7, 8, 13), (3, 4, 9, 14))


def _check_key(key: BytesLike) -> bytes:
    key = bytes(key)
    if len(key) != KEY_SIZE:
        raise ValueError(f"ChaCha20 key must be {KEY_SIZE} bytes, got {len(key)}")
    return key


def _check_nonce(nonce: BytesLike) -> bytes:
    nonce = bytes(nonce)
    if len(nonce) != NONCE_SIZE:
        raise ValueError(f"ChaCha20 nonce must be {NONCE_SIZE} bytes, got {len(nonce)}")
    return nonce


def _check_counter(counter: int) -> int:
    if not 0 <= counter <= MASK32:
        raise ValueError(f"counter must fit in 32 bits, got {counter}")
    return counter


def quarter_round(a: int, b: int, c: int, d: int) -> tuple[int, int, int, int]:
    """Apply the ChaCha quarter-round to four 32-bit words."""
    a &= MASK32
    b &= MASK32
    c &= MASK32
    d &= MASK32
    a = (a + b) & MASK32
    d = rotl32(d ^ a, 16)
    c = (c + d) & MASK32
    b = rotl32(b ^ c, 12)
    a = (a + b) & MASK32
    d = rotl32(d ^ a, 8)
    c = (c + d) & MASK32
    b = rotl32(b ^ c, 7)
    return a, b, c, d


def _initial_state(key: bytes, nonce: bytes, counter: int) -> tuple[int, ...]:
    return (
        *CONSTANTS,
        *_KEY_WORDS.unpack(key),
        counter & MASK32,
        *_NONCE_WORDS.unpack(nonce),
    )


def initial_state(key: BytesLike, nonce: BytesLike, counter: int) -> tuple[int, ...]:
    """Build the 16-word input state: constants, key, counter, nonce."""
    return _initial_state(_check_key(key), _check_nonce(nonce), _check_counter(counter))


def _block(state: tuple[int, ...]) -> bytes:
    x = list(state)
    for _ in range(DOUBLE_ROUNDS):
        for group in (_COLUMNS, _DIAGONALS):
            for i, j, k, m in group:
                x[i], x[j], x[k], x[m] = quarter_round(x[i], x[j], x[k], x[m])
    return _WORDS.pack(*((w + s) & MASK32 for w, s in zip(x, state)))


def chacha20_block(key: BytesLike, nonce: BytesLike, counter: int) -> bytes:
    """Return the 64-byte keystream block for ``counter``."""
    return _block(initial_state(key, nonce, counter))


def _keystream(key: bytes, nonce: bytes, counter: int, blocks: int) -> Iterator[bytes]:
    for i in range(blocks):
        yield _block(_initial_state(key, nonce, (counter + i) & MASK32))


def _xor(data: bytes, keystream: bytes) -> bytes:
    if not data:
        return b""
    mixed = int.from_bytes(data, "little") ^ int.from_bytes(keystream[: len(data)], "little")
    return mixed.to_bytes(len(data), "little")


def chacha20_blocks(
    key: BytesLike, nonce: BytesLike, counter: int, data: BytesLike
) -> bytes:
    """XOR whole 64-byte blocks of ``data`` with the keystream; the counter wraps mod 2^32."""
    key = _check_key(key)
    nonce = _check_nonce(nonce)
    counter = _check_counter(counter)
    data = bytes(data)
    if len(data) % BLOCK_SIZE:
        raise ValueError(
            f"data length must be a multiple of {BLOCK_SIZE}, got {len(data)}"
        )
    keystream = b"".join(_keystream(key, nonce, counter, len(data) // BLOCK_SIZE))
    return _xor(data, keystream)


def chacha20_xor(
    key: BytesLike, nonce: BytesLike, counter: int, data: BytesLike
) -> bytes:
    """Encrypt or decrypt ``data`` of any length starting at block ``counter``."""
    key = _check_key(key)
    nonce = _check_nonce(nonce)
    counter = _check_counter(counter)
    data = bytes(data)
    blocks = -(-len(data) // BLOCK_SIZE)
    keystream = b"".join(_keystream(key, nonce, counter, blocks))
    return _xor(data, keystream)


def poly1305_key_gen(key: BytesLike, nonce: BytesLike) -> bytes:
    """Derive the Poly1305 one-time key: the first 32 bytes of block 0."""
    return chacha20_block(key, nonce, 0)[:POLY1305_KEY_SIZE]