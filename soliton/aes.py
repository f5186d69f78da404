"""AES-256 block cipher built from GF(2^8) arithmetic rather than lookup tables."""

from __future__ import annotations

from collections.abc import Sequence

from soliton.byteops import MASK32, load_le32, rotr32, store_le32

KEY_SIZE = 32
BLOCK_SIZE = 16
ROUNDS = 14
ROUND_KEY_WORDS = 4 * (ROUNDS + 1)

_RCON = (0x00, 0x01, 0x02, 0x04, 0x08, 0x10, 0x20, 0x40, 0x80, 0x1B, 0x36)

BytesLike = bytes | bytearray | memoryview


def gf256_mul(a: int, b: int) -> int:
    """Multiply two bytes in GF(2^8) modulo x^8 + x^4 + x^3 + x + 1."""
    if not (0 <= a <= 0xFF and 0 <= b <= 0xFF):
        raise ValueError(f"operands must be bytes, got {a} and {b}")
    product = 0
    for _ in range(8):
        product ^= a & (-(b & 1) & 0xFF)
        high = -(a >> 7) & 0xFF
        a = ((a << 1) ^ (0x1B & high)) & 0xFF
        b >>= 1
    return product


def _inverse(x: int) -> int:
    """Multiplicative inverse in GF(2^8) as x^254, with 0 mapped to 0."""
    if x == 0:
        return 0
    x2 = gf256_mul(x, x)
    x3 = gf256_mul(x, x2)
    x6 = gf256_mul(x3, x3)
    x7 = gf256_mul(x, x6)
    x14 = gf256_mul(x7, x7)
    x15 = gf256_mul(x, x14)
    x30 = gf256_mul(x15, x15)
    x60 = gf256_mul(x30, x30)
    x120 = gf256_mul(x60, x60)
    x127 = gf256_mul(x7, x120)
    return gf256_mul(x127, x127)


def sbox(x: int) -> int:
    """AES S-box: inversion in GF(2^8) followed by the affine transform."""
    if not 0 <= x <= 0xFF:
        raise ValueError(f"S-box input must be a byte, got {x}")
    s = _inverse(x)
    result = 0x63
    for i in range(8):
        bit = (
            (s >> i)
            ^ (s >> ((i + 4) % 8))
            ^ (s >> ((i + 5) % 8))
            ^ (s >> ((i + 6) % 8))
            ^ (s >> ((i + 7) % 8))
        ) & 1
        result ^= bit << i
    return result


_SBOX = bytes(sbox(i) for i in range(256))
_XTIME = bytes(gf256_mul(i, 2) for i in range(256))


def _sub_word(word: int) -> int:
    return int.from_bytes(bytes(_SBOX[b] for b in word.to_bytes(4, "little")), "little")


def _check_key(key: BytesLike) -> bytes:
    key = bytes(key)
    if len(key) != KEY_SIZE:
        raise ValueError(f"AES-256 key must be {KEY_SIZE} bytes, got {len(key)}")
    return key


def _check_block(block: BytesLike) -> bytes:
    block = bytes(block)
    if len(block) != BLOCK_SIZE:
        raise ValueError(f"AES block must be {BLOCK_SIZE} bytes, got {len(block)}")
    return block


def expand_key(key: BytesLike) -> tuple[int, ...]:
    """Expand a 32-byte key into 60 round-key words, each read little-endian."""
    key = _check_key(key)
    words = [load_le32(key, 4 * i) for i in range(8)]
    for i in range(8, ROUND_KEY_WORDS):
        temp = words[i - 1]
        if i % 8 == 0:
            temp = _sub_word(rotr32(temp, 8)) ^ _RCON[i // 8]
        elif i % 8 == 4:
            temp = _sub_word(temp)
        words.append((words[i - 8] ^ temp) & MASK32)
    return tuple(words)


def _round_key_bytes(round_keys: Sequence[int]) -> bytes:
    if len(round_keys) != ROUND_KEY_WORDS:
        raise ValueError(
            f"expected {ROUND_KEY_WORDS} round-key words, got {len(round_keys)}"
        )
    return b"".join(store_le32(word) for word in round_keys)


def _shift_rows(state: bytearray) -> bytearray:
    return bytearray(state[4 * ((c + r) % 4) + r] for c in range(4) for r in range(4))


def _mix_columns(state: bytearray) -> None:
    for c in range(0, 16, 4):
        a0, a1, a2, a3 = state[c:c + 4]
        t = a0 ^ a1 ^ a2 ^ a3
        state[c] = a0 ^ t ^ _XTIME[a0 ^ a1]
        state[c + 1] = a1 ^ t ^ _XTIME[a1 ^ a2]
        state[c + 2] = a2 ^ t ^ _XTIME[a2 ^ a3]
        state[c + 3] = a3 ^ t ^ _XTIME[a3 ^ a0]


def _add_round_key(state: bytearray, key_bytes: bytes, round_index: int) -> None:
    offset = 16 * round_index
    for i in range(16):
        state[i] ^= key_bytes[offset + i]


def _encrypt(key_bytes: bytes, block: bytes) -> bytes:
    state = bytearray(block)
    _add_round_key(state, key_bytes, 0)
    for round_index in range(1, ROUNDS):
        state = _shift_rows(bytearray(_SBOX[b] for b in state))
        _mix_columns(state)
        _add_round_key(state, key_bytes, round_index)
    state = _shift_rows(bytearray(_SBOX[b] for b in state))
    _add_round_key(state, key_bytes, ROUNDS)
    return bytes(state)


def encrypt_block(round_keys: Sequence[int], block: BytesLike) -> bytes:
    """Encrypt one 16-byte block with an expanded AES-256 key schedule."""
    return _encrypt(_round_key_bytes(round_keys), _check_block(block))


class AES256:
    """An AES-256 cipher with its key schedule expanded once."""

    __slots__ = ("round_keys", "_key_bytes")

    def __init__(self, key: BytesLike) -> None:
        self.round_keys: tuple[int, ...] = expand_key(key)
        self._key_bytes = _round_key_bytes(self.round_keys)

    def encrypt_block(self, block: BytesLike) -> bytes:
        """Encrypt one 16-byte block."""
        return _encrypt(self._key_bytes, _check_block(block))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(<key hidden>)"