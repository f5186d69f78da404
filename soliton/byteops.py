"""Byte-order conversion, rotation and constant-time helpers."""

from __future__ import annotations

MASK32 = 0xFFFFFFFF
MASK64 = 0xFFFFFFFFFFFFFFFF


def _load(data: bytes | bytearray | memoryview, offset: int, size: int, order: str) -> int:
    if offset < 0:
        raise ValueError(f"negative offset {offset}")
    chunk = bytes(data[offset:offset + size])
    if len(chunk) != size:
        raise ValueError(
            f"need {size} bytes at offset {offset}, only {len(chunk)} available"
        )
    return int.from_bytes(chunk, order)


def load_le32(data: bytes | bytearray | memoryview, offset: int = 0) -> int:
    """Read a little-endian 32-bit unsigned integer at ``offset``."""
    return _load(data, offset, 4, "little")


def store_le32(value: int) -> bytes:
    """Encode the low 32 bits of ``value`` as 4 little-endian bytes."""
    return (value & MASK32).to_bytes(4, "little")


def load_be32(data: bytes | bytearray | memoryview, offset: int = 0) -> int:
    """Read a big-endian 32-bit unsigned integer at ``offset``."""
    return _load(data, offset, 4, "big")


def store_be32(value: int) -> bytes:
    """Encode the low 32 bits of ``value`` as 4 big-endian bytes."""
    return (value & MASK32).to_bytes(4, "big")


def load_le64(data: bytes | bytearray | memoryview, offset: int = 0) -> int:
    """Read a little-endian 64-bit unsigned integer at ``offset``."""
    return _load(data, offset, 8, "little")


def store_le64(value: int) -> bytes:
    """Encode the low 64 bits of ``value`` as 8 little-endian bytes."""
    return (value & MASK64).to_bytes(8, "little")


def load_be64(data: bytes | bytearray | memoryview, offset: int = 0) -> int:
    """Read a big-endian 64-bit unsigned integer at ``offset``."""
    return _load(data, offset, 8, "big")


def store_be64(value: int) -> bytes:
    """Encode the low 64 bits of ``value`` as 8 big-endian bytes."""
    return (value & MASK64).to_bytes(8, "big")


def rotl32(x: int, n: int) -> int:
    """Rotate a 32-bit word left by ``n`` bits."""
    x &= MASK32
    n %= 32
    return ((x << n) | (x >> (32 - n))) & MASK32


def rotr32(x: int, n: int) -> int:
    """Rotate a 32-bit word right by ``n`` bits."""
    x &= MASK32
    n %= 32
    return ((x >> n) | (x << (32 - n))) & MASK32


def ct_equal(a: bytes | bytearray | memoryview, b: bytes | bytearray | memoryview) -> bool:
    """Compare two equal-length byte strings without early exit."""
    if len(a) != len(b):
        raise ValueError(f"length mismatch: {len(a)} != {len(b)}")
    diff = 0
    for x, y in zip(bytes(a), bytes(b)):
        diff |= x ^ y
    return diff == 0


def ct_select(
    a: bytes | bytearray | memoryview,
    b: bytes | bytearray | memoryview,
    condition: object,
) -> bytes:
    """Return ``b`` if ``condition`` is true, else ``a``, using masking rather than branching."""
    if len(a) != len(b):
        raise ValueError(f"length mismatch: {len(a)} != {len(b)}")
    mask = (-int(bool(condition))) & 0xFF
    keep = ~mask & 0xFF
    return bytes((x & keep) | (y & mask) for x, y in zip(bytes(a), bytes(b)))


def wipe(buffer: bytearray | memoryview) -> None:
    """Overwrite a mutable buffer with zeros in place."""
    if isinstance(buffer, memoryview):
        if buffer.readonly:
            raise TypeError("cannot wipe a read-only buffer")
        view = buffer.cast("B") if buffer.format != "B" or buffer.ndim != 1 else buffer
        view[:] = bytes(view.nbytes)
        return
    if not isinstance(buffer, bytearray):
        raise TypeError(f"cannot wipe immutable {type(buffer).__name__}")
    buffer[:] = bytes(len(buffer))


def round_up(x: int, multiple: int) -> int:
    """Round ``x`` up to the nearest multiple of ``multiple``."""
    if multiple <= 0:
        raise ValueError(f"multiple must be positive, got {multiple}")
    if x < 0:
        raise ValueError(f"x must be non-negative, got {x}")
    return ((x + multiple - 1) // multiple) * multiple


def is_aligned(address: int, alignment: int) -> bool:
    """Tell whether ``address`` is a multiple of the power-of-two ``alignment``."""
    if alignment <= 0 or alignment & (alignment - 1):
        raise ValueError(f"alignment must be a power of two, got {alignment}")
    return address & (alignment - 1) == 0