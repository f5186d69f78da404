import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from soliton.byteops import MASK32
from soliton.chacha import chacha20_block, chacha20_blocks
from soliton.chacha_lanes import chacha20_blocks_parallel, keystream_lanes

KEY = bytes(range(32))
NONCE = bytes.fromhex("000000090000004a00000000")


@pytest.mark.parametrize("lanes", [1, 2, 4, 8])
def test_keystream_lanes_matches_single_blocks(lanes):
    expected = b"".join(chacha20_block(KEY, NONCE, 7 + i) for i in range(lanes))
    assert keystream_lanes(KEY, NONCE, 7, lanes) == expected


def test_keystream_lanes_length():
    assert len(keystream_lanes(KEY, NONCE, 0, 5)) == 5 * 64


def test_keystream_all_zero_key_and_nonce():
    out = keystream_lanes(bytes(32), bytes(12), 0, 4)
    assert out[:16] == bytes.fromhex("76b8e0ada0f13d90405d6ae55386bd28")


def test_keystream_counter_wraps():
    out = keystream_lanes(KEY, NONCE, MASK32, 2)
    assert out[:64] == chacha20_block(KEY, NONCE, MASK32)
    assert out[64:] == chacha20_block(KEY, NONCE, 0)


@pytest.mark.parametrize("lanes", [4, 8])
@pytest.mark.parametrize("blocks", [0, 1, 3, 4, 8, 9, 13])
def test_parallel_matches_sequential(lanes, blocks):
    data = bytes((i * 31 + 5) & 0xFF for i in range(blocks * 64))
    assert chacha20_blocks_parallel(KEY, NONCE, 1, data, lanes) == chacha20_blocks(
        KEY, NONCE, 1, data
    )


def test_parallel_default_lanes():
    data = bytes(range(256)) * 3
    assert chacha20_blocks_parallel(KEY, NONCE, 3, data) == chacha20_blocks(
        KEY, NONCE, 3, data
    )


def test_parallel_round_trip():
    data = bytes(range(256)) * 2
    ct = chacha20_blocks_parallel(KEY, NONCE, 1, data, 4)
    assert ct != data
    assert chacha20_blocks_parallel(KEY, NONCE, 1, ct, 4) == data


def test_parallel_empty():
    assert chacha20_blocks_parallel(KEY, NONCE, 0, b"", 8) == b""


def test_parallel_accepts_buffer_types():
    data = bytearray(range(128))
    expected = chacha20_blocks(KEY, NONCE, 0, bytes(data))
    assert chacha20_blocks_parallel(KEY, NONCE, 0, data, 2) == expected
    assert chacha20_blocks_parallel(KEY, NONCE, 0, memoryview(data), 2) == expected


def test_parallel_counter_wrap_across_batch():
    data = bytes(64 * 6)
    assert chacha20_blocks_parallel(KEY, NONCE, MASK32 - 2, data, 4) == chacha20_blocks(
        KEY, NONCE, MASK32 - 2, data
    )


@settings(max_examples=15, deadline=None)
@given(
    key=st.binary(min_size=32, max_size=32),
    nonce=st.binary(min_size=12, max_size=12),
    counter=st.integers(min_value=0, max_value=MASK32),
    blocks=st.integers(min_value=0, max_value=6),
    lanes=st.integers(min_value=1, max_value=5),
)
def test_parallel_equivalence_property(key, nonce, counter, blocks, lanes):
    data = bytes(blocks * 64)
    assert chacha20_blocks_parallel(key, nonce, counter, data, lanes) == chacha20_blocks(
        key, nonce, counter, data
    )


@pytest.mark.parametrize("lanes", [0, -1])
def test_bad_lane_count(lanes):
    with pytest.raises(ValueError):
        keystream_lanes(KEY, NONCE, 0, lanes)
    with pytest.raises(ValueError):
        chacha20_blocks_parallel(KEY, NONCE, 0, bytes(64), lanes)


def test_partial_block_rejected():
    with pytest.raises(ValueError):
        chacha20_blocks_parallel(KEY, NONCE, 0, bytes(65), 4)


@pytest.mark.parametrize(
    "key, nonce, counter",
    [
        (bytes(31), NONCE, 0),
        (KEY, bytes(8), 0),
        (KEY, NONCE, -1),
        (KEY, NONCE, 2**32),
    ],
)
def test_bad_parameters(key, nonce, counter):
    with pytest.raises(ValueError):
        keystream_lanes(key, nonce, counter, 4)
    with pytest.raises(ValueError):
        chacha20_blocks_parallel(key, nonce, counter, b"", 4)