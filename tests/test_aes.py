import pytest
from hypothesis import given, settings, strategies as st

from soliton.aes import AES256, encrypt_block, expand_key, gf256_mul, sbox
from soliton.byteops import store_le32

ZERO_KEY = bytes(32)
FIPS_KEY = bytes.fromhex(
    "603deb1015ca71be2b73aef0857d77811f352c073b6108d72d9810a30914dff4"
)

keys = st.binary(min_size=32, max_size=32)
blocks = st.binary(min_size=16, max_size=16)


def test_gf256_mul_fips_examples():
    assert gf256_mul(0x57, 0x83) == 0xC1
    assert gf256_mul(0x57, 0x13) == 0xFE
    assert gf256_mul(0x57, 0x02) == 0xAE


def test_gf256_mul_identity_and_zero():
    assert all(gf256_mul(x, 1) == x for x in range(256))
    assert all(gf256_mul(x, 0) == 0 for x in range(256))


@given(st.integers(0, 255), st.integers(0, 255), st.integers(0, 255))
def test_gf256_mul_field_laws(a, b, c):
    assert gf256_mul(a, b) == gf256_mul(b, a)
    assert gf256_mul(a, b ^ c) == gf256_mul(a, b) ^ gf256_mul(a, c)


def test_gf256_mul_rejects_non_bytes():
    with pytest.raises(ValueError):
        gf256_mul(256, 1)


def test_sbox_known_values():
    assert sbox(0x00) == 0x63
    assert sbox(0x01) == 0x7C
    assert sbox(0x53) == 0xED
    assert sbox(0xFF) == 0x16


def test_sbox_is_permutation_without_fixed_points():
    values = [sbox(x) for x in range(256)]
    assert sorted(values) == list(range(256))
    assert all(v != x for x, v in enumerate(values))


def test_sbox_rejects_out_of_range():
    with pytest.raises(ValueError):
        sbox(-1)


def _schedule_bytes(round_keys):
    return b"".join(store_le32(w) for w in round_keys)


def test_expand_key_fips_schedule():
    schedule = _schedule_bytes(expand_key(FIPS_KEY))
    assert len(schedule) == 240
    assert schedule[:32] == FIPS_KEY
    assert schedule[32:36] == bytes.fromhex("9ba35411")
    assert schedule[36:40] == bytes.fromhex("8e6925af")
    assert schedule[-16:] == bytes.fromhex("fe4890d1e6188d0b046df344706c631e")


def test_expand_key_rejects_wrong_length():
    with pytest.raises(ValueError):
        expand_key(bytes(16))


def test_encrypt_block_fips_vector():
    key = bytes(range(32))
    plaintext = bytes.fromhex("00112233445566778899aabbccddeeff")
    assert encrypt_block(expand_key(key), plaintext) == bytes.fromhex(
        "8ea2b7ca516745bfeafc49904b496089"
    )


def test_zero_key_zero_block_gives_ghash_key():
    assert AES256(ZERO_KEY).encrypt_block(bytes(16)) == bytes.fromhex(
        "dc95c078a2408989ad48a21492842087"
    )


def test_zero_key_first_counter_block_matches_gcm_ciphertext():
    counter_block = bytes(12) + (2).to_bytes(4, "big")
    assert AES256(ZERO_KEY).encrypt_block(counter_block) == bytes.fromhex(
        "cea7403d4d606b6e074ec5d3baf39d18"
    )


def test_encrypt_block_rejects_bad_block_size():
    with pytest.raises(ValueError):
        AES256(ZERO_KEY).encrypt_block(bytes(15))


def test_encrypt_block_rejects_short_schedule():
    with pytest.raises(ValueError):
        encrypt_block(expand_key(ZERO_KEY)[:59], bytes(16))


def test_repr_hides_key():
    assert "hidden" in repr(AES256(FIPS_KEY))
    assert FIPS_KEY.hex() not in repr(AES256(FIPS_KEY))


@settings(max_examples=25, deadline=None)
@given(keys, blocks)
def test_class_matches_function(key, block):
    cipher = AES256(key)
    assert cipher.round_keys == expand_key(key)
    assert cipher.encrypt_block(block) == encrypt_block(expand_key(key), block)


@settings(max_examples=20, deadline=None)
@given(keys, blocks, blocks)
def test_distinct_blocks_encrypt_to_distinct_outputs(key, first, second):
    cipher = AES256(key)
    out_first = cipher.encrypt_block(first)
    out_second = cipher.encrypt_block(second)
    assert len(out_first) == 16
    assert (out_first == out_second) == (first == second)