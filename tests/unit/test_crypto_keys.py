"""
Tests for Crypto Keys Module

Tests private/public key wrappers and the seedable key-pair generator.
"""

import random

import pytest
from crypto.keys import (
    PrivateKey,
    PublicKey,
    KeyPairGenerator,
    SECP256K1_CURVE_ORDER,
    COMPRESSED_PUBKEY_SIZE,
)
from crypto.exceptions import (
    InvalidKeyError,
    KeyGenerationError,
)

GENERATOR_POINT_HEX = "0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"


class TestPrivateKey:
    """Test PrivateKey class functionality."""

    def test_random_key_generation(self):
        """Test random private key generation."""
        key1 = PrivateKey()
        key2 = PrivateKey()

        # Keys should be different
        assert key1.bytes != key2.bytes
        assert len(key1.bytes) == 32

    def test_key_from_bytes(self):
        key_bytes = b'\x01' * 32
        key = PrivateKey(key_bytes)

        assert key.bytes == key_bytes
        assert key.hex == key_bytes.hex()

    def test_invalid_key_bytes(self):
        """Test invalid key bytes handling."""
        with pytest.raises(InvalidKeyError):
            PrivateKey(b'\x01' * 31)

        with pytest.raises(InvalidKeyError):
            PrivateKey(b'\x00' * 32)

        with pytest.raises(InvalidKeyError):
            PrivateKey(SECP256K1_CURVE_ORDER.to_bytes(32, 'big'))

    def test_from_int(self):
        key = PrivateKey.from_int(1)

        assert key.bytes == (1).to_bytes(32, 'big')
        assert key.public_key().hex == GENERATOR_POINT_HEX

    @pytest.mark.parametrize("scalar", [0, -1, SECP256K1_CURVE_ORDER])
    def test_from_int_out_of_range(self, scalar):
        with pytest.raises(InvalidKeyError):
            PrivateKey.from_int(scalar)


class TestPublicKey:
    """Test PublicKey class functionality."""

    def test_compressed_encoding(self):
        public_key = PrivateKey.from_int(2).public_key()

        assert len(public_key.bytes) == COMPRESSED_PUBKEY_SIZE
        assert public_key.bytes[0] in (0x02, 0x03)
        assert str(public_key) == public_key.hex

    def test_from_hex(self):
        public_key = PublicKey.from_hex(GENERATOR_POINT_HEX)

        assert public_key == PrivateKey.from_int(1).public_key()
        assert public_key.bytes == bytes.fromhex(GENERATOR_POINT_HEX)

    def test_uncompressed_input_is_compressed(self):
        from coincurve import PrivateKey as CoinCurvePrivateKey
        uncompressed = CoinCurvePrivateKey((5).to_bytes(32, 'big')).public_key.format(compressed=False)

        public_key = PublicKey(uncompressed)

        assert public_key == PrivateKey.from_int(5).public_key()
        assert len(public_key.bytes) == COMPRESSED_PUBKEY_SIZE

    def test_equality_and_hash(self):
        a = PrivateKey.from_int(3).public_key()
        b = PublicKey(a.bytes)
        c = PrivateKey.from_int(4).public_key()

        assert a == b
        assert a != c
        assert len({a, b, c}) == 2
        assert a != a.hex

    @pytest.mark.parametrize("data", [
        b'\x02' * 32,
        b'\x05' + b'\x01' * 32,
        "02" * 33,
    ])
    def test_invalid_public_key(self, data):
        with pytest.raises(InvalidKeyError):
            PublicKey(data)

    def test_invalid_hex(self):
        with pytest.raises(InvalidKeyError):
            PublicKey.from_hex("not-hex")


class TestKeyPairGenerator:
    """Test seedable key generation."""

    def test_seeded_generation_is_deterministic(self):
        first = KeyPairGenerator(random.Random(7)).generate_public_keys(5)
        second = KeyPairGenerator(random.Random(7)).generate_public_keys(5)

        assert first == second
        assert len(set(first)) == 5

    def test_generate_zero_keys(self):
        assert KeyPairGenerator(random.Random(1)).generate_public_keys(0) == []

    def test_negative_count(self):
        with pytest.raises(KeyGenerationError):
            KeyPairGenerator(random.Random(1)).generate_public_keys(-1)

    def test_out_of_range_scalars_redrawn(self):
        class StubRandom(random.Random):
            def __init__(self, values):
                super().__init__()
                self.values = list(values)

            def getrandbits(self, k):
                return self.values.pop(0)

        rng = StubRandom([0, SECP256K1_CURVE_ORDER, 9])
        key = KeyPairGenerator(rng).generate_private_key()

        assert key.bytes == (9).to_bytes(32, 'big')

    def test_gives_up_after_repeated_failures(self):
        class ZeroRandom(random.Random):
            def getrandbits(self, k):
                return 0

        with pytest.raises(KeyGenerationError):
            KeyPairGenerator(ZeroRandom()).generate_private_key()
