"""
Key Handling for ERP Fixtures

This module wraps secp256k1 private/public keys and provides a seedable
key-pair generator used to populate random federations.
"""

import logging
import random
import secrets
from typing import List, Optional, Union
from coincurve import PrivateKey as CoinCurvePrivateKey, PublicKey as CoinCurvePublicKey

from .exceptions import (
    InvalidKeyError,
    KeyGenerationError,
)


SECP256K1_CURVE_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
COMPRESSED_PUBKEY_SIZE = 33

# Redraws allowed before giving up on a scalar outside [1, n)
MAX_SCALAR_ATTEMPTS = 16


class PrivateKey:
    """
    Wrapper for private key operations.
    """

    def __init__(self, key_bytes: Optional[bytes] = None):
        """
        Initialize private key.

        Args:
            key_bytes: 32-byte private key. If None, generates random key.
        """
        try:
            if key_bytes is None:
                key_bytes = secrets.randbits(256).to_bytes(32, 'big')
                while int.from_bytes(key_bytes, 'big') == 0 or \
                      int.from_bytes(key_bytes, 'big') >= SECP256K1_CURVE_ORDER:
                    key_bytes = secrets.randbits(256).to_bytes(32, 'big')

            if not isinstance(key_bytes, bytes) or len(key_bytes) != 32:
                raise InvalidKeyError("Private key must be 32 bytes")

            key_int = int.from_bytes(key_bytes, 'big')
            if key_int == 0 or key_int >= SECP256K1_CURVE_ORDER:
                raise InvalidKeyError("Private key out of valid range")

            self._key = CoinCurvePrivateKey(key_bytes)

        except Exception as e:
            if isinstance(e, InvalidKeyError):
                raise
            raise InvalidKeyError(f"Failed to create private key: {e}")

    @classmethod
    def from_int(cls, scalar: int) -> 'PrivateKey':
        """Create a private key from an integer scalar."""
        if not 0 < scalar < SECP256K1_CURVE_ORDER:
            raise InvalidKeyError("Private key out of valid range")
        return cls(scalar.to_bytes(32, 'big'))

    @property
    def bytes(self) -> bytes:
        """Get private key as bytes."""
        return self._key.secret

    @property
    def hex(self) -> str:
        """Get private key as hex string."""
        return self._key.secret.hex()

    def public_key(self) -> 'PublicKey':
        """Get corresponding public key."""
        return PublicKey(self._key.public_key)


class PublicKey:
    """
    Wrapper for public key operations.

    Keys are always handled in their 33-byte compressed form; comparison
    and hashing use that encoding.
    """

    def __init__(self, key_data: Union[bytes, CoinCurvePublicKey]):
        """
        Initialize public key.

        Args:
            key_data: Public key bytes (33 or 65 bytes) or CoinCurvePublicKey
        """
        try:
            if isinstance(key_data, CoinCurvePublicKey):
                self._key = key_data
            else:
                if not isinstance(key_data, bytes):
                    raise InvalidKeyError("Public key data must be bytes")
                if len(key_data) not in [33, 65]:
                    raise InvalidKeyError("Public key must be 33 or 65 bytes")
                self._key = CoinCurvePublicKey(key_data)
        except Exception as e:
            if isinstance(e, InvalidKeyError):
                raise
            raise InvalidKeyError(f"Failed to create public key: {e}")
        self._compressed = self._key.format(compressed=True)

    @classmethod
    def from_hex(cls, hex_string: str) -> 'PublicKey':
        """Create a public key from its hex encoding."""
        try:
            key_bytes = bytes.fromhex(hex_string)
        except ValueError as e:
            raise InvalidKeyError(f"Invalid public key hex: {e}")
        return cls(key_bytes)

    @property
    def bytes(self) -> bytes:
        """Get compressed public key as bytes."""
        return self._compressed

    @property
    def hex(self) -> str:
        """Get compressed public key as hex string."""
        return self._compressed.hex()

    def __str__(self) -> str:
        return self.hex

    def __repr__(self) -> str:
        return f"PublicKey({self.hex})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, PublicKey):
            return NotImplemented
        return self._compressed == other._compressed

    def __hash__(self) -> int:
        return hash(self._compressed)


class KeyPairGenerator:
    """
    Produces fresh random key pairs on demand.

    The generator draws private scalars from an explicit ``random.Random``
    so fixture batches can be reproduced from a seed. It is not meant to
    produce keys that guard real funds.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()
        self.logger = logging.getLogger(__name__)

    def generate_private_key(self) -> PrivateKey:
        """Draw a private key with a scalar in [1, n)."""
        for _ in range(MAX_SCALAR_ATTEMPTS):
            scalar = self.rng.getrandbits(256)
            if 0 < scalar < SECP256K1_CURVE_ORDER:
                return PrivateKey.from_int(scalar)
            self.logger.debug("Discarded out-of-range scalar, redrawing")
        raise KeyGenerationError(
            f"No valid scalar after {MAX_SCALAR_ATTEMPTS} attempts"
        )

    def generate_public_key(self) -> PublicKey:
        """Generate a fresh random public key."""
        return self.generate_private_key().public_key()

    def generate_public_keys(self, count: int) -> List[PublicKey]:
        """
        Generate a list of random public keys.

        Args:
            count: Number of keys to produce

        Returns:
            List of freshly generated public keys
        """
        if count < 0:
            raise KeyGenerationError("Key count must be non-negative")
        return [self.generate_public_key() for _ in range(count)]
