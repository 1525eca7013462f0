"""
ERP Fixtures - Cryptographic Operations Module

This module provides the key types used to populate federations:
- secp256k1 private and compressed public keys
- A seedable random key-pair generator

Dependencies:
- coincurve: Fast secp256k1 operations
"""

from .exceptions import (
    CryptoError,
    InvalidKeyError,
    KeyGenerationError,
)
from .keys import (
    PrivateKey,
    PublicKey,
    KeyPairGenerator,
    COMPRESSED_PUBKEY_SIZE,
)

__all__ = [
    # Exceptions
    "CryptoError",
    "InvalidKeyError",
    "KeyGenerationError",

    # Keys
    "PrivateKey",
    "PublicKey",
    "KeyPairGenerator",
    "COMPRESSED_PUBKEY_SIZE",
]
