"""
Cryptographic Exceptions for ERP Fixtures

This module defines custom exceptions for key handling and generation.
"""


class CryptoError(Exception):
    """Base exception for all cryptographic errors."""
    pass


class InvalidKeyError(CryptoError):
    """Raised when a key is invalid or malformed."""
    pass


class KeyGenerationError(CryptoError):
    """Raised when a random key pair cannot be produced."""
    pass
