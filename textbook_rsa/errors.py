"""Exception types raised by the textbook RSA core."""
from __future__ import annotations


class RsaError(ValueError):
    """Base class for every error raised by the RSA core."""


class InvalidInputError(RsaError):
    """Raised when a message or prime is not a plain decimal integer."""


class InvalidOperationError(InvalidInputError):
    """Raised when the requested operation is not encrypt, decrypt or exit."""


class NoInverseError(RsaError):
    """Raised when a value has no inverse modulo the given modulus."""


class KeyGenerationError(RsaError):
    """Raised when (p, q) cannot produce a usable RSA key pair."""


__all__ = [
    "RsaError",
    "InvalidInputError",
    "InvalidOperationError",
    "NoInverseError",
    "KeyGenerationError",
]
