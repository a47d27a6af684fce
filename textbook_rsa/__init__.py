"""Textbook (unpadded) RSA over caller-supplied primes."""
from __future__ import annotations

from .cipher import TimedResult, decrypt, encrypt
from .errors import (
    InvalidInputError,
    InvalidOperationError,
    KeyGenerationError,
    NoInverseError,
    RsaError,
)
from .keys import PUBLIC_EXPONENT, KeyPair, PrivateKey, PublicKey, generate_keypair
from .number_theory import ext_gcd, inv_mod, mod_exp
from .session import Operation, Outcome, RsaSession

__all__ = [
    "TimedResult",
    "encrypt",
    "decrypt",
    "RsaError",
    "InvalidInputError",
    "InvalidOperationError",
    "KeyGenerationError",
    "NoInverseError",
    "PUBLIC_EXPONENT",
    "KeyPair",
    "PublicKey",
    "PrivateKey",
    "generate_keypair",
    "ext_gcd",
    "inv_mod",
    "mod_exp",
    "Operation",
    "Outcome",
    "RsaSession",
]
