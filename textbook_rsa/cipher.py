"""Timed textbook RSA encryption and decryption of single integers."""
from __future__ import annotations

import logging
import time
from typing import NamedTuple

from textbook_rsa.keys import PrivateKey, PublicKey
from textbook_rsa.number_theory import mod_exp

logger = logging.getLogger(__name__)


class TimedResult(NamedTuple):
    value: int
    elapsed: float


def _timed_mod_exp(base: int, exponent: int, modulus: int) -> TimedResult:
    start = time.perf_counter()
    value = mod_exp(base, exponent, modulus)
    elapsed = time.perf_counter() - start
    return TimedResult(value, elapsed)


def _warn_if_wraps(value: int, n: int, what: str) -> None:
    # No padding and no range check: out-of-range inputs wrap modulo n.
    if not 0 <= value < n:
        logger.warning("%s is outside [0, n); it wraps modulo n and will not round-trip", what)


def encrypt(message: int, public_key: PublicKey) -> TimedResult:
    """Return ``message**e mod n`` and the seconds spent in the exponentiation."""

    _warn_if_wraps(message, public_key.n, "Message")
    result = _timed_mod_exp(message, public_key.e, public_key.n)
    logger.debug("Encrypted under %d-bit modulus in %.6fs", public_key.bits, result.elapsed)
    return result


def decrypt(ciphertext: int, private_key: PrivateKey) -> TimedResult:
    """Return ``ciphertext**d mod n`` and the seconds spent in the exponentiation."""

    _warn_if_wraps(ciphertext, private_key.n, "Ciphertext")
    result = _timed_mod_exp(ciphertext, private_key.d, private_key.n)
    logger.debug("Decrypted under %d-bit modulus in %.6fs", private_key.bits, result.elapsed)
    return result


__all__ = ["TimedResult", "encrypt", "decrypt"]
