"""Number theory primitives for textbook RSA: extended GCD, inverse, modexp."""
from __future__ import annotations

from typing import Tuple

from textbook_rsa.errors import NoInverseError


def ext_gcd(a: int, b: int) -> Tuple[int, int, int]:
    """Return ``(g, x, y)`` with ``g = gcd(a, b)`` and ``a*x + b*y == g``.

    Same result as the recursive form ``ext_gcd(b, a % b)`` with base case
    ``(a, 1, 0)``, computed forwards instead.  Each row ``(r, x, y)`` keeps
    ``a*x + b*y == r``; subtracting ``q`` times the next row preserves that and
    yields ``r % r_next`` because ``a == (a // b) * b + a % b`` holds for
    Python's ``//`` and ``%``.  The last row with nonzero ``r`` is the answer.
    """

    row, next_row = (a, 1, 0), (b, 0, 1)
    while next_row[0] != 0:
        q = row[0] // next_row[0]
        row, next_row = next_row, (
            row[0] - q * next_row[0],
            row[1] - q * next_row[1],
            row[2] - q * next_row[2],
        )
    return row


def inv_mod(a: int, m: int) -> int:
    """Return the inverse of ``a`` modulo ``m`` in ``[0, m)``."""

    g, x, _ = ext_gcd(a, m)
    if g != 1:
        raise NoInverseError(f"{a} has no inverse modulo {m} (gcd = {g})")
    return x % m


def mod_exp(base: int, exponent: int, modulus: int) -> int:
    """Compute ``base**exponent % modulus`` by right-to-left square-and-multiply.

    ``exponent`` must be non-negative and ``modulus`` nonzero.  The result
    lies in ``[0, modulus)`` for a positive modulus.
    """

    if modulus == 0:
        raise ZeroDivisionError("modulus must be nonzero")
    if exponent < 0:
        raise ValueError("Negative exponents are not supported")

    result = 1 % modulus
    base %= modulus
    while exponent > 0:
        if exponent & 1:
            result = result * base % modulus
        base = base * base % modulus
        exponent >>= 1
    return result


__all__ = ["ext_gcd", "inv_mod", "mod_exp"]
