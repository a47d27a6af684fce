"""RSA key pair derivation from two caller-supplied primes."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from textbook_rsa.errors import InvalidInputError, KeyGenerationError, NoInverseError
from textbook_rsa.number_theory import inv_mod

logger = logging.getLogger(__name__)

PUBLIC_EXPONENT = 65537

# The two fixed 309-digit primes the lab runs with by default.
DEFAULT_P = int(
    "106697219132480173106064317148705638676529121742557567770857687729397446"
    "898790451577487723991083173010242416863238099716044775658681981821407922"
    "722052778958942891831033512463262741053961681512908218003840408526915629"
    "689432111480588966800949428079015682624591636010678691927285321708935076"
    "221951173426894836169"
)
DEFAULT_Q = int(
    "144819424465842307806353672547344125290716753535239658417883828941232509"
    "622838692761917211806963011168822281666033695157426515864265527046213326"
    "145174398018859056439431422867957079149967592078894410082695714160599647"
    "180947207504108618794637872261572262805565517756922288320779308895819726"
    "074229154002310375209"
)

_DECIMAL = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class PublicKey:
    n: int
    e: int

    @property
    def bits(self) -> int:
        return self.n.bit_length()


@dataclass(frozen=True)
class PrivateKey:
    n: int
    d: int

    @property
    def bits(self) -> int:
        return self.n.bit_length()


@dataclass(frozen=True)
class KeyPair:
    """Public and private halves derived from the same modulus."""

    public: PublicKey
    private: PrivateKey


def parse_decimal(text: str, *, field: str = "value") -> int:
    """Parse a non-negative decimal integer made of ASCII digits only.

    Surrounding whitespace is ignored.  Signs, underscores, hex prefixes and
    non-ASCII digits are rejected with :class:`InvalidInputError`.
    """

    if not isinstance(text, str):
        raise InvalidInputError(f"{field} must be given as text")
    stripped = text.strip()
    if not _DECIMAL.fullmatch(stripped):
        raise InvalidInputError(f"{field} must contain only decimal digits")
    try:
        return int(stripped)
    except ValueError as exc:  # beyond sys.get_int_max_str_digits()
        raise InvalidInputError(f"{field} has too many digits") from exc


def generate_keypair(p: int, q: int, *, e: int = PUBLIC_EXPONENT) -> KeyPair:
    """Derive ``(n, e)`` and ``(n, d)`` from the primes ``p`` and ``q``.

    Primality is the caller's responsibility and is not tested here.  The
    derivation refuses inputs that cannot give a working key: factors not
    above 1, ``p == q``, ``e >= phi(n)`` or ``gcd(e, phi(n)) != 1``.
    """

    if p <= 1 or q <= 1:
        raise KeyGenerationError("p and q must both be greater than 1")
    if p == q:
        raise KeyGenerationError("p and q must be distinct")

    n = p * q
    phi = (p - 1) * (q - 1)
    if not 0 < e < phi:
        raise KeyGenerationError(f"public exponent {e} must lie in (0, phi(n))")

    try:
        d = inv_mod(e, phi)
    except NoInverseError as exc:
        raise KeyGenerationError(f"key generation failed: e={e} not invertible mod phi(n)") from exc

    logger.info("Derived RSA key pair: n has %d bits, e=%d", n.bit_length(), e)
    return KeyPair(public=PublicKey(n=n, e=e), private=PrivateKey(n=n, d=d))


def keypair_from_decimal(p_text: str, q_text: str) -> KeyPair:
    """Parse two decimal prime strings and derive the key pair from them."""

    p = parse_decimal(p_text, field="p")
    q = parse_decimal(q_text, field="q")
    return generate_keypair(p, q)


def default_keypair() -> KeyPair:
    return generate_keypair(DEFAULT_P, DEFAULT_Q)


__all__ = [
    "PUBLIC_EXPONENT",
    "DEFAULT_P",
    "DEFAULT_Q",
    "PublicKey",
    "PrivateKey",
    "KeyPair",
    "parse_decimal",
    "generate_keypair",
    "keypair_from_decimal",
    "default_keypair",
]
