import dataclasses
import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from textbook_rsa.errors import InvalidInputError, KeyGenerationError, NoInverseError
from textbook_rsa.keys import (
    DEFAULT_P,
    DEFAULT_Q,
    PUBLIC_EXPONENT,
    default_keypair,
    generate_keypair,
    keypair_from_decimal,
    parse_decimal,
)


def test_textbook_example_key():
    keys = generate_keypair(61, 53, e=17)
    assert keys.public.n == 3233
    assert keys.private.n == 3233
    assert keys.public.e == 17
    assert keys.private.d == 2753


def test_default_key_inverse_property():
    keys = default_keypair()
    phi = (DEFAULT_P - 1) * (DEFAULT_Q - 1)
    assert keys.public.e == PUBLIC_EXPONENT == 65537
    assert keys.public.n == DEFAULT_P * DEFAULT_Q
    assert 0 <= keys.private.d < phi
    assert (keys.public.e * keys.private.d) % phi == 1


def test_default_primes_are_309_digits():
    assert len(str(DEFAULT_P)) == 309
    assert len(str(DEFAULT_Q)) == 309
    assert default_keypair().public.bits == 2047


def test_keys_are_immutable():
    keys = generate_keypair(61, 53, e=17)
    with pytest.raises(dataclasses.FrozenInstanceError):
        keys.public.e = 3  # type: ignore[misc]
    with pytest.raises(dataclasses.FrozenInstanceError):
        keys.private = None  # type: ignore[misc]


def test_exponent_not_below_phi_is_rejected():
    # 65537 exceeds phi(3233) = 3120.
    with pytest.raises(KeyGenerationError):
        generate_keypair(61, 53)


def test_non_invertible_exponent_is_rejected():
    # phi(77) = 60 shares the factor 3 with e.
    with pytest.raises(KeyGenerationError) as excinfo:
        generate_keypair(7, 11, e=3)
    assert isinstance(excinfo.value.__cause__, NoInverseError)


@pytest.mark.parametrize("p, q", [(1, 53), (61, 0), (61, 61)])
def test_degenerate_factors_are_rejected(p, q):
    with pytest.raises(KeyGenerationError):
        generate_keypair(p, q, e=17)


def test_keypair_from_decimal_matches_integers():
    keys = keypair_from_decimal(str(DEFAULT_P), f"  {DEFAULT_Q}\n")
    assert keys == default_keypair()


@pytest.mark.parametrize("text", ["", "   ", "12a", "-5", "+5", "0x1f", "1_000", "3.0", "１２"])
def test_parse_decimal_rejects_non_digits(text):
    with pytest.raises(InvalidInputError):
        parse_decimal(text)


def test_parse_decimal_rejects_non_text():
    with pytest.raises(InvalidInputError):
        parse_decimal(12345)  # type: ignore[arg-type]


def test_keypair_from_decimal_rejects_bad_prime_text():
    with pytest.raises(InvalidInputError):
        keypair_from_decimal("61", "fifty-three")


@pytest.mark.parametrize("value", [0, 7, 65, 12345, 10 ** 100, DEFAULT_P * DEFAULT_Q])
def test_parse_then_format_is_identity(value):
    text = str(value)
    assert str(parse_decimal(text)) == text


def test_parse_decimal_keeps_leading_zero_value():
    assert parse_decimal("007") == 7


def test_default_key_agrees_with_pycryptodome():
    number = pytest.importorskip("Crypto.Util.number")
    RSA = pytest.importorskip("Crypto.PublicKey.RSA")

    keys = default_keypair()
    phi = (DEFAULT_P - 1) * (DEFAULT_Q - 1)
    assert number.inverse(keys.public.e, phi) == keys.private.d
    assert number.isPrime(DEFAULT_P) and number.isPrime(DEFAULT_Q)

    # construct() runs pycryptodome's own consistency checks on (n, e, d, p, q).
    key = RSA.construct((keys.public.n, keys.public.e, keys.private.d, DEFAULT_P, DEFAULT_Q))
    assert key.n == keys.public.n
    assert key.d == keys.private.d
