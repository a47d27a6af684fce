import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from textbook_rsa.errors import InvalidInputError, InvalidOperationError, KeyGenerationError
from textbook_rsa.keys import generate_keypair
from textbook_rsa.session import Operation, Outcome, RsaSession, parse_message, parse_operation


@pytest.fixture(scope="module")
def session():
    return RsaSession.default()


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1", Operation.ENCRYPT),
        (" encrypt ", Operation.ENCRYPT),
        ("E", Operation.ENCRYPT),
        ("2", Operation.DECRYPT),
        ("Decrypt", Operation.DECRYPT),
        ("3", Operation.EXIT),
        ("quit", Operation.EXIT),
    ],
)
def test_parse_operation(text, expected):
    assert parse_operation(text) is expected


@pytest.mark.parametrize("text", ["", "0", "4", "sign", "12"])
def test_parse_operation_rejects_unknown(text):
    with pytest.raises(InvalidOperationError):
        parse_operation(text)


def test_invalid_operation_is_an_input_error():
    assert issubclass(InvalidOperationError, InvalidInputError)


def test_parse_message():
    assert parse_message(" 12345\n") == 12345
    with pytest.raises(InvalidInputError):
        parse_message("12 345")


def test_handle_round_trip(session):
    enc = session.handle("1", "12345")
    assert isinstance(enc, Outcome)
    assert enc.operation is Operation.ENCRYPT
    assert enc.message == 12345
    assert enc.elapsed >= 0.0

    dec = session.handle("decrypt", str(enc.result))
    assert dec.operation is Operation.DECRYPT
    assert dec.result == 12345


def test_handle_exit_returns_none(session):
    assert session.handle("3", "") is None
    assert session.run(Operation.EXIT, 5) is None


def test_invalid_message_rejected_before_exponentiation(session, monkeypatch):
    calls = []

    def spy(*args):
        calls.append(args)
        return 0

    monkeypatch.setattr("textbook_rsa.cipher.mod_exp", spy)
    with pytest.raises(InvalidInputError):
        session.handle("1", "hello")
    with pytest.raises(InvalidInputError):
        session.handle("2", "-42")
    assert calls == []


def test_session_keys_are_shared_not_copied():
    keys = generate_keypair(61, 53, e=17)
    session = RsaSession(keys)
    assert session.keys is keys
    assert session.encrypt(65).value == 2790
    assert session.decrypt(2790).value == 65


def test_from_primes_propagates_key_errors():
    with pytest.raises(KeyGenerationError):
        RsaSession.from_primes(61, 53)
