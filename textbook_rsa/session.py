"""Request handling on top of a fixed key pair.

A :class:`RsaSession` is built once at startup and passed to whatever serves
requests.  It owns the key pair (immutable), turns raw text from the user into
integers and operations, and runs the timed encrypt/decrypt call.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Optional

from textbook_rsa.cipher import TimedResult, decrypt, encrypt
from textbook_rsa.errors import InvalidOperationError
from textbook_rsa.keys import KeyPair, default_keypair, generate_keypair, parse_decimal

logger = logging.getLogger(__name__)


class Operation(enum.Enum):
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"
    EXIT = "exit"


# Menu numbers follow the console prompt: 1 encrypt, 2 decrypt, 3 exit.
_OPERATION_ALIASES = {
    "1": Operation.ENCRYPT,
    "e": Operation.ENCRYPT,
    "enc": Operation.ENCRYPT,
    "encrypt": Operation.ENCRYPT,
    "2": Operation.DECRYPT,
    "d": Operation.DECRYPT,
    "dec": Operation.DECRYPT,
    "decrypt": Operation.DECRYPT,
    "3": Operation.EXIT,
    "q": Operation.EXIT,
    "quit": Operation.EXIT,
    "exit": Operation.EXIT,
}


def parse_operation(text: str) -> Operation:
    """Map ``"1"/"2"/"3"`` or a name such as ``"decrypt"`` to an :class:`Operation`."""

    key = text.strip().lower() if isinstance(text, str) else ""
    try:
        return _OPERATION_ALIASES[key]
    except KeyError:
        raise InvalidOperationError(f"Unknown operation: {text!r}") from None


def parse_message(text: str) -> int:
    """Parse a message or ciphertext typed by the user."""

    return parse_decimal(text, field="message")


@dataclass(frozen=True)
class Outcome:
    operation: Operation
    message: int
    result: int
    elapsed: float


class RsaSession:
    """Key pair plus the operations a caller may run against it."""

    def __init__(self, keys: KeyPair):
        self._keys = keys

    @classmethod
    def from_primes(cls, p: int, q: int) -> "RsaSession":
        return cls(generate_keypair(p, q))

    @classmethod
    def default(cls) -> "RsaSession":
        """Session over the lab's two fixed 309-digit primes."""
        return cls(default_keypair())

    @property
    def keys(self) -> KeyPair:
        return self._keys

    def encrypt(self, message: int) -> TimedResult:
        return encrypt(message, self._keys.public)

    def decrypt(self, ciphertext: int) -> TimedResult:
        return decrypt(ciphertext, self._keys.private)

    def run(self, operation: Operation, message: int) -> Optional[Outcome]:
        """Run an already-parsed request; returns ``None`` for :attr:`Operation.EXIT`."""

        if operation is Operation.EXIT:
            return None
        if operation is Operation.ENCRYPT:
            value, elapsed = self.encrypt(message)
        else:
            value, elapsed = self.decrypt(message)
        logger.debug("%s finished in %.6fs", operation.value, elapsed)
        return Outcome(operation=operation, message=message, result=value, elapsed=elapsed)

    def handle(self, operation_text: str, message_text: str) -> Optional[Outcome]:
        """Validate raw text and run the request.

        The message is checked before anything is exponentiated, so malformed
        input surfaces as :class:`~textbook_rsa.errors.InvalidInputError`.
        """

        operation = parse_operation(operation_text)
        if operation is Operation.EXIT:
            return None
        return self.run(operation, parse_message(message_text))


__all__ = ["Operation", "Outcome", "RsaSession", "parse_operation", "parse_message"]
