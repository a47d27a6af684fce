#!/usr/bin/env python3
"""
Textbook RSA CLI – encrypt and decrypt numbers with a fixed key pair.

Usage:
  Interactive loop (enter a number, then 1=encrypt, 2=decrypt, 3=exit):
    python rsa_cli.py

  Non-interactive:
    python rsa_cli.py --encrypt 12345
    python rsa_cli.py --decrypt <ciphertext>
    python rsa_cli.py --run demo
    python rsa_cli.py --run dashboard --out Visualizations
"""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys
import textwrap
from typing import Callable, List, Optional

# Ensure relative repo imports work even if executed from another directory.
sys.path.insert(0, str(pathlib.Path(__file__).parent.resolve()))

from textbook_rsa.cipher import decrypt, encrypt
from textbook_rsa.errors import InvalidInputError, KeyGenerationError
from textbook_rsa.keys import generate_keypair, keypair_from_decimal
from textbook_rsa.session import Operation, Outcome, RsaSession, parse_message, parse_operation
from utils import console_ui
from utils.plotting import HAS_MPL as _HAS_MPL

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INVALID_INPUT = 2

_DEMO_MESSAGE = 12345


def _configure_logging(level: str) -> None:
    level_value = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(
        level=level_value,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _print_summary(threat: str, weakness: str, evidence: str, remedy: str) -> None:
    console_ui.kv("Threat model", threat)
    console_ui.kv("Weakness shown", weakness)
    console_ui.kv("Evidence", evidence)
    console_ui.kv("Remedy", remedy)


def _allow_decimal_digits(digits: int) -> None:
    """Raise the interpreter's int<->str digit limit to at least *digits*."""

    # 0 means unlimited; interpreters without the limit lack these functions.
    getter = getattr(sys, "get_int_max_str_digits", None)
    if getter is None:
        return
    current = getter()
    if current and current < digits:
        sys.set_int_max_str_digits(digits)


def _build_session(p_text: Optional[str], q_text: Optional[str]) -> Optional[RsaSession]:
    try:
        if p_text is None:
            return RsaSession.default()
        # n has at most len(p) + len(q) digits; messages and results stay below n.
        _allow_decimal_digits(len(p_text) + len(q_text))
        return RsaSession(keypair_from_decimal(p_text, q_text))
    except (InvalidInputError, KeyGenerationError) as exc:
        console_ui.error(f"Key generation failed: {exc}")
        return None


def _print_keys(session: RsaSession) -> None:
    public = session.keys.public
    console_ui.kv("Modulus n size", f"{public.bits} bits")
    console_ui.number("Modulus n", public.n)
    console_ui.kv("Public exponent e", str(public.e))


def _print_outcome(outcome: Outcome) -> None:
    if outcome.operation is Operation.ENCRYPT:
        console_ui.number("Plaintext", outcome.message, full=True)
        console_ui.number("Ciphertext", outcome.result, full=True)
        console_ui.elapsed("Encryption took", outcome.elapsed)
    else:
        console_ui.number("Ciphertext", outcome.message, full=True)
        console_ui.number("Plaintext", outcome.result, full=True)
        console_ui.elapsed("Decryption took", outcome.elapsed)


def run_single(session: RsaSession, operation: Operation, message_text: str) -> int:
    """Run one encrypt/decrypt request and return the process exit status."""

    try:
        message = parse_message(message_text)
    except InvalidInputError as exc:
        console_ui.error(f"Invalid input: {exc}")
        return EXIT_INVALID_INPUT
    outcome = session.run(operation, message)
    if outcome is not None:
        _print_outcome(outcome)
    return EXIT_OK


def prompt_loop(session: RsaSession, read: Callable[[str], str] = input) -> None:
    """Ask for a number, then for the operation, until the user exits."""

    while True:
        console_ui.line()
        try:
            message_text = read("Enter a number to encrypt or decrypt: ")
        except EOFError:
            print()
            break
        try:
            message = parse_message(message_text)
        except InvalidInputError:
            console_ui.error("The input must consist of decimal digits only.")
            continue

        try:
            op_text = read("Operation (1 = encrypt, 2 = decrypt, 3 = exit): ")
        except EOFError:
            print()
            break
        try:
            operation = parse_operation(op_text)
        except InvalidInputError:
            console_ui.warning("Invalid operation. Choose 1-3.")
            continue

        if operation is Operation.EXIT:
            break
        outcome = session.run(operation, message)
        if outcome is not None:
            _print_outcome(outcome)
    print("Goodbye!")


def run_demo(session: RsaSession) -> bool:
    """Walk through the classic 61/53 example and a round trip on the real key."""

    ok = True

    console_ui.section("Textbook example (p = 61, q = 53, e = 17)")
    small = generate_keypair(61, 53, e=17)
    c, _ = encrypt(65, small.public)
    m, _ = decrypt(c, small.private)
    console_ui.kv("n", str(small.public.n))
    console_ui.kv("phi(n)", str((61 - 1) * (53 - 1)))
    console_ui.kv("d", str(small.private.d))
    console_ui.kv("Encrypt(65)", str(c))
    console_ui.kv(f"Decrypt({c})", str(m))
    ok = ok and m == 65

    console_ui.section("Fixed key round trip (e = 65537)")
    _print_keys(session)
    c, enc_elapsed = session.encrypt(_DEMO_MESSAGE)
    m, dec_elapsed = session.decrypt(c)
    repeat_c, _ = session.encrypt(_DEMO_MESSAGE)
    console_ui.kv("Plaintext", str(_DEMO_MESSAGE))
    console_ui.number("Ciphertext", c)
    console_ui.elapsed("Encryption took", enc_elapsed)
    console_ui.elapsed("Decryption took", dec_elapsed)
    console_ui.kv("Round-trip OK", str(m == _DEMO_MESSAGE))
    ok = ok and m == _DEMO_MESSAGE

    console_ui.section("Summary")
    _print_summary(
        "attacker can choose plaintexts/ciphertexts",
        "Textbook RSA without padding is deterministic",
        f"encrypt(m) repeated -> same ciphertext: {repeat_c == c}",
        "Use randomized padding (OAEP) for anything real",
    )
    if ok:
        console_ui.success("Demo completed successfully.")
    else:
        console_ui.error("Round trip failed.")
    return ok


def run_dashboard(out_dir: pathlib.Path) -> Optional[pathlib.Path]:
    console_ui.section("Export timing dashboard (PNG)")
    if not _HAS_MPL:
        console_ui.warning("matplotlib is not installed; skipping dashboard export.")
        return None

    from reports.timing_dashboard import make_timing_dashboard

    try:
        path = make_timing_dashboard(out_dir / "rsa_timings.png")
    except Exception as exc:  # pragma: no cover - runtime safeguard
        console_ui.error(f"Dashboard export failed: {exc}")
        return None
    if path is None:
        console_ui.warning("No dashboard was generated.")
        return None
    console_ui.success(f"Saved dashboard: {path.resolve()}")
    return path


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        description="Textbook RSA CLI: encrypt/decrypt integers with a fixed key pair.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""
        Examples:
          python rsa_cli.py
          python rsa_cli.py --encrypt 12345
          python rsa_cli.py --run demo
        """),
    )
    mode = ap.add_mutually_exclusive_group()
    mode.add_argument("--run", choices=["demo", "dashboard"], help="Run a task non-interactively.")
    mode.add_argument("--encrypt", metavar="M", help="Encrypt the decimal integer M and exit.")
    mode.add_argument("--decrypt", metavar="C", help="Decrypt the decimal integer C and exit.")
    ap.add_argument("--p", help="First prime as a decimal string (default: built-in 309-digit prime).")
    ap.add_argument("--q", help="Second prime as a decimal string (default: built-in 309-digit prime).")
    ap.add_argument(
        "--out",
        type=pathlib.Path,
        default=pathlib.Path("Visualizations"),
        help="Output directory for --run dashboard.",
    )
    ap.add_argument(
        "--plain",
        action="store_true",
        help="Disable colors/banners; print plain ASCII.",
    )
    ap.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging verbosity (DEBUG, INFO, WARNING, ...)",
    )
    args = ap.parse_args(argv)
    if (args.p is None) != (args.q is None):
        ap.error("--p and --q must be given together")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    _configure_logging(args.log_level)
    console_ui.init(plain=args.plain)

    if args.run == "dashboard":
        if run_dashboard(args.out) is None and _HAS_MPL:
            return EXIT_FAILURE
        return EXIT_OK

    session = _build_session(args.p, args.q)
    if session is None:
        return EXIT_FAILURE

    if args.encrypt is not None:
        return run_single(session, Operation.ENCRYPT, args.encrypt)
    if args.decrypt is not None:
        return run_single(session, Operation.DECRYPT, args.decrypt)
    if args.run == "demo":
        console_ui.running_panel("Textbook RSA demo", "textbook_rsa/keys.py, textbook_rsa/cipher.py")
        return EXIT_OK if run_demo(session) else EXIT_FAILURE

    console_ui.banner("Textbook RSA")
    _print_keys(session)
    console_ui.bullet("Enter a number, then choose 1 (encrypt), 2 (decrypt) or 3 (exit).")
    prompt_loop(session)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
