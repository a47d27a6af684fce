"""Encrypt/decrypt timing dashboard across several modulus sizes."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from statistics import median
from typing import List, Optional, Sequence, Tuple

from textbook_rsa.cipher import decrypt, encrypt
from textbook_rsa.keys import DEFAULT_P, DEFAULT_Q, generate_keypair
from utils.plotting import HAS_MPL, save, timing_axes, wide_grid

logger = logging.getLogger(__name__)

_TITLE = "Textbook RSA: square-and-multiply timings"
_MESSAGE = 12345

# Mersenne primes 2**k - 1 give known factors of several sizes without a
# prime generator; the lab's fixed 309-digit pair sits between the last two.
_MERSENNE_PAIRS: Sequence[Tuple[int, int]] = ((61, 89), (107, 127), (521, 607), (1279, 2203))


@dataclass
class TimingSample:
    """Median timings for one key size."""

    label: str
    modulus_bits: int
    encrypt_seconds: float
    decrypt_seconds: float
    round_trip_ok: bool

    @property
    def ratio(self) -> float:
        if self.encrypt_seconds <= 0:
            return 0.0
        return self.decrypt_seconds / self.encrypt_seconds


def _benchmark_primes() -> List[Tuple[str, int, int]]:
    primes = [(f"M{a} x M{b}", (1 << a) - 1, (1 << b) - 1) for a, b in _MERSENNE_PAIRS]
    primes.insert(3, ("fixed 309-digit", DEFAULT_P, DEFAULT_Q))
    return primes


def collect_timings(repeats: int = 5, message: int = _MESSAGE) -> List[TimingSample]:
    """Time encrypt and decrypt ``repeats`` times for every benchmark key."""

    if repeats < 1:
        raise ValueError("repeats must be at least 1")

    samples: List[TimingSample] = []
    for label, p, q in _benchmark_primes():
        keys = generate_keypair(p, q)
        enc_times: List[float] = []
        dec_times: List[float] = []
        ok = True
        for _ in range(repeats):
            c, enc_elapsed = encrypt(message, keys.public)
            m, dec_elapsed = decrypt(c, keys.private)
            enc_times.append(enc_elapsed)
            dec_times.append(dec_elapsed)
            ok = ok and m == message
        sample = TimingSample(
            label=label,
            modulus_bits=keys.public.bits,
            encrypt_seconds=median(enc_times),
            decrypt_seconds=median(dec_times),
            round_trip_ok=ok,
        )
        logger.info(
            "%s (%d bits): encrypt %.6fs, decrypt %.6fs",
            label,
            sample.modulus_bits,
            sample.encrypt_seconds,
            sample.decrypt_seconds,
        )
        samples.append(sample)
    return samples


def make_timing_dashboard(save_path: str | Path, *, repeats: int = 5) -> Optional[Path]:
    """Measure timings, render them to *save_path* and return the file path.

    Returns ``None`` without measuring or writing anything when matplotlib is
    not installed.
    """

    if not HAS_MPL:
        logger.warning("matplotlib is not installed; timing dashboard not written")
        return None

    target = Path(save_path)
    samples = collect_timings(repeats=repeats)

    fig, axes = wide_grid(1, 2)
    fig.suptitle(_TITLE, fontsize=14)

    bits = [sample.modulus_bits for sample in samples]
    ax = axes[0][0]
    timing_axes(ax, "Median elapsed time per operation", xlabel="Modulus size (bits)")
    ax.plot(bits, [s.encrypt_seconds for s in samples], marker="o", label="encrypt (e = 65537)")
    ax.plot(bits, [s.decrypt_seconds for s in samples], marker="s", label="decrypt (full-size d)")
    ax.legend()

    ax = axes[0][1]
    timing_axes(ax, "Decrypt / encrypt time ratio", log_time=False)
    ax.set_ylabel("Ratio")
    positions = range(len(samples))
    ax.bar(positions, [s.ratio for s in samples], color="#6366f1")
    ax.set_xticks(list(positions))
    ax.set_xticklabels([f"{s.modulus_bits}b" for s in samples])

    fig.text(
        0.5,
        0.01,
        "Wall-clock perf_counter() timings of the modular exponentiation only.",
        ha="center",
        fontsize=9,
    )
    fig.tight_layout(rect=(0, 0.04, 1, 0.93))
    return save(fig, target)


__all__ = ["TimingSample", "collect_timings", "make_timing_dashboard"]
