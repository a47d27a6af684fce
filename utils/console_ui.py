"""Console presentation helpers with graceful fallbacks."""
from __future__ import annotations

import os
import shutil
import sys
from typing import Optional

try:  # optional dependency
    import colorama
    from colorama import Fore, Style
except Exception:  # pragma: no cover - optional dep
    colorama = None
    Fore = None  # type: ignore[assignment]
    Style = None  # type: ignore[assignment]

try:  # optional dependency
    import pyfiglet
except Exception:  # pragma: no cover - optional dep
    pyfiglet = None

__all__ = [
    "init",
    "banner",
    "running_panel",
    "section",
    "kv",
    "number",
    "preview_number",
    "bullet",
    "success",
    "warning",
    "error",
    "elapsed",
    "rule",
    "line",
]

_width = 100
_plain_mode = False
_use_color = False
_color_prefix = {
    "success": "",
    "warning": "",
    "error": "",
}

_symbol_success = "✓"
_symbol_warning = "!"
_symbol_error = "✗"
_symbol_bullet = "•"

# Integers longer than this are shown as head…tail plus a digit count.
_NUMBER_PREVIEW = 64


def init(plain: bool = False) -> None:
    """Initialise console helpers with optional colour output."""

    global _width, _plain_mode, _use_color, _color_prefix
    global _symbol_success, _symbol_warning, _symbol_error, _symbol_bullet

    _width = shutil.get_terminal_size(fallback=(100, 24)).columns or 100

    env_plain = bool(os.environ.get("NO_COLOR"))
    stream = getattr(sys.stdout, "isatty", lambda: False)
    try:
        is_tty = bool(stream())
    except Exception:  # pragma: no cover - conservative fallback
        is_tty = False

    _plain_mode = plain or env_plain or not is_tty
    _use_color = not _plain_mode and colorama is not None
    if _use_color:
        try:
            colorama.init(autoreset=True)
        except Exception:  # pragma: no cover - best-effort init
            _use_color = False

    if _plain_mode:
        _symbol_success, _symbol_warning, _symbol_error, _symbol_bullet = "[OK]", "[!]", "[X]", "-"
    else:
        _symbol_success, _symbol_warning, _symbol_error, _symbol_bullet = "✓", "!", "✗", "•"

    if _use_color and Fore is not None and Style is not None:
        _color_prefix = {
            "success": Fore.GREEN + Style.BRIGHT,
            "warning": Fore.YELLOW + Style.BRIGHT,
            "error": Fore.RED + Style.BRIGHT,
        }
    else:
        _color_prefix = {"success": "", "warning": "", "error": ""}


def _apply(style: str, message: str) -> str:
    if not _use_color:
        return message
    suffix = Style.RESET_ALL if Style is not None else ""
    return f"{style}{message}{suffix}"


def rule(char: str = "=", width: Optional[int] = None) -> None:
    """Print a horizontal rule spanning the console width."""

    count = width if width is not None else _width
    print(char * max(1, count))


def banner(title: str) -> None:
    """Display a banner heading for the CLI."""

    if _plain_mode or pyfiglet is None:
        print(f"=== {title} ===".center(_width))
        return

    try:
        fig = pyfiglet.figlet_format(title, width=_width)
    except Exception:
        print(f"=== {title} ===".center(_width))
        return
    print(fig)


def running_panel(title: str, detail: str | None = None) -> None:
    """Display a panel announcing a non-interactive run."""

    rule("=")
    heading = f"RUNNING: {title}"
    if _use_color and Fore is not None and Style is not None:
        heading = _apply(Fore.MAGENTA + Style.BRIGHT, heading)
    print(heading)
    if detail:
        print(detail)
    rule("=")


def section(title: str) -> None:
    """Display a section divider with the given title."""

    rule("=")
    print(f" {title.upper()}")
    rule("=")


def kv(key: str, value: str) -> None:
    print(f"{key}: {value}")


def preview_number(value: int, *, full: bool = False) -> str:
    """Decimal text of *value*, shortened to head…tail when it is very long."""

    text = str(value)
    if full or len(text) <= _NUMBER_PREVIEW:
        return text
    half = _NUMBER_PREVIEW // 2
    return f"{text[:half]}…{text[-half:]} ({len(text)} digits)"


def number(key: str, value: int, *, full: bool = False) -> None:
    """Print a key/value line for a (possibly huge) integer."""

    kv(key, preview_number(value, full=full))


def bullet(msg: str) -> None:
    print(f"{_symbol_bullet} {msg}")


def success(msg: str) -> None:
    """Highlight a success message."""

    print(_apply(_color_prefix["success"], f"{_symbol_success} {msg}"))


def warning(msg: str) -> None:
    """Highlight a warning message."""

    print(_apply(_color_prefix["warning"], f"{_symbol_warning} {msg}"))


def error(msg: str) -> None:
    """Highlight an error message."""

    print(_apply(_color_prefix["error"], f"{_symbol_error} {msg}"))


def elapsed(prefix: str, seconds: float) -> None:
    """Print an elapsed time; modexp calls are sub-millisecond, hence 6 places."""

    print(f"{prefix} {seconds:.6f}s")


def line() -> None:
    rule("-")
