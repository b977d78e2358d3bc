"""Terminal message helpers for the neomig CLI.

Status lines are written to stderr so stdout stays reserved for command
output (e.g. the ``info`` table). Emoji markers fall back to ASCII when the
stream cannot encode them.
"""

from __future__ import annotations

import click

CAUTION = ("⚠️", "[!]")  # pragma: no mutate
SUCCESS = ("✅", "[OK]")  # pragma: no mutate
FAILURE = ("❌", "[X]")  # pragma: no mutate


def _supports_character(character: str) -> bool:
    """Return True if ``character`` can be encoded on the current stderr."""
    stream = click.get_text_stream("stderr")  # pragma: no mutate
    encoding = getattr(stream, "encoding", None) or "ascii"
    try:
        character.encode(encoding)
    except (UnicodeEncodeError, LookupError):
        return False
    return True


def _glyph(pair: tuple[str, str]) -> str:
    emoji, fallback = pair
    return emoji if _supports_character(emoji) else fallback


def caution_glyph() -> str:
    """Warning marker: "⚠️" or "[!]"."""
    return _glyph(CAUTION)


def success_glyph() -> str:
    """Success marker: "✅" or "[OK]"."""
    return _glyph(SUCCESS)


def error_glyph() -> str:
    """Error marker: "❌" or "[X]"."""
    return _glyph(FAILURE)


def warn(msg: str) -> None:
    """Emit a yellow, bold warning line to stderr."""
    click.secho(f"{caution_glyph()}  {msg}", fg="yellow", bold=True, err=True)


def success(msg: str) -> None:
    """Emit a green, bold success line to stderr.

    Example:
        ``✅  Database migrated to version 0042.``
    """
    click.secho(f"{success_glyph()}  {msg}", fg="green", bold=True, err=True)


def error(msg: str) -> None:
    """Emit a red, bold error line to stderr."""
    click.secho(f"{error_glyph()}  {msg}", fg="red", bold=True, err=True)
