"""OSC-8 terminal hyperlinks for help epilogs.

Links are emitted only when the stream is a TTY of a terminal known to render
OSC-8; everywhere else the bare URL is printed.
"""

import os
import sys
from typing import TextIO

OSC8_TERMINAL_PROGRAMS = frozenset(
    {"apple_terminal", "vscode", "iterm.app", "wezterm", "kitty", "ghostty"}
)
OSC8_TERM_PREFIXES = ("alacritty", "konsole", "xterm-kitty", "foot")


def supports_osc8(stream: TextIO | None = None) -> bool:
    """Best-effort guess whether ``stream`` (default stdout) renders OSC-8 links.

    Non-TTY streams (pipes, files, ``CliRunner``) never do.
    """
    stream = stream or sys.stdout
    isatty = getattr(stream, "isatty", None)
    if isatty is None or not isatty():
        return False
    if (os.getenv("TERM_PROGRAM") or "").lower() in OSC8_TERMINAL_PROGRAMS:
        return True
    if os.getenv("WT_SESSION") or os.getenv("VTE_VERSION"):
        return True
    return os.getenv("TERM", "").startswith(OSC8_TERM_PREFIXES)


def hyperlink(url: str, text: str | None = None) -> str:
    """Wrap ``url`` in an OSC-8 sequence (BEL terminated) when supported.

    ``text`` defaults to the URL itself and is what unsupported terminals show.
    """
    label = text or url
    if not supports_osc8():
        return label if text is None else f"{text} ({url})"
    return f"\x1b]8;;{url}\x07{label}\x1b]8;;\x07"
