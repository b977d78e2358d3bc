"""CLI helpers for neomig.

Address parsing and sanitizing, OSC-8 terminal hyperlinks, logger-level
parsing and message emitters that write to stderr with emoji->ASCII fallbacks.
"""

from .address import sanitize_address, validate_address
from .hyperlinks import hyperlink
from .messages import error, success, warn

__all__ = [
    "sanitize_address",
    "validate_address",
    "warn",
    "success",
    "error",
    "hyperlink",
]
