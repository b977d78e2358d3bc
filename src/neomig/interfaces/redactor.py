"""Interfaces for redacting sensitive values.

Defines the Redactor interface and the RedactorMode enumeration used to
sanitize secrets (passwords, tokens) from database addresses and free-form
strings before they reach logs, prompts or error messages.
"""

import abc
from enum import Enum

# pylint: disable=too-few-public-methods


class RedactorMode(Enum):
    """Enumeration for redactor modes.

    Modes:
    - LENIENT: redact passwords/tokens but keep usernames visible.
    - STRICT: redact passwords/tokens and also usernames.
    """

    LENIENT = "lenient"
    STRICT = "strict"


class Redactor(abc.ABC):
    """Interface for sanitizing sensitive information from strings."""

    _mode: RedactorMode

    @abc.abstractmethod
    def sanitize_db_url(self, raw_url: str) -> str:
        """Return a display-safe database address.

        Args:
            raw_url: Raw database address, e.g. ``neo4j://user:pw@host:7687``.

        Returns:
            The address with sensitive information redacted.
        """

    @property
    def mode(self) -> RedactorMode:
        """Return the redaction mode."""
        return self._mode
