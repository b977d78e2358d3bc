"""Regex-based redactor for sanitizing secrets from strings.

Masks passwords embedded in bolt/neo4j URIs (``scheme://user:pw@host``),
secrets passed as routing-context query parameters, bearer tokens and
free-form ``key: value`` fragments. Strict mode also hides user names.
"""

import re

from neomig.interfaces import redactor
from neomig.interfaces.redactor import RedactorMode

# pylint: disable=too-few-public-methods

PLACEHOLDER = "***"
SECRET_KEYWORDS = [
    "password",
    "passwd",
    "pwd",
    "secret",
    "credentials",
    "token",
    "api_key",
    "access_token",
    "refresh_token",
    "authorization",
]
STRICT_MODE_ADDITIONAL_KEYWORDS = ["user", "username", "principal"]
STRICT_MODE_SECRET_KEYWORDS = SECRET_KEYWORDS + STRICT_MODE_ADDITIONAL_KEYWORDS


def _keyword_pattern(keywords: list[str]) -> str:
    return "|".join(kw.replace("_", "[-_]?") for kw in keywords)


QUERY_STRING_PATTERN = re.compile(
    rf"([?&](?:{_keyword_pattern(SECRET_KEYWORDS)})=)[^&#\s;]*", re.IGNORECASE
)
STRICT_MODE_QUERY_STRING_PATTERN = re.compile(
    rf"([?&](?:{_keyword_pattern(STRICT_MODE_SECRET_KEYWORDS)})=)[^&#\s;]*",
    re.IGNORECASE,
)
KEY_VALUE_SECRET_PATTERN = re.compile(
    rf"(\b(?:{_keyword_pattern(SECRET_KEYWORDS)})\s*:\s*)\S+", re.IGNORECASE
)
STRICT_MODE_KEY_VALUE_SECRET_PATTERN = re.compile(
    rf"(\b(?:{_keyword_pattern(STRICT_MODE_SECRET_KEYWORDS)})\s*:\s*)\S+",
    re.IGNORECASE,
)
BEARER_PATTERN = re.compile(r"Bearer\s[0-9a-zA-Z\.\-_]*", re.IGNORECASE)
URL_PASSWORD_PATTERN = re.compile(r"(?<=://)([^:@/]+):([^@/]+)@")
URL_USER_PATTERN = re.compile(r"(?<=://)([^:@/]+)(?=(?::[^@/]*)?@)")


class Redactor(redactor.Redactor):
    """Redactor implementation using regex-based sanitization."""

    def __init__(self, mode: RedactorMode = RedactorMode.LENIENT) -> None:
        self._mode = mode

    def sanitize_db_url(self, raw_url: str) -> str:
        """Redact secrets in a database address or a message quoting one.

        Args:
            raw_url: Address or free text, e.g. ``neo4j://alice:pw@db:7687``.

        Returns:
            str: ``raw_url`` with passwords, bearer tokens and secret query or
            ``key: value`` parameters replaced by ``***``. In strict
            mode user names are replaced too.
        """
        strict = self._mode == RedactorMode.STRICT
        sanitized = str(raw_url)

        # 1) user:pass@  ->  user:***@
        sanitized = URL_PASSWORD_PATTERN.sub(rf"\1:{PLACEHOLDER}@", sanitized)

        # 2) strict: user@ / user:***@  ->  ***@ / ***:***@
        if strict:
            sanitized = URL_USER_PATTERN.sub(PLACEHOLDER, sanitized)

        # 3) Bearer <token>
        sanitized = BEARER_PATTERN.sub(PLACEHOLDER, sanitized)

        # 4) routing context / query-string secrets
        query_pattern = (
            STRICT_MODE_QUERY_STRING_PATTERN if strict else QUERY_STRING_PATTERN
        )
        sanitized = query_pattern.sub(rf"\1{PLACEHOLDER}", sanitized)

        # 5) key: value fragments
        key_value_pattern = (
            STRICT_MODE_KEY_VALUE_SECRET_PATTERN if strict else KEY_VALUE_SECRET_PATTERN
        )
        sanitized = key_value_pattern.sub(rf"\1{PLACEHOLDER}", sanitized)

        return sanitized
