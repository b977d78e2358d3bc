"""Connection primitives consumed by the connection manager.

``Connector`` is the outbound port that creates a driver; ``DriverHandle`` is
the minimal surface neomig needs from it. Adapters implement ``Connector`` on
top of a real driver (see :mod:`neomig.adapters.neo4j_driver`), tests use
fakes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class DriverSettings:
    """Driver-level settings applied when a connection is created.

    Attributes:
        max_connection_pool_size: Upper bound of pooled connections (>= 1).
        user_agent: Client identifier sent to the server.
        log_level: Minimum level for the driver's own log records.
    """

    max_connection_pool_size: int
    user_agent: str
    log_level: int = logging.ERROR

    def __post_init__(self) -> None:
        if self.max_connection_pool_size < 1:
            raise ValueError(
                "max_connection_pool_size must be at least 1, "
                f"got {self.max_connection_pool_size}."
            )


@dataclass(slots=True)
class Credentials:
    """Basic-auth credentials with a password that can be wiped.

    The password is stored in a ``bytearray`` and never shows up in ``repr``.
    Call :meth:`clear` once the credentials have been handed to the driver.
    """

    username: str
    password: bytearray = field(repr=False)

    @classmethod
    def from_secret(cls, username: str, secret: str | bytes | bytearray) -> Credentials:
        """Create credentials from a secret in any of the usual shapes."""
        if isinstance(secret, str):
            secret = secret.encode("utf-8")
        return cls(username=username, password=bytearray(secret))

    def reveal(self) -> str:
        """Return the password as text, for the driver's auth token only."""
        return self.password.decode("utf-8")

    def clear(self) -> None:
        """Overwrite the password in place and drop it."""
        for i in range(len(self.password)):
            self.password[i] = 0
        self.password.clear()

    @property
    def cleared(self) -> bool:
        """True once :meth:`clear` has run (or the password was empty)."""
        return not self.password


@runtime_checkable
class DriverHandle(Protocol):
    """What neomig needs from a driver: verification and release."""

    def verify_connectivity(self) -> None:
        """Round trip to the server; raises if unreachable or unauthenticated."""

    def close(self) -> None:
        """Release every resource held by the driver."""


class Connector(Protocol):  # pylint: disable=too-few-public-methods
    """Outbound port creating a driver without verifying it.

    Implementations must not fail on wrong credentials here; authentication is
    checked by :meth:`DriverHandle.verify_connectivity`.
    """

    def __call__(
        self, address: str, credentials: Credentials, settings: DriverSettings
    ) -> DriverHandle:
        """Create a driver for ``address``."""
