"""Configuration model for neomig.

This module holds the default constants, the mutable ``RawOptions`` bag filled
by the command line, and the immutable ``Configuration`` handed to
subcommands. ``build_config`` is the only way from one to the other.

Credentials never enter ``Configuration``; they belong to the connection
(see :class:`neomig.interfaces.connection.Credentials`).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from logging import Logger

    from neomig.interfaces.redactor import Redactor

logger = logging.getLogger(__name__)


class TransactionMode(str, Enum):
    """How migrations are wrapped in transactions.

    Attributes:
        PER_MIGRATION: One transaction per migration script.
        PER_STATEMENT: One transaction per statement inside a script.
    """

    PER_MIGRATION = "PER_MIGRATION"
    PER_STATEMENT = "PER_STATEMENT"


class Defaults:  # pylint: disable=too-few-public-methods
    """Default values for the command-line options."""

    ADDRESS = "bolt://localhost:7687"
    USER = "neo4j"
    TRANSACTION_MODE = TransactionMode.PER_MIGRATION
    VALIDATE_ON_MIGRATE = True
    AUTOCRLF = True
    MAX_CONNECTION_POOL_SIZE = 1
    USER_AGENT = "neo4j-migrations"


@dataclass(slots=True)
class RawOptions:  # pylint: disable=too-many-instance-attributes
    """Values collected from the command line before validation.

    Created fresh per invocation, consumed once by :func:`build_config`.
    The password is kept as a ``bytearray`` so it can be zeroed after use.
    """

    address: str = Defaults.ADDRESS
    username: str = Defaults.USER
    password: bytearray | None = field(default=None, repr=False)
    packages_to_scan: list[str] = field(default_factory=list)
    locations_to_scan: list[str] = field(default_factory=list)
    transaction_mode: TransactionMode = Defaults.TRANSACTION_MODE
    database: str | None = None
    verbose: bool = False
    validate_on_migrate: bool = Defaults.VALIDATE_ON_MIGRATE
    autocrlf: bool = Defaults.AUTOCRLF
    max_connection_pool_size: int = Defaults.MAX_CONNECTION_POOL_SIZE


@dataclass(frozen=True, slots=True)
class Configuration:  # pylint: disable=too-many-instance-attributes
    """Immutable migration configuration shared read-only with subcommands."""

    address: str
    packages_to_scan: tuple[str, ...] = ()
    locations_to_scan: tuple[str, ...] = ()
    transaction_mode: TransactionMode = Defaults.TRANSACTION_MODE
    database: str | None = None
    verbose: bool = False
    validate_on_migrate: bool = Defaults.VALIDATE_ON_MIGRATE
    autocrlf: bool = Defaults.AUTOCRLF
    max_connection_pool_size: int = Defaults.MAX_CONNECTION_POOL_SIZE

    @property
    def has_places_to_look_for_migrations(self) -> bool:
        """True if at least one package or location is configured."""
        return bool(self.packages_to_scan or self.locations_to_scan)

    def summary(self, redactor: Redactor | None = None) -> list[str]:
        """Return the non-sensitive summary lines of this configuration.

        The address is passed through ``redactor`` when one is given so that
        credentials embedded in the URI are never displayed.
        """
        address = redactor.sanitize_db_url(self.address) if redactor else self.address
        lines = [f"Address: {address}"]
        if self.database:
            lines.append(f"Database: {self.database}")
        if self.packages_to_scan:
            lines.append(f"Packages to scan: {', '.join(self.packages_to_scan)}")
        if self.locations_to_scan:
            lines.append(f"Locations to scan: {', '.join(self.locations_to_scan)}")
        lines.append(f"Transaction mode: {self.transaction_mode.value}")
        lines.append(f"Validate on migrate: {'yes' if self.validate_on_migrate else 'no'}")
        lines.append(f"Convert CRLF to LF: {'yes' if self.autocrlf else 'no'}")
        lines.append(f"Max connection pool size: {self.max_connection_pool_size}")
        return lines

    def log_to(
        self, sink: Logger, verbose: bool, redactor: Redactor | None = None
    ) -> None:
        """Write the configuration summary to ``sink`` at INFO when ``verbose``."""
        if not verbose:
            return
        for line in self.summary(redactor):
            sink.info(line)
        if not self.has_places_to_look_for_migrations:
            sink.warning(
                "Neither packages nor locations to scan are configured, "
                "no migrations will be found."
            )


def build_config(options: RawOptions) -> Configuration:
    """Build an immutable :class:`Configuration` from parsed options.

    Pure and deterministic: equal ``RawOptions`` yield equal configurations.
    Credentials are dropped here and never touched.

    Args:
        options: The values collected from the command line.

    Returns:
        Configuration: The frozen configuration.

    Raises:
        ValueError: If the connection pool size is smaller than one.
    """
    if options.max_connection_pool_size < 1:
        raise ValueError(
            "The connection pool size must be at least 1, "
            f"got {options.max_connection_pool_size}."
        )
    return Configuration(
        address=options.address,
        packages_to_scan=tuple(options.packages_to_scan),
        locations_to_scan=tuple(options.locations_to_scan),
        transaction_mode=TransactionMode(options.transaction_mode),
        database=options.database or None,
        verbose=options.verbose,
        validate_on_migrate=options.validate_on_migrate,
        autocrlf=options.autocrlf,
        max_connection_pool_size=options.max_connection_pool_size,
    )
