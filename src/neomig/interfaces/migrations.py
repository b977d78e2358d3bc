"""Contract of the migration engine neomig hands its configuration to.

The engine discovers, orders, validates and applies migrations; none of that
happens in neomig itself. An engine is created per invocation from the
immutable :class:`~neomig.config.Configuration` and a verified driver.
"""

from __future__ import annotations

import abc
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from neomig.config import Configuration
    from neomig.interfaces.connection import DriverHandle


class MigrationEngine(abc.ABC):
    """Engine operating on one database through a driver it does not own."""

    @abc.abstractmethod
    def info(self) -> str:
        """Return a printable description of the migration state."""

    @abc.abstractmethod
    def apply(self) -> str | None:
        """Apply pending migrations.

        Returns:
            The database version after applying, or ``None`` when nothing was
            applied.
        """


EngineFactory = Callable[["Configuration", "DriverHandle"], MigrationEngine]
