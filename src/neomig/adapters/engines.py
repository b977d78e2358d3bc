"""Discovery of installed migration engines.

Engines register a factory under the ``neomig.engines`` entry-point group::

    [project.entry-points."neomig.engines"]
    default = "my_engine:create_engine"

The factory is called with the immutable configuration and the verified
driver handle and returns a :class:`~neomig.interfaces.migrations.MigrationEngine`.
"""

from __future__ import annotations

import logging
from importlib.metadata import entry_points
from typing import TYPE_CHECKING

from neomig.errors import EngineNotAvailableError

if TYPE_CHECKING:
    from neomig.config import Configuration
    from neomig.interfaces.connection import DriverHandle
    from neomig.interfaces.migrations import EngineFactory, MigrationEngine

ENGINE_GROUP = "neomig.engines"  # pragma: no mutate

NO_ENGINE_MSG = (
    "No migration engine is installed.\n"
    f"Install a package that registers one under the '{ENGINE_GROUP}' "
    "entry-point group."
)

logger = logging.getLogger(__name__)


def load_engine_factory(group: str = ENGINE_GROUP) -> EngineFactory:
    """Return the first engine factory registered under ``group``.

    Entry points are sorted by name so the choice is stable.

    Raises:
        EngineNotAvailableError: If no engine is registered.
    """
    candidates = sorted(entry_points(group=group), key=lambda ep: ep.name)
    if not candidates:
        raise EngineNotAvailableError(NO_ENGINE_MSG)
    selected = candidates[0]
    if len(candidates) > 1:
        logger.warning(
            "Several migration engines installed (%s), using %r",
            ", ".join(ep.name for ep in candidates),
            selected.name,
        )
    logger.debug("Using migration engine %r (%s)", selected.name, selected.value)
    return selected.load()


def entry_point_engine_factory(
    config: Configuration, driver: DriverHandle
) -> MigrationEngine:
    """:data:`~neomig.interfaces.migrations.EngineFactory` resolving entry points lazily."""
    return load_engine_factory()(config, driver)
