"""Build the application container used by the CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from neomig.adapters.engines import entry_point_engine_factory
from neomig.adapters.neo4j_driver import Neo4jConnector
from neomig.adapters.redactor import Redactor
from neomig.interfaces.redactor import RedactorMode
from neomig.runtime import RuntimeEnvironment, detect_runtime
from neomig.service_layer.connections import ConnectionManager

if TYPE_CHECKING:
    from neomig.interfaces.redactor import Redactor as AbstractRedactor
    from neomig.interfaces.connection import Connector
    from neomig.interfaces.migrations import EngineFactory


@dataclass(frozen=True)
class AppContainer:
    """Collaborators shared by every subcommand of one invocation."""

    connections: ConnectionManager
    engine_factory: EngineFactory
    runtime: RuntimeEnvironment
    redactor: AbstractRedactor


def bootstrap(
    *,
    connector: Connector | None = None,
    engine_factory: EngineFactory | None = None,
    runtime: RuntimeEnvironment | None = None,
    redactor_mode: RedactorMode = RedactorMode.LENIENT,
) -> AppContainer:
    """Wire the application; any collaborator can be replaced (tests do)."""
    redactor_ = Redactor(redactor_mode)
    return AppContainer(
        connections=ConnectionManager(connector or Neo4jConnector(redactor_), redactor_),
        engine_factory=engine_factory or entry_point_engine_factory,
        runtime=runtime if runtime is not None else detect_runtime(),
        redactor=redactor_,
    )
