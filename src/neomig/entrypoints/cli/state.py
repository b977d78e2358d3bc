"""Per-invocation state passed from the root command to subcommands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from neomig.bootstrap import AppContainer
    from neomig.config import RawOptions


@dataclass
class CliState:
    """The application container and the options parsed by the root command.

    ``options`` is consumed once by the first subcommand that builds a
    configuration; its password is wiped when the connection is opened.
    """

    container: AppContainer
    options: RawOptions
