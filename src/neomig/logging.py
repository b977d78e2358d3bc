"""Logging setup for the neomig CLI.

The root command calls :func:`configure_logging` once with the options it
parsed:

* console records go through Rich on stderr, WARNING by default, one level
  chattier per ``-v`` and quieter per ``-q``;
* the flight recorder keeps the most recent records at DEBUG in memory and
  dumps them to a file as soon as a WARNING shows up (or on exit, if forced);
* per-logger levels from ``-L NAME=LEVEL`` are applied last, which is how the
  Neo4j driver is held at ERROR unless the user asks for more.

Records from libraries are prefixed with ``[library]`` on the console.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from dataclasses import dataclass, field
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING

import neo4j
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from logging import Handler, Logger

PROJECT_PREFIX = "neomig"
FLIGHT_RECORDER_FORMAT = (
    "[%(asctime)s] [%(process)d:%(threadName)s] "
    "%(levelname)s %(name)s:%(lineno)d: %(message)s"
)


@dataclass(frozen=True, slots=True)
class LoggingSettings:  # pylint: disable=too-many-instance-attributes
    """Logging related command-line options."""

    verbose_count: int = 0
    quiet_count: int = 0
    debug: bool = False
    color: bool = True
    log_path: Path | None = None
    flight_recorder: bool = True
    flight_recorder_capacity: int = 2000
    force_flush: bool = False
    logger_levels: dict[str, int] = field(default_factory=dict)

    @property
    def console_level(self) -> int:
        """WARNING shifted by ``-v``/``-q``, clamped to DEBUG..CRITICAL."""
        if self.debug:
            return logging.DEBUG
        level = logging.WARNING - 10 * self.verbose_count + 10 * self.quiet_count
        return max(logging.DEBUG, min(logging.CRITICAL, level))


class LibraryPrefixFilter(logging.Filter):
    """Give records from other packages a ``[package]`` prefix."""

    def filter(self, record: logging.LogRecord) -> bool:
        top_level = record.name.partition(".")[0]
        record.prefix = "" if top_level == PROJECT_PREFIX else f"[{top_level}]"
        return True


def console_handler(
    level: int, *, debug: bool = False, color: bool = True
) -> RichHandler:
    """Rich handler on stderr.

    In debug mode records carry timestamps, logger names and source links.
    """
    console = Console(color_system="auto" if color else None, stderr=True)
    handler = RichHandler(
        level=level,
        console=console,
        rich_tracebacks=True,
        show_time=False,
        show_path=debug,
        enable_link_path=debug,
    )
    if debug:
        handler.setFormatter(logging.Formatter("%(asctime)s %(name)s: %(message)s"))
    else:
        handler.addFilter(LibraryPrefixFilter())
        handler.setFormatter(logging.Formatter("%(prefix)s %(message)s"))
    return handler


def flight_recorder(
    path: Path, capacity: int, *, flush_on_close: bool = False
) -> MemoryHandler:
    """In-memory buffer of ``capacity`` records written to ``path`` on WARNING."""
    path.parent.mkdir(parents=True, exist_ok=True)
    target = logging.FileHandler(path, mode="w", encoding="utf-8")
    target.setLevel(logging.DEBUG)
    target.setFormatter(logging.Formatter(FLIGHT_RECORDER_FORMAT))
    return MemoryHandler(
        capacity,
        flushLevel=logging.WARNING,
        target=target,
        flushOnClose=flush_on_close,
    )


def configure_logging(settings: LoggingSettings) -> list[Handler]:
    """Install the console handler and flight recorder on the root logger.

    Returns:
        The installed handlers.
    """
    handlers: list[Handler] = [
        console_handler(
            settings.console_level, debug=settings.debug, color=settings.color
        )
    ]
    if settings.flight_recorder and settings.log_path is not None:
        handlers.append(
            flight_recorder(
                settings.log_path,
                settings.flight_recorder_capacity,
                flush_on_close=settings.force_flush,
            )
        )
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)
    for name, level in settings.logger_levels.items():
        logging.getLogger(name).setLevel(level)
    return handlers


def log_startup(
    logger: Logger,
    settings: LoggingSettings,
    handlers: list[Handler],
    *,
    app_version: str,
    redactor_mode: str,
    runtime: str,
) -> None:
    """One INFO line about the session, then DEBUG details for bug reports."""
    logger.info(
        "neomig %s (console=%s, flight recorder %s, %s runtime)",
        app_version,
        logging.getLevelName(settings.console_level),
        "on" if settings.flight_recorder else "off",
        runtime,
    )
    logger.debug(
        "Python %s on %s %s",
        sys.version.split()[0],
        platform.system(),
        platform.release(),
    )
    logger.debug("Process %s in %s", os.getpid(), Path.cwd())
    logger.debug("Neo4j driver %s", neo4j.__version__)
    logger.debug("Log handlers: %s", ", ".join(type(h).__name__ for h in handlers))
    logger.debug("Redactor mode: %s", redactor_mode)
    if settings.flight_recorder:
        logger.debug(
            "Flight recorder writes up to %s records to %s (flush on exit: %s)",
            settings.flight_recorder_capacity,
            settings.log_path or "<nowhere>",
            settings.force_flush,
        )
    overrides = {
        name: logging.getLevelName(level)
        for name, level in settings.logger_levels.items()
    }
    logger.debug("Logger levels: %s", overrides or "<defaults>")
