"""Subcommands working on a connected migration engine.

Every subcommand goes through :func:`connected_engine`, which runs the
bootstrap sequence in a fixed order:

1. require the password (usage error if missing),
2. build the immutable configuration and log its summary when verbose,
3. check it against the runtime mode,
4. open and verify the connection,
5. create the migration engine,

and closes the connection exactly once on the way out, whatever happens.

Failure modes
- Missing password → usage error, exit status 2, nothing else happens.
- Unsupported configuration (e.g. ``--package`` in a compiled binary) →
  ``ClickException`` before any connection attempt.
- Unreachable server / rejected credentials → red error line naming the
  (redacted) address, exit status 1; the unverified driver is closed already.
- Engine errors → ``ClickException``; the driver is closed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import closing, contextmanager
from typing import TYPE_CHECKING

import click

from neomig import config as config_module
from neomig.config import build_config
from neomig.errors import NeomigError
from neomig.interfaces.connection import Credentials
from neomig.runtime import validate_runtime

from .helpers import error, success, warn
from .state import CliState

if TYPE_CHECKING:
    from neomig.config import Configuration
    from neomig.interfaces.migrations import MigrationEngine

logger = logging.getLogger(__name__)

NOTHING_TO_APPLY_MSG = "Database is up to date, no migrations applied."  # pragma: no mutate
VALIDATION_DISABLED_MSG = (
    "Validation on migrate is disabled, "
    "locally changed migrations will not be detected."
)


def _credentials(ctx: click.Context, state: CliState) -> Credentials:
    options = state.options
    if options.password is None:
        root = ctx.find_root()
        param = next(p for p in root.command.params if p.name == "password")
        raise click.MissingParameter(ctx=root, param=param)
    credentials = Credentials(username=options.username, password=options.password)
    options.password = None
    return credentials


def _configuration(state: CliState) -> Configuration:
    try:
        cfg = build_config(state.options)
        cfg = validate_runtime(cfg, state.container.runtime)
    except (NeomigError, ValueError) as e:
        raise click.ClickException(str(e)) from e
    cfg.log_to(config_module.logger, cfg.verbose, state.container.redactor)
    return cfg


@contextmanager
def connected_engine(ctx: click.Context) -> Iterator[MigrationEngine]:
    """Yield a migration engine bound to a verified, owned connection."""
    state = ctx.find_object(CliState)
    if state is None:  # pragma: no cover - the root command always sets it
        raise click.UsageError("Subcommands must be run through neo4j-migrations.", ctx)

    credentials = _credentials(ctx, state)
    try:
        cfg = _configuration(state)
    except click.ClickException:
        credentials.clear()
        raise

    try:
        driver = state.container.connections.open(
            cfg.address, credentials, cfg.max_connection_pool_size
        )
    except NeomigError as e:
        logger.debug("Connection failed", exc_info=True)
        error(str(e))
        ctx.exit(1)

    with closing(driver):
        try:
            engine = state.container.engine_factory(cfg, driver)
            yield engine
        except NeomigError as e:
            logger.debug("Migration engine failed", exc_info=True)
            raise click.ClickException(str(e)) from e


@click.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """Show the migration state of the target database."""
    with connected_engine(ctx) as engine:
        click.echo(engine.info())


@click.command()
@click.pass_context
def migrate(ctx: click.Context) -> None:
    """Apply all pending migrations to the target database."""
    with connected_engine(ctx) as engine:
        if not ctx.find_object(CliState).options.validate_on_migrate:
            warn(VALIDATION_DISABLED_MSG)
        version = engine.apply()
    if version is None:
        success(NOTHING_TO_APPLY_MSG)
    else:
        success(f"Database migrated to version {version}.")
