"""neomig CLI entry point.

Defines the top-level ``neo4j-migrations`` command (via Click-Extra): the
option model shared by every subcommand, logging setup, and the dispatch
contract. The root command itself does no work; exactly one subcommand must be
selected.

Currently available subcommands
- ``info``    : show the migration state of the target database.
- ``migrate`` : apply pending migrations.

Notes
- Options of the root command go *before* the subcommand name.
- ``-p``/``--password`` without a value prompts with hidden input.
- The version is sourced from `neomig.__version__` (``--version``).

Examples
    $ neo4j-migrations -p --location ./migrations info
    $ neo4j-migrations -a neo4j://db:7687 -u admin -p migrate
"""

from __future__ import annotations

import logging
from collections.abc import Collection
from pathlib import Path

import click
import click_extra as clickx
from platformdirs import user_log_dir

from neomig import __version__
from neomig.bootstrap import AppContainer, bootstrap
from neomig.config import Defaults, RawOptions, TransactionMode
from neomig.interfaces.redactor import RedactorMode
from neomig.logging import LoggingSettings, configure_logging, log_startup

from .commands import info, migrate
from .errors import MissingSubcommandError
from .helpers import hyperlink, validate_address
from .helpers.log_level_parser import parse_log_level
from .state import CliState

logger = logging.getLogger(__name__)

PASSWORD_FLAGS = ("-p", "--password")

HELP = """Migrates Neo4j databases.

    Collects the connection and migration options, checks them against the
    runtime neo4j-migrations executes in, opens a verified connection to the
    target database and hands both to the selected subcommand.
    """

EPILOG = "\b\n" + "\n".join(
    [
        f"{click.style('See Also:', fg='blue', bold=True, underline=True)}",
        "  Driver: " + hyperlink("https://neo4j.com/docs/python-manual/current/"),
        "  Cypher: " + hyperlink("https://neo4j.com/docs/cypher-manual/current/"),
    ]
)


def _terminate_bare_password(
    args: list[str],
    commands: Collection[str],
    value_options: Collection[str] = (),
) -> list[str]:
    """Keep a value-less password flag from consuming a subcommand name.

    ``-p info`` gets a ``--`` after the flag, so ``info`` stays the subcommand
    and the password is prompted for. Without any subcommand a value-less flag
    is dropped, so the missing subcommand is reported without prompting first.
    Values of ``value_options`` are skipped while scanning, which keeps
    ``--location info`` from being read as the subcommand. Scanning stops
    where the root options end.
    """
    result: list[str] = []
    bare: list[int] = []
    rest = list(args)
    while rest:
        arg = rest.pop(0)
        result.append(arg)
        if arg == "--" or arg in commands:
            return result + rest
        if arg in PASSWORD_FLAGS:
            if not rest or rest[0].startswith("-"):
                bare.append(len(result) - 1)
            elif rest[0] in commands:
                result.append("--")
                return result + rest
            else:
                result.append(rest.pop(0))
        elif arg in value_options and rest:
            result.append(rest.pop(0))
    return [arg for index, arg in enumerate(result) if index not in bare]


class MigrationsGroup(clickx.ExtraGroup):
    """Root group: one subcommand required, interactive password flag."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        value_options = {
            opt
            for param in self.get_params(ctx)
            if isinstance(param, click.Option) and not (param.is_flag or param.count)
            for opt in param.opts
        }
        return super().parse_args(
            ctx, _terminate_bare_password(args, self.commands, value_options)
        )


@clickx.extra_group(
    name="neo4j-migrations",
    cls=MigrationsGroup,
    version=__version__,
    help=HELP,
    invoke_without_command=True,
    no_args_is_help=False,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
    epilog=EPILOG,
)
@click.option(
    "-a",
    "--address",
    required=True,
    default=Defaults.ADDRESS,
    callback=validate_address,
    envvar="NEOMIG_ADDRESS",
    show_default=True,
    show_envvar=True,
    help=(
        "The address this migration should connect to. "
        "The driver supports bolt and neo4j as schemes (with +s / +ssc)."
    ),
)
@click.option(
    "-u",
    "--username",
    required=True,
    default=Defaults.USER,
    envvar="NEOMIG_USERNAME",
    show_default=True,
    show_envvar=True,
    help="The login of the user connecting to the database.",
)
@click.option(
    "-p",
    "--password",
    prompt=True,
    prompt_required=False,
    hide_input=True,
    default=None,
    envvar="NEOMIG_PASSWORD",
    show_envvar=True,
    help=(
        "The password of the user connecting to the database. "
        "Required; prompted for when given without a value."
    ),
)
@click.option(
    "--package",
    "packages_to_scan",
    multiple=True,
    help="Package to scan for Python based migrations. Repeat for multiple packages.",
)
@click.option(
    "--location",
    "locations_to_scan",
    multiple=True,
    help="Location to scan for Cypher based migrations. Repeat for multiple locations.",
)
@click.option(
    "--transaction-mode",
    type=click.Choice([mode.value for mode in TransactionMode], case_sensitive=False),
    default=Defaults.TRANSACTION_MODE.value,
    show_default=True,
    help="The transaction mode to use.",
)
@click.option(
    "-d",
    "--database",
    default=None,
    help="The database that should be migrated (Neo4j 4.0+).",
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    default=0,
    help=(
        "Log the configuration and a couple of other things. Each repetition "
        "also raises the default WARNING console verbosity by one level."
    ),
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    default=0,
    help="Decrease the default WARNING console verbosity by one level per repetition.",
)
@click.option(
    "--validate-on-migrate/--no-validate-on-migrate",
    default=Defaults.VALIDATE_ON_MIGRATE,
    show_default=True,
    help=(
        "Validating helps you verify that the migrations applied to the database "
        "match the ones available locally."
    ),
)
@click.option(
    "--autocrlf/--no-autocrlf",
    default=Defaults.AUTOCRLF,
    show_default=True,
    help=(
        "Convert Windows line-endings (CRLF) to LF when reading script based "
        "migrations, pretty much what the same Git option does during checkin."
    ),
)
@click.option(
    "--with-max-connection-pool-size",
    "max_connection_pool_size",
    type=click.IntRange(min=1),
    default=Defaults.MAX_CONNECTION_POOL_SIZE,
    hidden=True,
    help="Configure the connection pool size, hardly ever needed to change.",
)
@click.option(
    "--debug/--no-debug",
    default=False,
    help="Enable debug mode (timestamps, logger names and source paths on the console).",
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Path(user_log_dir("neomig", appauthor=False)) / "latest.log",
    envvar="NEOMIG_LOG_PATH",
    show_default=True,
    show_envvar=True,
    help="Path of the flight recorder log file.",
)
@click.option(
    "--flight-recorder-capacity",
    type=click.IntRange(min=1),
    default=2000,
    hidden=True,
    envvar="NEOMIG_FLIGHT_RECORDER_CAPACITY",
    help="Capacity of the flight recorder (in number of log records).",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    default=True,
    show_envvar=True,
    help=(
        "Keep the last log records at DEBUG granularity in memory and write "
        "them to --log-path when a WARNING/ERROR occurs."
    ),
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    default=False,
    show_default=True,
    envvar="NEOMIG_FORCE_FLUSH_FLIGHT_RECORDER",
    help="Also write the flight recorder buffer to --log-path on clean exit.",
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    envvar="NEOMIG_LOGGER_LEVELS",
    show_envvar=True,
    help=(
        "Set the minimum LEVEL of specific loggers (NAME=LEVEL). Repeatable. "
        "The Neo4j driver logs errors only unless overridden, e.g. -L neo4j=DEBUG."
    ),
)
@click.option(
    "--redactor-mode",
    type=click.Choice([mode.value for mode in RedactorMode], case_sensitive=False),
    default=RedactorMode.LENIENT.value,
    show_default=True,
    show_envvar=True,
    help=(
        "'lenient' redacts passwords and tokens in addresses and messages; "
        "'strict' also redacts user names."
    ),
)
@clickx.pass_context
def neo4j_migrations(  # pylint: disable=too-many-arguments, too-many-locals
    ctx: click.Context,
    address: str,
    username: str,
    password: str | None,
    packages_to_scan: tuple[str, ...],
    locations_to_scan: tuple[str, ...],
    transaction_mode: str,
    database: str | None,
    verbose_count: int,
    quiet_count: int,
    validate_on_migrate: bool,
    autocrlf: bool,
    max_connection_pool_size: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
    redactor_mode: str,
) -> None:
    """Migrates Neo4j databases."""

    # 1) console + flight recorder
    log_settings = LoggingSettings(
        verbose_count=verbose_count,
        quiet_count=quiet_count,
        debug=debug,
        color=ctx.color is not False,
        log_path=log_path,
        flight_recorder=flight_recorder,
        flight_recorder_capacity=flight_recorder_capacity,
        force_flush=force_flush_flight_recorder,
        logger_levels=logger_levels,
    )
    handlers = configure_logging(log_settings)
    ctx.call_on_close(logging.shutdown)

    # 2) composition root, unless one was injected
    container = ctx.obj
    if not isinstance(container, AppContainer):
        container = bootstrap(redactor_mode=RedactorMode(redactor_mode.lower()))

    log_startup(
        logger,
        log_settings,
        handlers,
        app_version=__version__,
        redactor_mode=container.redactor.mode.value,
        runtime=container.runtime.name,
    )

    # 3) the root command performs no work of its own
    if ctx.invoked_subcommand is None:
        raise MissingSubcommandError(ctx)

    ctx.obj = CliState(
        container=container,
        options=RawOptions(
            address=address,
            username=username,
            password=bytearray(password, "utf-8") if password is not None else None,
            packages_to_scan=list(packages_to_scan),
            locations_to_scan=list(locations_to_scan),
            transaction_mode=TransactionMode(transaction_mode.upper()),
            database=database,
            verbose=verbose_count > 0,
            validate_on_migrate=validate_on_migrate,
            autocrlf=autocrlf,
            max_connection_pool_size=max_connection_pool_size,
        ),
    )


neo4j_migrations.add_command(info)
neo4j_migrations.add_command(migrate)


def main() -> None:
    """Console-script entry point; exits with the subcommand's status."""
    neo4j_migrations()  # pylint: disable=no-value-for-parameter
