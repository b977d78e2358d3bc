"""Usage errors raised while dispatching the command line.

Both map to exit status 2 and print the usage line, as every Click usage error
does. Errors raised after parsing (configuration, runtime, connection) are in
:mod:`neomig.errors` and map to exit status 1.
"""

import click

# Unknown options, malformed values and missing required values all surface as
# Click usage errors (NoSuchOption, BadParameter, MissingParameter, ...).
ParseError = click.UsageError

MISSING_SUBCOMMAND_MSG = "Missing required subcommand"  # pragma: no mutate


class MissingSubcommandError(click.UsageError):
    """Raised when the root command is invoked without a subcommand."""

    def __init__(self, ctx: click.Context | None = None) -> None:
        super().__init__(MISSING_SUBCOMMAND_MSG, ctx)
