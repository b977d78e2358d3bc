"""Error definitions shared by the configuration, runtime and connection layers.

CLI usage errors (unknown options, missing subcommand) live in
:mod:`neomig.entrypoints.cli.errors`; everything here is raised outside of
argument parsing and is terminal for the current invocation.
"""


class NeomigError(Exception):
    """Base class for neomig errors."""


class UnsupportedConfigError(NeomigError):
    """Raised when a configuration needs a capability the current runtime lacks."""


class DatabaseConnectionError(NeomigError):
    """Raised when a driver cannot be created or fails connectivity verification.

    Any driver that was created has already been closed when this is raised.
    The underlying driver exception is available as ``__cause__``.
    """

    def __init__(self, address: str, reason: str) -> None:
        super().__init__(f"Could not connect to {address}: {reason}")
        self.address = address
        self.reason = reason


class AuthenticationFailedError(DatabaseConnectionError):
    """Raised when the server rejects the supplied credentials."""


class ServiceUnavailableError(DatabaseConnectionError):
    """Raised when the server cannot be reached or refuses the protocol."""


class EngineNotAvailableError(NeomigError):
    """Raised when no migration engine is installed."""
