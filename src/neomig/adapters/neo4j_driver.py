"""Connector backed by the official Neo4j Python driver.

Creates a ``neo4j.Driver`` with basic authentication and the configured pool
size and user agent. Creating the driver does not talk to the server; the
returned handle translates the driver's verification failures into neomig's
connection errors.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from neo4j import GraphDatabase, basic_auth
from neo4j.exceptions import (
    AuthError,
    ConfigurationError,
    DriverError,
    Neo4jError,
    ServiceUnavailable,
)

from neomig.errors import (
    AuthenticationFailedError,
    DatabaseConnectionError,
    ServiceUnavailableError,
)

if TYPE_CHECKING:
    from neo4j import Driver

    from neomig.interfaces.connection import Credentials, DriverSettings
    from neomig.interfaces.redactor import Redactor

DRIVER_LOGGER = "neo4j"  # pragma: no mutate

logger = logging.getLogger(__name__)


class Neo4jDriverHandle:
    """A ``neo4j.Driver`` plus error translation for verification."""

    def __init__(self, driver: Driver, display_address: str) -> None:
        self._driver = driver
        self._display_address = display_address
        self._closed = False

    @property
    def driver(self) -> Driver:
        """The wrapped driver, for migration engines."""
        return self._driver

    @property
    def closed(self) -> bool:
        """True once :meth:`close` has been called."""
        return self._closed

    def verify_connectivity(self) -> None:
        """Do one round trip to the server with the configured login.

        Raises:
            AuthenticationFailedError: If the server rejects the credentials.
            ServiceUnavailableError: If no server answers at the address.
            DatabaseConnectionError: For any other driver, protocol or OS
                error. The original exception is the ``__cause__``.
        """
        try:
            self._driver.verify_connectivity()
        except AuthError as e:
            raise AuthenticationFailedError(
                self._display_address, "the server rejected the credentials"
            ) from e
        except ServiceUnavailable as e:
            raise ServiceUnavailableError(
                self._display_address, "the server is not reachable"
            ) from e
        except (Neo4jError, DriverError, OSError) as e:
            raise DatabaseConnectionError(self._display_address, str(e)) from e

    def close(self) -> None:
        """Close the driver and its pool. Calling it again does nothing."""
        if self._closed:
            return
        self._closed = True
        self._driver.close()
        logger.debug("Driver for %s closed", self._display_address)

    def __enter__(self) -> Neo4jDriverHandle:
        return self

    def __exit__(self, *args) -> None:
        self.close()


class Neo4jConnector:  # pylint: disable=too-few-public-methods
    """:class:`~neomig.interfaces.connection.Connector` for the Neo4j driver."""

    def __init__(self, redactor: Redactor) -> None:
        self._redactor = redactor

    def __call__(
        self, address: str, credentials: Credentials, settings: DriverSettings
    ) -> Neo4jDriverHandle:
        """Create a driver for ``address`` without contacting the server.

        Args:
            address: Database address; user info in it is rejected by the
                driver.
            credentials: Login used for basic authentication.
            settings: Pool size, user agent and driver log level.

        Returns:
            Neo4jDriverHandle: The unverified driver.

        Raises:
            DatabaseConnectionError: If the driver refuses the address or
                the settings.
        """
        _apply_driver_log_level(settings.log_level)
        display_address = self._redactor.sanitize_db_url(address)
        try:
            driver = GraphDatabase.driver(
                address,
                auth=basic_auth(credentials.username, credentials.reveal()),
                max_connection_pool_size=settings.max_connection_pool_size,
                user_agent=settings.user_agent,
            )
        except (ConfigurationError, ValueError) as e:
            raise DatabaseConnectionError(display_address, str(e)) from e
        logger.debug(
            "Driver for %s created (pool size %s, user agent %r)",
            display_address,
            settings.max_connection_pool_size,
            settings.user_agent,
        )
        return Neo4jDriverHandle(driver, display_address)


def _apply_driver_log_level(level: int) -> None:
    """Quiet the driver's loggers unless the user configured them explicitly."""
    driver_logger = logging.getLogger(DRIVER_LOGGER)
    if driver_logger.level == logging.NOTSET:
        driver_logger.setLevel(level)
