"""Connection manager: scoped acquisition of a verified driver.

``ConnectionManager.open`` creates a driver through the injected connector,
verifies it with exactly one round trip and hands it to the caller only if
verification succeeded. Every other exit path closes the driver before the
error propagates, so callers never see an unverified or leaked driver.

No retries happen here; a retry policy belongs to the caller.
"""

from __future__ import annotations

import logging
from contextlib import ExitStack
from typing import TYPE_CHECKING

from neomig.config import Defaults
from neomig.errors import DatabaseConnectionError
from neomig.interfaces.connection import DriverSettings

if TYPE_CHECKING:
    from neomig.interfaces.connection import Connector, Credentials, DriverHandle
    from neomig.interfaces.redactor import Redactor

logger = logging.getLogger(__name__)


class ConnectionManager:  # pylint: disable=too-few-public-methods
    """Opens verified connections through a :class:`Connector`."""

    def __init__(
        self,
        connector: Connector,
        redactor: Redactor,
        *,
        user_agent: str = Defaults.USER_AGENT,
        log_level: int = logging.ERROR,
    ) -> None:
        self._connector = connector
        self._redactor = redactor
        self._user_agent = user_agent
        self._log_level = log_level

    def open(
        self, address: str, credentials: Credentials, pool_size: int
    ) -> DriverHandle:
        """Create and verify a driver for ``address``.

        Args:
            address: Database address, e.g. ``bolt://localhost:7687``.
            credentials: Login; cleared before this method returns.
            pool_size: Maximum connection pool size (>= 1).

        Returns:
            DriverHandle: A verified driver. The caller owns it and must
            close it exactly once.

        Raises:
            ValueError: If ``pool_size`` is smaller than one.
            DatabaseConnectionError: If the connector rejects the address or
                verification fails; in the latter case the driver has been
                closed already.
        """
        settings = DriverSettings(
            max_connection_pool_size=pool_size,
            user_agent=self._user_agent,
            log_level=self._log_level,
        )
        display_address = self._redactor.sanitize_db_url(address)
        try:
            driver = self._connector(address, credentials, settings)
        except ValueError as e:
            raise DatabaseConnectionError(display_address, str(e)) from e
        finally:
            credentials.clear()

        with ExitStack() as stack:
            stack.callback(driver.close)
            logger.debug("Verifying connectivity to %s", display_address)
            try:
                driver.verify_connectivity()
            except DatabaseConnectionError:
                raise
            except Exception as e:
                raise DatabaseConnectionError(display_address, str(e)) from e
            stack.pop_all()

        logger.info("Connected to %s", display_address)
        return driver
