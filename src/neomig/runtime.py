"""Runtime-mode detection and the configuration guard built on it.

A *restricted* runtime is a frozen or ahead-of-time compiled build of neomig
(PyInstaller, cx_Freeze, Nuitka, ...). Such builds can only import modules that
were bundled at build time, so discovering migrations from arbitrary Python
packages is not possible there. Script locations are read as plain files and
keep working.

The runtime is detected once at startup and injected, so the guard can be
exercised with both states.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING

from neomig.errors import UnsupportedConfigError

if TYPE_CHECKING:
    from neomig.config import Configuration

RESTRICTED_RUNTIME_ENV = "NEOMIG_RESTRICTED_RUNTIME"  # pragma: no mutate
TRUTHY = {"1", "true", "yes", "on"}

PACKAGES_UNSUPPORTED_MSG = (
    "Python based migrations (--package) are not supported in compiled binaries. "
    "Please use the Python distribution of neo4j-migrations."
)


@dataclass(frozen=True, slots=True)
class RuntimeEnvironment:
    """Read-only description of the process runtime."""

    restricted: bool = False

    @property
    def name(self) -> str:
        """Human readable name of the runtime mode."""
        return "restricted" if self.restricted else "standard"


def detect_runtime() -> RuntimeEnvironment:
    """Detect whether the process runs as a frozen/compiled binary.

    ``NEOMIG_RESTRICTED_RUNTIME`` set to a truthy value forces restricted mode.
    """
    forced = os.environ.get(RESTRICTED_RUNTIME_ENV, "").strip().lower()
    if forced in TRUTHY:
        return RuntimeEnvironment(restricted=True)
    frozen = bool(getattr(sys, "frozen", False))
    compiled = "__compiled__" in globals()  # set by Nuitka on compiled modules
    return RuntimeEnvironment(restricted=frozen or compiled)


def validate_runtime(
    config: Configuration, environment: RuntimeEnvironment
) -> Configuration:
    """Reject configurations that need capabilities the runtime does not have.

    Args:
        config: The configuration to check.
        environment: The runtime the process executes in.

    Returns:
        Configuration: ``config`` unchanged when it is supported.

    Raises:
        UnsupportedConfigError: If packages are to be scanned in a restricted
            runtime.
    """
    if environment.restricted and config.packages_to_scan:
        raise UnsupportedConfigError(PACKAGES_UNSUPPORTED_MSG)
    return config
