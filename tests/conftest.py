"""Global pytest fixtures for neomig."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from neomig.bootstrap import bootstrap
from neomig.runtime import RuntimeEnvironment
from tests.helpers.fakes import FakeConnector, FakeEngineFactory

if TYPE_CHECKING:
    from neomig.bootstrap import AppContainer

# pylint: disable=redefined-outer-name, unused-argument

TESTS_ROOT = Path(__file__).parent.resolve()
SUITE_MARKERS = ("unit", "functional")


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Mark every test with the suite (top-level directory) it lives in."""
    for item in items:
        suite = item.path.resolve().relative_to(TESTS_ROOT).parts[0]
        if suite in SUITE_MARKERS and not any(item.iter_markers(name=suite)):
            item.add_marker(getattr(pytest.mark, suite))


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep the flight recorder and env-provided options out of the user's setup."""
    monkeypatch.setenv("NEOMIG_LOG_PATH", str(tmp_path / "latest.log"))
    for name in (
        "NEOMIG_ADDRESS",
        "NEOMIG_USERNAME",
        "NEOMIG_PASSWORD",
        "NEOMIG_LOGGER_LEVELS",
        "NEOMIG_RESTRICTED_RUNTIME",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def connector() -> FakeConnector:
    """Connector whose drivers verify successfully."""
    return FakeConnector()


@pytest.fixture
def engine_factory() -> FakeEngineFactory:
    """Engine factory with default canned answers."""
    return FakeEngineFactory()


@pytest.fixture
def container(
    connector: FakeConnector, engine_factory: FakeEngineFactory
) -> AppContainer:
    """Application container for an unrestricted runtime."""
    return bootstrap(
        connector=connector,
        engine_factory=engine_factory,
        runtime=RuntimeEnvironment(restricted=False),
    )


@pytest.fixture
def restricted_container(
    connector: FakeConnector, engine_factory: FakeEngineFactory
) -> AppContainer:
    """Application container pretending to run as a compiled binary."""
    return bootstrap(
        connector=connector,
        engine_factory=engine_factory,
        runtime=RuntimeEnvironment(restricted=True),
    )
