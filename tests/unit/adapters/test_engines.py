"""Unit tests for migration engine discovery via entry points."""

from __future__ import annotations

import logging
import types

import pytest

from neomig.adapters import engines
from neomig.adapters.engines import (
    ENGINE_GROUP,
    NO_ENGINE_MSG,
    entry_point_engine_factory,
    load_engine_factory,
)
from neomig.config import Configuration
from neomig.errors import EngineNotAvailableError
from tests.helpers.fakes import FakeDriver, FakeEngine, FakeEngineFactory

# pylint: disable=magic-value-comparison


def _entry_point(name: str, target):
    return types.SimpleNamespace(
        name=name, value=f"{name}_engine:create", load=lambda: target
    )


def _install(monkeypatch: pytest.MonkeyPatch, *installed) -> list[str]:
    """Make ``entry_points`` return ``installed`` and record requested groups."""
    groups: list[str] = []

    def fake_entry_points(*, group: str):
        groups.append(group)
        return list(installed)

    monkeypatch.setattr(engines, "entry_points", fake_entry_points)
    return groups


def test_no_engine_installed(monkeypatch: pytest.MonkeyPatch):
    """A clear error names the entry-point group to register under."""
    _install(monkeypatch)

    with pytest.raises(EngineNotAvailableError) as exc_info:
        load_engine_factory()

    assert str(exc_info.value) == NO_ENGINE_MSG
    assert ENGINE_GROUP in str(exc_info.value)


def test_single_engine_is_loaded(monkeypatch: pytest.MonkeyPatch):
    """The only registered factory is returned, looked up in the engine group."""
    factory = FakeEngineFactory()
    groups = _install(monkeypatch, _entry_point("default", factory))

    assert load_engine_factory() is factory
    assert groups == [ENGINE_GROUP]


def test_several_engines_pick_first_by_name(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
):
    """With several engines the alphabetically first wins and a warning is logged."""
    first, second = FakeEngineFactory(), FakeEngineFactory()
    _install(monkeypatch, _entry_point("zeta", second), _entry_point("alpha", first))

    with caplog.at_level(logging.WARNING, logger=engines.logger.name):
        assert load_engine_factory() is first

    assert "alpha, zeta" in caplog.text


def test_entry_point_factory_builds_engine(monkeypatch: pytest.MonkeyPatch):
    """The lazy factory passes configuration and driver to the loaded factory."""
    factory = FakeEngineFactory()
    _install(monkeypatch, _entry_point("default", factory))
    config = Configuration(address="bolt://localhost:7687")
    driver = FakeDriver()

    engine = entry_point_engine_factory(config, driver)

    assert isinstance(engine, FakeEngine)
    assert engine.config is config
    assert engine.driver is driver
