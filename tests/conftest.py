"""Shared pytest fixtures for tabkeys tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tabkeys.core.activator import StateActivator
from tabkeys.core.dispatcher import CommandDispatcher
from tabkeys.core.hotkey_router import HotkeyRouter
from tabkeys.core.models.config import HardwareConfig, ProfileConfig, TabkeysConfig
from tabkeys.core.state_store import StateStore
from tabkeys.hardware.mock.mock_factory import MockHardwareFactory
from tests.helpers.profile_scaffold import INVOCATION


@pytest.fixture
def profiles_dir(tmp_path: Path) -> Path:
    """Empty, canonical profile root."""
    d = tmp_path / "profiles"
    d.mkdir()
    return d.resolve()


@pytest.fixture
def config(profiles_dir: Path) -> TabkeysConfig:
    """Config pointing at *profiles_dir* with the mock backend (no file I/O)."""
    return TabkeysConfig(
        profiles=ProfileConfig(profiles_dir=str(profiles_dir)),
        hardware=HardwareConfig(backend="mock"),
    )


@pytest.fixture
def factory() -> MockHardwareFactory:
    return MockHardwareFactory()


@pytest.fixture
def store(profiles_dir: Path) -> StateStore:
    return StateStore(profiles_dir)


@pytest.fixture
def activator(
    store: StateStore, factory: MockHardwareFactory, config: TabkeysConfig
) -> StateActivator:
    return StateActivator(store, factory, config.hardware, INVOCATION)


@pytest.fixture
def router(
    store: StateStore, activator: StateActivator, factory: MockHardwareFactory
) -> HotkeyRouter:
    return HotkeyRouter(store, activator, factory.injector, INVOCATION)


@pytest.fixture
def dispatcher(config: TabkeysConfig, factory: MockHardwareFactory) -> CommandDispatcher:
    return CommandDispatcher(config, factory, invocation=INVOCATION)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep the developer's TABKEYS_* variables out of every test."""
    for key in (
        "TABKEYS_CONFIG_FILE",
        "TABKEYS_PROFILES_DIR",
        "TABKEYS_HARDWARE_BACKEND",
        "TABKEYS_LOG_LEVEL",
        "TABKEYS_LOG_DIR",
        "TABKEYS_DEBUG",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def restore_root_logger():
    """Undo setup_logging() so later tests keep pytest's capture handlers."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for h in root.handlers[:]:
        root.removeHandler(h)
        if h not in handlers:
            h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
