"""Core services: state store, activator, hotkey router, command dispatcher."""

from tabkeys.core.activator import StateActivator
from tabkeys.core.dispatcher import CommandDispatcher
from tabkeys.core.hotkey_router import HotkeyRouter
from tabkeys.core.state_store import StateStore

__all__ = [
    "CommandDispatcher",
    "HotkeyRouter",
    "StateActivator",
    "StateStore",
]
