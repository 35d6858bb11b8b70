"""
Plugin core library.

Typed config files and pluggable protection checks for server plugins.

Quick Start:
    from corelib import Config, ProtectionManager, ProtectableAction

    config = Config.for_plugin(plugin)
    config.set_default_value("messages.prefix", "&7[Demo]")
    config.save()

    protection = ProtectionManager.with_default_modules(plugin)
    protection.activate_first_available()
    protection.has_permission(player, location, ProtectableAction.BREAK_BLOCK)
"""

__version__ = "0.1.0"

from corelib.core import EventBus, Event, ConfigEvent, ProtectionEvent
from corelib.config import Config, Document, Codec, CodecRegistry, default_registry
from corelib.protection import ProtectableAction, ProtectionModule, ProtectionManager
from corelib.errors import (
    CoreLibError,
    ConfigError,
    MissingValueError,
    DanglingReferenceError,
    ProtectionError,
    ModuleNotLoadedError,
)

__all__ = [
    # Events
    "EventBus",
    "Event",
    "ConfigEvent",
    "ProtectionEvent",
    # Config
    "Config",
    "Document",
    "Codec",
    "CodecRegistry",
    "default_registry",
    # Protection
    "ProtectableAction",
    "ProtectionModule",
    "ProtectionManager",
    # Errors
    "CoreLibError",
    "ConfigError",
    "MissingValueError",
    "DanglingReferenceError",
    "ProtectionError",
    "ModuleNotLoadedError",
]
