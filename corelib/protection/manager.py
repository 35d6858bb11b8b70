"""
Protection manager - registry of protection backends, one active at a time.

Backends are registered as factories and only constructed and loaded on
activation, so a backend whose external system is missing is never
selected.

Usage:
    manager = ProtectionManager.with_default_modules(plugin)
    manager.activate_first_available()

    if manager.has_permission(player, player.location, ProtectableAction.BREAK_BLOCK):
        ...
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from corelib.core.events import EventBus, ProtectionEvent
from corelib.protection.action import ProtectableAction
from corelib.protection.module import ProtectionModule
from host.entity import OfflinePlayer
from host.plugin import Plugin
from host.world import Location


ModuleFactory = Callable[[Plugin], ProtectionModule]


class ProtectionManager:
    """
    Holds zero or one active protection module.

    With no active module every action is permitted.
    """

    def __init__(self, plugin: Plugin, event_bus: Optional[EventBus] = None):
        self.plugin = plugin
        self.event_bus = event_bus
        self._factories: dict[str, ModuleFactory] = {}
        self._active: Optional[ProtectionModule] = None
        self.logger = logging.getLogger(__name__)

    @classmethod
    def with_default_modules(cls, plugin: Plugin, event_bus: Optional[EventBus] = None) -> ProtectionManager:
        """Create a manager with the built-in backends registered."""
        from corelib.protection.modules import DEFAULT_MODULES

        manager = cls(plugin, event_bus)
        for identifier, factory in DEFAULT_MODULES.items():
            manager.register(identifier, factory)
        return manager

    def register(self, identifier: str, factory: ModuleFactory) -> None:
        """
        Register a backend.

        Raises:
            ValueError: If the identifier is already taken
        """
        if identifier in self._factories:
            raise ValueError(f"Protection module {identifier} already registered")
        self._factories[identifier] = factory

        if self.event_bus:
            self.event_bus.publish(ProtectionEvent.MODULE_REGISTERED, identifier=identifier)

    def unregister(self, identifier: str) -> None:
        self._factories.pop(identifier, None)

    @property
    def registered(self) -> list[str]:
        return list(self._factories)

    @property
    def active(self) -> Optional[ProtectionModule]:
        return self._active

    def activate(self, identifier: str) -> bool:
        """
        Construct and load a registered backend and make it active.

        On failure the error is logged and no backend is active.

        Returns:
            True if the backend loaded
        """
        factory = self._factories.get(identifier)
        if factory is None:
            raise KeyError(f"Unknown protection module: {identifier}")

        self._active = None
        try:
            module = factory(self.plugin)
            module.load()
        except Exception as e:
            self.logger.error(f"Failed to load protection module {identifier}: {e}", exc_info=True)
            if self.event_bus:
                self.event_bus.publish(ProtectionEvent.MODULE_FAILED, identifier=identifier, error=str(e))
            return False

        self._active = module
        self.logger.info(f"Loaded protection module {identifier}")
        if self.event_bus:
            self.event_bus.publish(ProtectionEvent.MODULE_LOADED, identifier=identifier, module=module)
        return True

    def activate_first_available(self) -> Optional[str]:
        """
        Activate the first registered backend that loads.

        Returns:
            Identifier of the active backend, or None
        """
        for identifier in self._factories:
            if self.activate(identifier):
                return identifier
        return None

    def has_permission(
        self,
        actor: OfflinePlayer,
        location: Location,
        action: ProtectableAction,
    ) -> bool:
        if self._active is None:
            return True
        return self._active.has_permission(actor, location, action)
