"""
Protection module interface.

A protection module wraps one external authorization system and answers
a single question: may this actor perform this action at this location?

Usage:
    class MyModule(ProtectionModule):
        def load(self) -> None:
            self._regions = RegionPlugin.instance.regions
            self._loaded = True

        def has_permission(self, actor, location, action) -> bool:
            self.check_loaded()
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from corelib.errors import ModuleNotLoadedError
from corelib.protection.action import ProtectableAction
from host.entity import OfflinePlayer
from host.plugin import Plugin
from host.world import Location


class ProtectionModule(ABC):
    """
    Base class for protection backends.

    load() must succeed once before has_permission() is queried.
    """

    def __init__(self, plugin: Plugin):
        self._plugin = plugin
        self._loaded = False

    @property
    def plugin(self) -> Plugin:
        """The plugin this module is bound to."""
        return self._plugin

    def get_plugin(self) -> Plugin:
        return self._plugin

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def check_loaded(self) -> None:
        """
        Raises:
            ModuleNotLoadedError: If load() has not succeeded yet
        """
        if not self._loaded:
            raise ModuleNotLoadedError(f"{self.name} was queried before load()")

    @abstractmethod
    def load(self) -> None:
        """
        Bind to the external system's live data.

        Raises:
            ProtectionError: If the external system is not available
        """

    @abstractmethod
    def has_permission(
        self,
        actor: OfflinePlayer,
        location: Location,
        action: ProtectableAction,
    ) -> bool:
        """
        Check whether actor may perform action at location.

        Raises:
            ModuleNotLoadedError: If load() has not succeeded yet
        """
