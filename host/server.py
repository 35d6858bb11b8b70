"""
Host runtime - world lookup and container construction.
"""

from __future__ import annotations

import re

from host.inventory import Inventory
from host.world import World


COLOR_CHAR = "§"
_COLOR_CODES = "0123456789AaBbCcDdEeFfKkLlMmNnOoRrXx"


def translate_color_codes(alt_char: str, text: str) -> str:
    """
    Replace ``alt_char`` colour codes (e.g. ``&a``) with section-sign codes.

    Only a code character directly following ``alt_char`` is translated.
    """
    pattern = re.escape(alt_char) + "([" + _COLOR_CODES + "])"
    return re.sub(pattern, lambda m: COLOR_CHAR + m.group(1).lower(), text)


class Server:
    """
    Registry of loaded worlds.

    Usage:
        server = Server()
        server.add_world(World(name="world"))
        server.get_world("world")
    """

    def __init__(self, worlds: list[World] | None = None):
        self._worlds: dict[str, World] = {}
        for world in worlds or []:
            self.add_world(world)

    def add_world(self, world: World) -> World:
        if world.name in self._worlds:
            raise ValueError(f"World {world.name} already loaded")
        self._worlds[world.name] = world
        return world

    def unload_world(self, name: str) -> World | None:
        return self._worlds.pop(name, None)

    def get_world(self, name: str | None) -> World | None:
        """Get world by name, or None if no such world is loaded."""
        if name is None:
            return None
        return self._worlds.get(name)

    def create_inventory(self, size: int, title: str = "") -> Inventory:
        """
        Create an empty slot container.

        Raises:
            ValueError: If size is not a positive multiple of 9 up to 54
        """
        return Inventory(size=size, title=title)
