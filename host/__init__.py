"""
Host runtime objects.

Provides:
- World, Block, Chunk, Location, Material: the game world
- ItemStack, Inventory: item containers
- OfflinePlayer, Player: actors
- Sound: sound effect tags
- Server: world lookup and inventory construction
- Plugin: plugin identity and data folder
"""

from host.world import World, Block, Chunk, Location, Material
from host.inventory import ItemStack, Inventory
from host.entity import OfflinePlayer, Player
from host.sound import Sound
from host.server import Server, translate_color_codes
from host.plugin import Plugin

__all__ = [
    "World",
    "Block",
    "Chunk",
    "Location",
    "Material",
    "ItemStack",
    "Inventory",
    "OfflinePlayer",
    "Player",
    "Sound",
    "Server",
    "translate_color_codes",
    "Plugin",
]
