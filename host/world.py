"""
World model - regions, blocks, chunks and locations.

Worlds are looked up by name through the Server; everything stored in a
config refers to a world by that name only.
"""

from __future__ import annotations

import math
from enum import Enum, auto
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr


CHUNK_SHIFT = 4


class Material(Enum):
    """Block and item materials."""
    AIR = auto()
    STONE = auto()
    DIRT = auto()
    GRASS_BLOCK = auto()
    SAND = auto()
    OAK_LOG = auto()
    OAK_PLANKS = auto()
    COBBLESTONE = auto()
    CHEST = auto()
    FURNACE = auto()
    CRAFTING_TABLE = auto()
    WHEAT = auto()
    TORCH = auto()
    DIAMOND = auto()
    DIAMOND_SWORD = auto()
    IRON_INGOT = auto()
    APPLE = auto()


class World(BaseModel):
    """
    A named region holding blocks.

    Blocks that were never set are AIR.
    """

    model_config = ConfigDict(validate_assignment=True)

    name: str
    uid: UUID = Field(default_factory=uuid4)
    min_height: int = -64
    max_height: int = 320

    _blocks: dict[tuple[int, int, int], Material] = PrivateAttr(default_factory=dict)

    def get_block_at(self, x: int, y: int, z: int) -> Block:
        return Block(world=self, x=x, y=y, z=z)

    def get_type_at(self, x: int, y: int, z: int) -> Material:
        return self._blocks.get((x, y, z), Material.AIR)

    def set_type_at(self, x: int, y: int, z: int, material: Material) -> None:
        if material is Material.AIR:
            self._blocks.pop((x, y, z), None)
        else:
            self._blocks[(x, y, z)] = material

    def get_chunk_at(self, x: int, z: int) -> Chunk:
        """Get the chunk with chunk coordinates (x, z)."""
        return Chunk(world=self, x=x, z=z)

    def __hash__(self) -> int:
        return hash(self.uid)


class Block(BaseModel):
    """A single block position in a world."""

    world: World
    x: int
    y: int
    z: int

    @property
    def type(self) -> Material:
        return self.world.get_type_at(self.x, self.y, self.z)

    def set_type(self, material: Material) -> None:
        self.world.set_type_at(self.x, self.y, self.z, material)


class Chunk(BaseModel):
    """A 16x16 column of blocks, addressed by chunk coordinates."""

    model_config = ConfigDict(frozen=True)

    world: World
    x: int
    z: int


class Location(BaseModel):
    """
    A position with orientation.

    Attributes:
        world: Owning world (None for a detached location)
        x, y, z: Coordinates
        yaw: Horizontal rotation in degrees
        pitch: Vertical rotation in degrees
    """

    model_config = ConfigDict(validate_assignment=True)

    world: World | None = None
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    yaw: float = 0.0
    pitch: float = 0.0

    @property
    def block_x(self) -> int:
        return math.floor(self.x)

    @property
    def block_y(self) -> int:
        return math.floor(self.y)

    @property
    def block_z(self) -> int:
        return math.floor(self.z)

    def get_block(self) -> Block:
        if self.world is None:
            raise ValueError("Location has no world")
        return self.world.get_block_at(self.block_x, self.block_y, self.block_z)

    def get_chunk(self) -> Chunk:
        if self.world is None:
            raise ValueError("Location has no world")
        return self.world.get_chunk_at(
            self.block_x >> CHUNK_SHIFT,
            self.block_z >> CHUNK_SHIFT,
        )
