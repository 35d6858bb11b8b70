"""
Claims - protected rectangular regions with an owner and trust lists.

The allow_* checks follow one convention: None means allowed, otherwise
the returned string is the denial message shown to the player.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from host.entity import OfflinePlayer
from host.world import Location, Material


class SiegeData(BaseModel):
    """An ongoing siege of a claim."""
    attacker: Optional[UUID] = None
    defender: Optional[UUID] = None


class Claim(BaseModel):
    """
    A protected region.

    Attributes:
        id: Data store identifier (assigned on add)
        owner_id: Owning player, None for administrative claims
        world: World name
        lesser_x, lesser_z, greater_x, greater_z: Inclusive corners
        min_y: Lowest protected y; None protects the full height
        builders: May build, break, open containers and enter
        containers: May open containers and enter
        accessors: May use doors, buttons and the like
        public_materials: Materials anyone may build or break
        subdivisions: Nested claims, inheriting this claim's trust
        siege_data: Active siege, if any
    """

    model_config = ConfigDict(validate_assignment=True)

    id: Optional[int] = None
    owner_id: Optional[UUID] = None
    owner_name: str = "an administrator"
    world: str
    lesser_x: int
    lesser_z: int
    greater_x: int
    greater_z: int
    min_y: Optional[int] = None

    builders: set[UUID] = Field(default_factory=set)
    containers: set[UUID] = Field(default_factory=set)
    accessors: set[UUID] = Field(default_factory=set)
    public_materials: set[Material] = Field(default_factory=set)

    subdivisions: list[Claim] = Field(default_factory=list)
    siege_data: Optional[SiegeData] = None

    _parent: Optional[Claim] = PrivateAttr(default=None)

    def model_post_init(self, __context) -> None:
        if self.lesser_x > self.greater_x:
            self.lesser_x, self.greater_x = self.greater_x, self.lesser_x
        if self.lesser_z > self.greater_z:
            self.lesser_z, self.greater_z = self.greater_z, self.lesser_z
        for child in self.subdivisions:
            child._parent = self

    @property
    def effective_owner(self) -> Optional[UUID]:
        """Subdivisions are owned by their top-level claim's owner."""
        if self._parent is not None:
            return self._parent.effective_owner
        return self.owner_id

    def add_subdivision(self, child: Claim) -> Claim:
        child._parent = self
        self.subdivisions.append(child)
        return child

    def contains(
        self,
        location: Location,
        ignore_height: bool = True,
        exclude_subdivisions: bool = False,
    ) -> bool:
        """Check whether a location lies inside this claim."""
        if location.world is None or location.world.name != self.world:
            return False

        x, y, z = location.block_x, location.block_y, location.block_z
        if not (self.lesser_x <= x <= self.greater_x and self.lesser_z <= z <= self.greater_z):
            return False
        if not ignore_height and self.min_y is not None and y < self.min_y:
            return False

        if exclude_subdivisions:
            return not any(c.contains(location, ignore_height) for c in self.subdivisions)
        return True

    # Trust

    def _trusted(self, player: OfflinePlayer, *levels: str) -> bool:
        uid = player.unique_id
        if uid == self.effective_owner:
            return True
        for level in levels:
            if uid in getattr(self, level):
                return True
        if self._parent is not None:
            return self._parent._trusted(player, *levels)
        return False

    def _denial(self, what: str) -> str:
        owner = self._parent.owner_name if self._parent is not None else self.owner_name
        return f"You don't have {owner}'s permission to {what} here."

    def allow_access(self, player: OfflinePlayer) -> Optional[str]:
        if self._trusted(player, "builders", "containers", "accessors"):
            return None
        return self._denial("use that")

    def allow_containers(self, player: OfflinePlayer) -> Optional[str]:
        if self._trusted(player, "builders", "containers"):
            return None
        return self._denial("open containers")

    def allow_build(self, player: OfflinePlayer, material: Material) -> Optional[str]:
        if material in self.public_materials:
            return None
        if self._trusted(player, "builders"):
            return None
        return self._denial("build")

    def allow_break(self, player: OfflinePlayer, material: Material) -> Optional[str]:
        if self.siege_data is not None and self.siege_data.attacker == player.unique_id:
            return "You can't break blocks while besieging this claim."
        return self.allow_build(player, material)
