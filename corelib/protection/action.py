"""Actions a protection module can be asked about."""

from enum import Enum, auto


class ProtectableAction(Enum):
    """Things an actor may try to do at a location."""
    PLACE_BLOCK = auto()
    BREAK_BLOCK = auto()
    ACCESS_INVENTORIES = auto()
    INTERACT_BLOCK = auto()
    INTERACT_ENTITY = auto()
    ATTACK_PLAYER = auto()
    ATTACK_ENTITY = auto()
