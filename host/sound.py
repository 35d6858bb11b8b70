"""Sound effect tags."""

from enum import Enum, auto


class Sound(Enum):
    """Sound effects known to the host."""
    BLOCK_CHEST_OPEN = auto()
    BLOCK_CHEST_CLOSE = auto()
    BLOCK_NOTE_BLOCK_PLING = auto()
    ENTITY_EXPERIENCE_ORB_PICKUP = auto()
    ENTITY_PLAYER_LEVELUP = auto()
    ENTITY_VILLAGER_NO = auto()
    ENTITY_VILLAGER_YES = auto()
    UI_BUTTON_CLICK = auto()
