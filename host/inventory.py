"""
Inventory models - item stacks and fixed-size slot containers.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from host.world import Material


ROW_SIZE = 9
MAX_INVENTORY_SIZE = 54


class ItemStack(BaseModel):
    """
    A stack of items.

    Attributes:
        type: Item material
        amount: Number of items in stack
        display_name: Custom name, if any
        lore: Custom description lines
    """

    model_config = ConfigDict(validate_assignment=True)

    type: Material
    amount: int = Field(default=1, ge=1)
    display_name: Optional[str] = None
    lore: list[str] = Field(default_factory=list)


class Inventory(BaseModel):
    """
    Fixed-size slot container.

    Attributes:
        size: Number of slots, whole rows of 9 up to 54
        title: Display title
        slots: Item stacks (None = empty slot)
    """

    model_config = ConfigDict(validate_assignment=True)

    size: int
    title: str = ""
    slots: list[Optional[ItemStack]] = Field(default_factory=list)

    @field_validator("size")
    @classmethod
    def _whole_rows(cls, value: int) -> int:
        if value <= 0 or value % ROW_SIZE != 0 or value > MAX_INVENTORY_SIZE:
            raise ValueError(f"Inventory size must be a multiple of 9 between 9 and 54, got {value}")
        return value

    def model_post_init(self, __context) -> None:
        """Pad or truncate slots to the declared size."""
        if len(self.slots) != self.size:
            slots = list(self.slots[:self.size])
            slots.extend([None] * (self.size - len(slots)))
            self.slots = slots

    def get_item(self, index: int) -> Optional[ItemStack]:
        return self.slots[index]

    def set_item(self, index: int, item: Optional[ItemStack]) -> None:
        if not 0 <= index < self.size:
            raise IndexError(f"Slot {index} out of range for inventory of size {self.size}")
        self.slots[index] = item
