"""
Actors - players that may or may not be online.
"""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict

from host.world import Location


class OfflinePlayer(BaseModel):
    """
    A known player identity.

    Not every OfflinePlayer is interactive; only Player instances are.
    """

    model_config = ConfigDict(frozen=True)

    unique_id: UUID
    name: str = ""


class Player(OfflinePlayer):
    """An online, interactive player."""

    model_config = ConfigDict(frozen=False, validate_assignment=True)

    location: Location | None = None
