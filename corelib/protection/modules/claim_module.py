"""
Claim-based protection backend.

Binds to the running claims plugin's data store and checks actions
against the claim covering the location.
"""

from __future__ import annotations

from typing import Optional

from claims import ClaimsPlugin, DataStore
from corelib.errors import ProtectionError
from corelib.protection.action import ProtectableAction
from corelib.protection.module import ProtectionModule
from host.entity import OfflinePlayer, Player
from host.plugin import Plugin
from host.world import Location


class ClaimProtectionModule(ProtectionModule):
    """
    Decision order:
    1. No claim at the location: allowed
    2. Actor owns the claim: allowed
    3. Actor is not an online player: denied
    4. Otherwise the claim's own check for the action decides
    """

    def __init__(self, plugin: Plugin):
        super().__init__(plugin)
        self._data_store: Optional[DataStore] = None

    def load(self) -> None:
        instance = ClaimsPlugin.instance
        if instance is None:
            raise ProtectionError("Claims plugin is not enabled")

        self._data_store = instance.data_store
        self._loaded = True

    def has_permission(
        self,
        actor: OfflinePlayer,
        location: Location,
        action: ProtectableAction,
    ) -> bool:
        self.check_loaded()

        claim = self._data_store.get_claim_at(location, True, None)

        if claim is None:
            return True
        if actor.unique_id == claim.effective_owner:
            return True
        if not isinstance(actor, Player):
            return False

        if action is ProtectableAction.INTERACT_BLOCK:
            return claim.allow_containers(actor) is None
        if action is ProtectableAction.ATTACK_PLAYER:
            return claim.siege_data is None or claim.siege_data.attacker is None
        if action is ProtectableAction.BREAK_BLOCK:
            return claim.allow_break(actor, location.get_block().type) is None
        if action is ProtectableAction.PLACE_BLOCK:
            return claim.allow_build(actor, location.get_block().type) is None
        return claim.allow_access(actor) is None
