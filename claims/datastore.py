"""
Claim data store - the live set of claims, queried by location.
"""

from __future__ import annotations

import itertools
import logging
from typing import Optional

from claims.claim import Claim
from host.world import Location


class DataStore:
    """
    In-memory claim storage.

    Usage:
        store = DataStore()
        store.add_claim(Claim(owner_id=uid, world="world", lesser_x=0, lesser_z=0,
                              greater_x=15, greater_z=15))
        claim = store.get_claim_at(location, ignore_height=True)
    """

    def __init__(self):
        self._claims: dict[int, Claim] = {}
        self._ids = itertools.count(1)
        self.logger = logging.getLogger(__name__)

    def add_claim(self, claim: Claim) -> Claim:
        """Add a top-level claim, assigning ids to it and its subdivisions."""
        for c in itertools.chain([claim], claim.subdivisions):
            if c.id is None:
                c.id = next(self._ids)
        self._claims[claim.id] = claim
        self.logger.debug(f"Added claim {claim.id} in {claim.world}")
        return claim

    def get_claim_at(
        self,
        location: Location,
        ignore_height: bool,
        cached_claim: Optional[Claim] = None,
    ) -> Optional[Claim]:
        """
        Find the claim covering a location.

        Subdivisions win over their parent claim.

        Args:
            location: Location to look up
            ignore_height: Treat claims as reaching below their min_y
            cached_claim: Claim to check first (e.g. the player's last claim)
        """
        if cached_claim is not None and cached_claim.contains(location, ignore_height):
            return self._innermost(cached_claim, location, ignore_height)

        for claim in self._claims.values():
            if claim.contains(location, ignore_height):
                return self._innermost(claim, location, ignore_height)

        return None

    def _innermost(self, claim: Claim, location: Location, ignore_height: bool) -> Claim:
        for child in claim.subdivisions:
            if child.contains(location, ignore_height):
                return child
        return claim
