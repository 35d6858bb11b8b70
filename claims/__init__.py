"""
Claims module - claim-based region protection.

Provides:
- Claim, SiegeData: protected regions and sieges
- DataStore: claim lookup by location
- ClaimsPlugin: the running claim system
"""

from claims.claim import Claim, SiegeData
from claims.datastore import DataStore
from claims.plugin import ClaimsPlugin

__all__ = [
    "Claim",
    "SiegeData",
    "DataStore",
    "ClaimsPlugin",
]
