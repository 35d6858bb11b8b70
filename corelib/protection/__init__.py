"""
Protection module - pluggable region protection checks.

Provides:
- ProtectableAction: actions that can be checked
- ProtectionModule: backend interface
- ProtectionManager: backend registry with one active backend
"""

from corelib.protection.action import ProtectableAction
from corelib.protection.module import ProtectionModule
from corelib.protection.manager import ProtectionManager

__all__ = [
    "ProtectableAction",
    "ProtectionModule",
    "ProtectionManager",
]
