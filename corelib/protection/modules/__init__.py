"""
Built-in protection backends.

DEFAULT_MODULES maps each backend identifier to its factory, in the order
ProtectionManager.activate_first_available() tries them.
"""

from corelib.protection.modules.claim_module import ClaimProtectionModule

DEFAULT_MODULES = {
    "Claims": ClaimProtectionModule,
}

__all__ = [
    "ClaimProtectionModule",
    "DEFAULT_MODULES",
]
