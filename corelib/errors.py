"""
Exception taxonomy.

Parse errors from the numeric getters are plain ``ValueError`` and are not
wrapped here; everything else raised by the library derives from
``CoreLibError``.
"""

from __future__ import annotations


class CoreLibError(Exception):
    """Base class for library errors."""


class ConfigError(CoreLibError):
    """A config document could not be read or interpreted."""


class MissingValueError(ConfigError, KeyError):
    """A required entry is not present at the given path."""

    def __init__(self, path: str):
        super().__init__(path)
        self.path = path

    def __str__(self) -> str:
        return f"No value stored at '{self.path}'"


class DanglingReferenceError(ConfigError, LookupError):
    """A stored reference (e.g. a world name) does not resolve to a live object."""

    def __init__(self, kind: str, name: str | None, path: str | None = None):
        self.kind = kind
        self.name = name
        self.path = path
        where = f" (at '{path}')" if path else ""
        super().__init__(f"Unknown {kind} {name!r}{where}")


class ProtectionError(CoreLibError):
    """A protection backend could not be bound or queried."""


class ModuleNotLoadedError(ProtectionError, RuntimeError):
    """A protection module was queried before load() succeeded."""
