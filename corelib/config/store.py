"""
Typed config store.

Wraps a Document with typed getters, default handling and value codecs
for objects the YAML tree cannot hold directly.

Usage:
    config = Config.for_plugin(plugin)
    config.set_default_value("options.auto-update", True)
    config.set_value("spawn", player.location)
    config.save()

    spawn = config.get_location("spawn")
"""

from __future__ import annotations

import copy
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, TypeVar
from uuid import UUID

import jsonschema
import yaml

from corelib.config.codecs import CodecRegistry, default_registry
from corelib.config.document import Document
from corelib.core.events import ConfigEvent, EventBus
from corelib.errors import ConfigError
from host.inventory import Inventory, ItemStack
from host.plugin import Plugin
from host.server import Server
from host.sound import Sound
from host.world import Chunk, Location, World


T = TypeVar('T')

DEFAULT_NAME = "config.yml"


def _is_kind(value: Any, kind: type) -> bool:
    """isinstance, except that bools do not count as numbers."""
    if isinstance(value, bool) and kind is not bool and kind is not object:
        return False
    return isinstance(value, kind)


class Config:
    """
    A settings file and its in-memory tree.

    The in-memory tree is the only source of truth between loads: writes
    are not persisted until save(), and reload() discards them.

    Not thread-safe. set_default_value, get_or_set_default and clear are
    check-then-act sequences and assume a single writer.

    Attributes:
        header: Comment block written at the top of the file on save;
            read from the existing file when not given
        logger: Where I/O failures are reported
        server: Resolves stored world names
        event_bus: Receives ConfigEvents (optional)
        codecs: Value codecs used by set_value and the typed getters
    """

    def __init__(
        self,
        file: Path | str,
        defaults: dict[str, Any] | None = None,
        *,
        header: str | None = None,
        logger: logging.Logger | None = None,
        server: Server | None = None,
        event_bus: EventBus | None = None,
        codecs: CodecRegistry | None = None,
    ):
        self._file = Path(file)
        self._defaults: dict[str, Any] = copy.deepcopy(defaults) if defaults else {}
        self.logger = logger or logging.getLogger(__name__)
        self.server = server or Server()
        self.event_bus = event_bus
        self.codecs = codecs or default_registry()

        self._document = self._load()
        self.header = header if header is not None else self._load_header()

    @classmethod
    def for_plugin(cls, plugin: Plugin, name: str = DEFAULT_NAME, **kwargs: Any) -> Config:
        """
        Open a file in the plugin's data folder.

        The default config.yml gets the plugin's compiled-in defaults and is
        written out straight away, so every shipped key exists on disk.
        """
        kwargs.setdefault("logger", plugin.logger)
        file = plugin.data_folder / name

        if name != DEFAULT_NAME:
            return cls(file, **kwargs)

        config = cls(file, plugin.get_defaults(), **kwargs)
        config.save()
        return config

    def _load(self) -> Document:
        try:
            return Document.load(self._file, self._defaults)
        except ConfigError as e:
            self.logger.error(f"Could not load {self._file}, using defaults: {e}")
            return Document(defaults=self._defaults)

    def _load_header(self) -> str | None:
        # An unreadable file was already reported by _load
        try:
            return Document.load_header(self._file)
        except ConfigError:
            return None

    @property
    def file(self) -> Path:
        """The backing file."""
        return self._file

    @property
    def document(self) -> Document:
        """The underlying document tree."""
        return self._document

    def set_logger(self, logger: logging.Logger) -> None:
        self.logger = logger

    # Writing

    def _store(self, path: str, value: Any) -> None:
        self._document.set(path, value)

    def set_value(self, path: str, value: Any) -> None:
        """
        Set the value at path.

        None clears the path. Values the document cannot hold natively
        (locations, inventories, dates, ...) are expanded by the codec
        registry into one or more primitive entries.
        """
        for target, primitive in self.codecs.expand(path, value):
            self._store(target, primitive)

    def set_default_value(self, path: str, value: Any) -> None:
        """Set the value at path only if nothing is stored there yet."""
        if not self.contains(path):
            self.set_value(path, value)

    def get_or_set_default(self, path: str, value: T) -> T:
        """
        Get the stored value if it has the same type as value,
        otherwise store value and return it.
        """
        stored = self.get_value(path)
        if _is_kind(stored, type(value)):
            return stored

        self.set_value(path, value)
        return value

    def clear(self) -> None:
        """Remove every top-level key. Nothing is written until save()."""
        for key in list(self.get_keys()):
            self.set_value(key, None)

    # Raw access

    def contains(self, path: str) -> bool:
        return self._document.contains(path)

    def get_value(self, path: str) -> Any:
        return self._document.get(path)

    def get_value_as(self, kind: type[T], path: str) -> T | None:
        """Get the value at path if it already is a kind, else None."""
        value = self.get_value(path)
        return value if _is_kind(value, kind) else None

    def get_keys(self, path: str | None = None) -> set[str]:
        """
        Immediate child keys of the root, or of the section at path.

        Returns an empty set if path is missing or not a section.
        """
        return self._document.keys(path)

    # Typed getters

    def get_string(self, path: str) -> str | None:
        return self._document.get_string(path)

    def get_int(self, path: str) -> int:
        return self._document.get_int(path)

    def get_boolean(self, path: str) -> bool:
        return self._document.get_boolean(path)

    def get_double(self, path: str) -> float:
        return self._document.get_double(path)

    def get_float(self, path: str) -> float:
        """
        Parse the stored value's text form as a float.

        Raises:
            ValueError: If nothing is stored or the text is not numeric
        """
        return float(str(self.get_value(path)))

    def get_long(self, path: str) -> int:
        """
        Parse the stored value's text form as an integer.

        Large integers are stored as text; this reads them back.

        Raises:
            ValueError: If nothing is stored or the text is not an integer
        """
        return int(str(self.get_value(path)))

    def get_string_list(self, path: str) -> list[str]:
        return self._document.get_string_list(path)

    def get_int_list(self, path: str) -> list[int]:
        return self._document.get_int_list(path)

    # Decoding getters. There is no type tag in the file: use the getter
    # that matches what was stored.

    def get_date(self, path: str) -> datetime:
        return self.codecs.decode(datetime, self, path)

    def get_uuid(self, path: str) -> UUID | None:
        return self.codecs.decode(UUID, self, path)

    def get_sound(self, path: str) -> Sound:
        return self.codecs.decode(Sound, self, path)

    def get_world(self, path: str) -> World | None:
        """
        Raises:
            DanglingReferenceError: If the stored name is not a loaded world
        """
        return self.codecs.decode(World, self, path)

    def get_location(self, path: str) -> Location:
        """
        Raises:
            DanglingReferenceError: If the stored world is not loaded
        """
        return self.codecs.decode(Location, self, path)

    def get_chunk(self, path: str) -> Chunk:
        return self.codecs.decode(Chunk, self, path)

    def get_item(self, path: str) -> ItemStack | None:
        return self.codecs.decode(ItemStack, self, path)

    def get_inventory(self, path: str, title: str, size: int | None = None) -> Inventory:
        """
        Rebuild an inventory stored with set_value.

        Args:
            path: Base path of the inventory
            title: Inventory title, '&' colour codes are translated
            size: Slot count; if omitted the stored size is used

        Raises:
            MissingValueError: If size is omitted and none is stored
        """
        return self.codecs.decode(Inventory, self, path, title=title, size=size)

    # Persistence

    def save(self, file: Path | str | None = None) -> bool:
        """
        Write the config to its file, or to another file.

        Failures are logged and reported through the return value.

        Returns:
            True if the file was written
        """
        target = Path(file) if file is not None else self._file

        try:
            self._document.save(target, self.header)
        except (OSError, yaml.YAMLError) as e:
            self.logger.error(f"Exception while saving a config file {target}: {e}", exc_info=True)
            if self.event_bus:
                self.event_bus.publish(ConfigEvent.SAVE_FAILED, file=target, error=str(e))
            return False

        if self.event_bus:
            self.event_bus.publish(ConfigEvent.SAVED, file=target)
        return True

    def create_file(self) -> bool:
        """
        Create the backing file if it does not exist.

        Returns:
            True if a new file was created
        """
        if self._file.exists():
            return False

        try:
            self._file.parent.mkdir(parents=True, exist_ok=True)
            self._file.touch(exist_ok=False)
        except OSError as e:
            self.logger.error(f"Exception while creating a config file {self._file}: {e}", exc_info=True)
            return False

        if self.event_bus:
            self.event_bus.publish(ConfigEvent.FILE_CREATED, file=self._file)
        return True

    def reload(self) -> None:
        """Drop unsaved changes and read the file again."""
        self._document = self._load()
        if self.event_bus:
            self.event_bus.publish(ConfigEvent.RELOADED, file=self._file)

    def validate(self, schema: dict[str, Any]) -> bool:
        """
        Check the current tree against a JSON schema.

        Every violation is logged; none is raised.

        Raises:
            jsonschema.SchemaError: If the schema itself is invalid
        """
        validator_cls = jsonschema.validators.validator_for(schema)
        validator_cls.check_schema(schema)

        valid = True
        for error in validator_cls(schema).iter_errors(self._document.root):
            location = ".".join(str(p) for p in error.absolute_path) or "<root>"
            self.logger.error(f"Validation error in {self._file} at {location}: {error.message}")
            valid = False
        return valid
