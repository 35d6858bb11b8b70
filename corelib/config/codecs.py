"""
Value codecs - flatten rich values into document paths and rebuild them.

Writes are polymorphic: ``CodecRegistry.expand`` picks the first codec
whose kind matches the value. Reads are nominal: the caller names the kind
(through a typed getter on Config) because nothing about the kind is
stored in the document.

Usage:
    registry = default_registry()
    registry.expand("spawn", location)
    # [("spawn.x", 10.5), ("spawn.y", 64.0), ..., ("spawn.world", "world")]
"""

from __future__ import annotations

import weakref
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any, Callable, Optional
from uuid import UUID

from pydantic import SecretBytes, SecretStr

from corelib.config.document import SEPARATOR
from corelib.errors import DanglingReferenceError, MissingValueError
from host.inventory import Inventory, ItemStack
from host.server import translate_color_codes
from host.sound import Sound
from host.world import Chunk, Location, Material, World

if TYPE_CHECKING:
    from corelib.config.store import Config


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
INT_MIN = -(2 ** 31)
INT_MAX = 2 ** 31 - 1

Encoder = Callable[[Any], list[tuple[str, Any]]]
Decoder = Callable[..., Any]


def join(path: str, suffix: str) -> str:
    return f"{path}{SEPARATOR}{suffix}" if suffix else path


@dataclass(frozen=True)
class Codec:
    """
    Encode/decode rule for one kind of value.

    Attributes:
        kind: Concrete type handled by this codec
        encode: value -> [(suffix, value)]; suffix "" is the base path itself
        decode: (config, path, **options) -> value
        matches: Extra predicate narrowing ``kind``
        name: Identifier for logging
    """
    kind: type
    encode: Encoder
    decode: Decoder
    matches: Optional[Callable[[Any], bool]] = None
    name: str = ""

    def accepts(self, value: Any) -> bool:
        if not isinstance(value, self.kind):
            return False
        return self.matches is None or self.matches(value)


class CodecRegistry:
    """
    Ordered set of codecs plus unwrap rules.

    Codecs are consulted in registration order; the first match wins.
    Registries are filled at startup and not changed afterwards.
    """

    def __init__(self):
        self._codecs: list[Codec] = []
        self._unwrappers: list[tuple[type, Callable[[Any], Any]]] = []

    def register(self, codec: Codec, index: int | None = None) -> Codec:
        if index is None:
            self._codecs.append(codec)
        else:
            self._codecs.insert(index, codec)
        return codec

    def register_unwrapper(self, kind: type, unwrap: Callable[[Any], Any]) -> None:
        """Treat instances of kind as wrappers; unwrap returns the inner value or None."""
        self._unwrappers.append((kind, unwrap))

    @property
    def codecs(self) -> list[Codec]:
        return list(self._codecs)

    def find(self, value: Any) -> Codec | None:
        for codec in self._codecs:
            if codec.accepts(value):
                return codec
        return None

    def get(self, kind: type) -> Codec:
        """Get the codec registered for exactly this kind."""
        for codec in self._codecs:
            if codec.kind is kind:
                return codec
        raise KeyError(f"No codec registered for {kind.__name__}")

    def unwrap(self, value: Any) -> tuple[bool, Any]:
        """Returns (was_wrapped, inner value)."""
        for kind, unwrap in self._unwrappers:
            if isinstance(value, kind):
                return True, unwrap(value)
        return False, value

    def expand(self, path: str, value: Any) -> list[tuple[str, Any]]:
        """
        Flatten a value into (path, primitive) writes.

        A None primitive means "clear this path". A value encoded under
        sub-paths replaces whatever node was at path before, so fields the
        new value leaves out do not survive from the old one.
        """
        if value is None:
            return [(path, None)]

        wrapped, inner = self.unwrap(value)
        if wrapped:
            return self.expand(path, inner)

        codec = self.find(value)
        if codec is None:
            return [(path, value)]

        parts = codec.encode(value)
        writes: list[tuple[str, Any]] = []
        if any(suffix for suffix, _ in parts):
            writes.append((path, None))
        for suffix, part in parts:
            writes.extend(self.expand(join(path, suffix), part))
        return writes

    def decode(self, kind: type, config: Config, path: str, **options: Any) -> Any:
        return self.get(kind).decode(config, path, **options)


# -----------------------------------------------------------------------------
# Built-in codecs
# -----------------------------------------------------------------------------

def _world_name(world: World | None) -> str:
    if world is None:
        raise DanglingReferenceError("world", None)
    return world.name


def _resolve_world(config: Config, path: str) -> World:
    name = config.get_string(path)
    world = config.server.get_world(name)
    if world is None:
        raise DanglingReferenceError("world", name, path)
    return world


def encode_inventory(inventory: Inventory) -> list[tuple[str, Any]]:
    writes: list[tuple[str, Any]] = [("size", inventory.size)]
    writes.extend((str(i), item) for i, item in enumerate(inventory.slots))
    return writes


def decode_inventory(config: Config, path: str, title: str = "", size: int | None = None) -> Inventory:
    if size is None:
        size_path = join(path, "size")
        if not config.contains(size_path):
            raise MissingValueError(size_path)
        size = config.get_int(size_path)

    inventory = config.server.create_inventory(size, translate_color_codes("&", title))
    for i in range(size):
        inventory.set_item(i, config.get_item(join(path, str(i))))
    return inventory


def encode_date(value: datetime) -> list[tuple[str, Any]]:
    if value.tzinfo is None:
        value = value.astimezone()
    millis = (value - EPOCH) // timedelta(milliseconds=1)
    return [("", str(millis))]


def decode_date(config: Config, path: str) -> datetime:
    return EPOCH + timedelta(milliseconds=config.get_long(path))


def is_wide_int(value: int) -> bool:
    return not isinstance(value, bool) and not INT_MIN <= value <= INT_MAX


def decode_uuid(config: Config, path: str) -> UUID | None:
    value = config.get_string(path)
    return UUID(value) if value is not None else None


def decode_sound(config: Config, path: str) -> Sound:
    return Sound[config.get_string(path)]


def encode_location(location: Location) -> list[tuple[str, Any]]:
    return [
        ("x", location.x),
        ("y", location.y),
        ("z", location.z),
        ("pitch", location.pitch),
        ("yaw", location.yaw),
        ("world", _world_name(location.world)),
    ]


def decode_location(config: Config, path: str) -> Location:
    return Location(
        world=_resolve_world(config, join(path, "world")),
        x=config.get_double(join(path, "x")),
        y=config.get_double(join(path, "y")),
        z=config.get_double(join(path, "z")),
        yaw=config.get_float(join(path, "yaw")),
        pitch=config.get_float(join(path, "pitch")),
    )


def encode_chunk(chunk: Chunk) -> list[tuple[str, Any]]:
    return [
        ("x", chunk.x),
        ("z", chunk.z),
        ("world", _world_name(chunk.world)),
    ]


def decode_chunk(config: Config, path: str) -> Chunk:
    world = _resolve_world(config, join(path, "world"))
    return world.get_chunk_at(config.get_int(join(path, "x")), config.get_int(join(path, "z")))


def decode_world(config: Config, path: str) -> World | None:
    if not config.contains(path):
        return None
    return _resolve_world(config, path)


def encode_item(item: ItemStack) -> list[tuple[str, Any]]:
    writes: list[tuple[str, Any]] = [("type", item.type.name), ("amount", item.amount)]
    if item.display_name is not None:
        writes.append(("name", item.display_name))
    if item.lore:
        writes.append(("lore", list(item.lore)))
    return writes


def decode_item(config: Config, path: str) -> ItemStack | None:
    material = config.get_string(join(path, "type"))
    if material is None:
        return None
    return ItemStack(
        type=Material[material],
        amount=config.get_int(join(path, "amount")) or 1,
        display_name=config.get_string(join(path, "name")),
        lore=config.get_string_list(join(path, "lore")),
    )


def default_registry() -> CodecRegistry:
    """Build a registry holding the built-in codecs in priority order."""
    registry = CodecRegistry()

    registry.register_unwrapper(weakref.ref, lambda r: r())
    registry.register_unwrapper(SecretStr, lambda s: s.get_secret_value())
    registry.register_unwrapper(SecretBytes, lambda s: s.get_secret_value())

    registry.register(Codec(Inventory, encode_inventory, decode_inventory, name="inventory"))
    registry.register(Codec(datetime, encode_date, decode_date, name="date"))
    registry.register(Codec(
        int,
        lambda v: [("", str(v))],
        lambda config, path: config.get_long(path),
        matches=is_wide_int,
        name="long",
    ))
    registry.register(Codec(UUID, lambda v: [("", str(v))], decode_uuid, name="uuid"))
    registry.register(Codec(Sound, lambda v: [("", v.name)], decode_sound, name="sound"))
    registry.register(Codec(Location, encode_location, decode_location, name="location"))
    registry.register(Codec(Chunk, encode_chunk, decode_chunk, name="chunk"))
    registry.register(Codec(World, lambda v: [("", v.name)], decode_world, name="world"))
    registry.register(Codec(ItemStack, encode_item, decode_item, name="item"))

    return registry
