"""
Test value codecs through the config store.
"""

import gc
import weakref
from datetime import datetime, timezone
from uuid import UUID, uuid4

import pytest
from pydantic import SecretStr

from corelib.config.codecs import Codec, CodecRegistry, default_registry, is_wide_int
from corelib.errors import DanglingReferenceError, MissingValueError
from host.inventory import ItemStack
from host.sound import Sound
from host.world import Chunk, Location, Material, World


def test_uuid_round_trip(config):
    uid = uuid4()
    config.set_value("owner", uid)

    assert config.get_value("owner") == str(uid)
    assert config.get_uuid("owner") == uid
    assert config.get_uuid("missing") is None

def test_date_round_trip(config):
    moment = datetime(2024, 5, 1, 12, 30, 15, 123000, tzinfo=timezone.utc)
    config.set_value("last-seen", moment)

    assert config.get_value("last-seen") == "1714566615123"
    assert config.get_date("last-seen") == moment

def test_wide_int_stored_as_text(config):
    config.set_value("big", 2 ** 40)
    config.set_value("small", 5)
    config.set_value("flag", True)

    assert config.get_value("big") == "1099511627776"
    assert config.get_long("big") == 2 ** 40
    assert config.get_value("small") == 5
    assert config.get_value("flag") is True

def test_wide_int_boundaries():
    assert not is_wide_int(2 ** 31 - 1)
    assert is_wide_int(2 ** 31)
    assert not is_wide_int(-(2 ** 31))
    assert is_wide_int(-(2 ** 31) - 1)
    assert not is_wide_int(True)

def test_sound_round_trip(config):
    config.set_value("sounds.click", Sound.UI_BUTTON_CLICK)

    assert config.get_value("sounds.click") == "UI_BUTTON_CLICK"
    assert config.get_sound("sounds.click") is Sound.UI_BUTTON_CLICK

def test_world_round_trip(config, world):
    config.set_value("home-world", world)

    assert config.get_value("home-world") == "world"
    assert config.get_world("home-world") is world
    assert config.get_world("missing") is None

def test_unknown_world_is_dangling(config):
    config.set_value("home-world", "atlantis")

    with pytest.raises(DanglingReferenceError):
        config.get_world("home-world")

def test_location_round_trip(config, world):
    spawn = Location(world=world, x=10.5, y=64.0, z=-3.25, yaw=90.5, pitch=-12.75)
    config.set_value("spawn", spawn)

    assert config.get_keys("spawn") == {"x", "y", "z", "pitch", "yaw", "world"}
    assert config.get_string("spawn.world") == "world"

    loaded = config.get_location("spawn")
    assert loaded.world is world
    assert loaded.x == pytest.approx(spawn.x)
    assert loaded.y == pytest.approx(spawn.y)
    assert loaded.z == pytest.approx(spawn.z)
    assert loaded.yaw == pytest.approx(spawn.yaw)
    assert loaded.pitch == pytest.approx(spawn.pitch)

def test_location_round_trip_through_file(config, world):
    spawn = Location(world=world, x=1.5, y=2.5, z=3.5, yaw=4.5, pitch=5.5)
    config.set_value("spawn", spawn)
    config.save()
    config.reload()

    assert config.get_location("spawn") == spawn

def test_location_in_unloaded_world(config, server):
    nether = server.get_world("world_nether")
    config.set_value("portal", Location(world=nether, x=1, y=2, z=3))
    server.unload_world("world_nether")

    with pytest.raises(DanglingReferenceError) as excinfo:
        config.get_location("portal")
    assert excinfo.value.name == "world_nether"

def test_location_without_world_cannot_be_stored(config):
    with pytest.raises(DanglingReferenceError):
        config.set_value("spawn", Location(x=1, y=2, z=3))

def test_chunk_round_trip(config, world):
    chunk = world.get_chunk_at(-2, 7)
    config.set_value("claimed", chunk)

    assert config.get_int("claimed.x") == -2
    assert config.get_int("claimed.z") == 7
    assert config.get_string("claimed.world") == "world"
    assert config.get_chunk("claimed") == chunk

def test_item_round_trip(config):
    item = ItemStack(type=Material.DIAMOND_SWORD, display_name="Excalibur", lore=["Sharp", "Old"])
    config.set_value("reward", item)

    assert config.get_string("reward.type") == "DIAMOND_SWORD"
    assert config.get_item("reward") == item
    assert config.get_item("missing") is None

def test_inventory_round_trip(config, server):
    inventory = server.create_inventory(9, "Backpack")
    inventory.set_item(0, ItemStack(type=Material.DIAMOND, amount=3))
    inventory.set_item(4, ItemStack(type=Material.APPLE, display_name="Golden", lore=["Shiny"]))
    config.set_value("backpack", inventory)

    assert config.get_int("backpack.size") == 9
    assert not config.contains("backpack.1")

    loaded = config.get_inventory("backpack", "&aBackpack")
    assert loaded.size == 9
    assert loaded.title == "§aBackpack"
    for i in range(9):
        assert loaded.get_item(i) == inventory.get_item(i)

def test_inventory_empty_slot_clears_old_value(config, server):
    config.set_value("backpack.1", ItemStack(type=Material.STONE))
    config.set_value("backpack", server.create_inventory(9))

    assert not config.contains("backpack.1")

def test_item_overwrite_drops_old_fields(config):
    config.set_value("reward", ItemStack(type=Material.DIAMOND_SWORD, display_name="Excalibur", lore=["Sharp"]))
    config.set_value("reward", ItemStack(type=Material.STONE))

    assert not config.contains("reward.name")
    assert not config.contains("reward.lore")
    assert config.get_item("reward") == ItemStack(type=Material.STONE)

def test_inventory_overwrite_drops_old_slot_fields(config, server):
    first = server.create_inventory(9)
    first.set_item(0, ItemStack(type=Material.APPLE, display_name="Golden", lore=["Shiny"]))
    config.set_value("backpack", first)

    second = server.create_inventory(9)
    second.set_item(0, ItemStack(type=Material.APPLE))
    config.set_value("backpack", second)

    item = config.get_inventory("backpack", "Backpack").get_item(0)
    assert item.display_name is None
    assert item.lore == []

def test_composite_replaces_scalar_and_stray_keys(config, world):
    config.set_value("spawn.note", "old")
    config.set_value("spawn", Location(world=world, x=1, y=2, z=3))

    assert not config.contains("spawn.note")
    assert config.get_keys("spawn") == {"x", "y", "z", "pitch", "yaw", "world"}

def test_inventory_without_size_needs_explicit_size(config):
    config.set_value("chest.0", ItemStack(type=Material.OAK_LOG, amount=16))

    with pytest.raises(MissingValueError):
        config.get_inventory("chest", "Chest")

    loaded = config.get_inventory("chest", "Chest", 9)
    assert loaded.size == 9
    assert loaded.get_item(0).type is Material.OAK_LOG
    assert loaded.get_item(0).amount == 16
    assert loaded.get_item(1) is None

def test_secret_is_unwrapped(config):
    config.set_value("database.password", SecretStr("hunter2"))
    assert config.get_string("database.password") == "hunter2"

def test_weak_reference_is_unwrapped(config, world):
    config.set_value("home-world", weakref.ref(world))
    assert config.get_value("home-world") == "world"

def test_dead_weak_reference_clears(config):
    config.set_value("home-world", "world")
    temporary = World(name="temporary")
    dead = weakref.ref(temporary)
    del temporary
    gc.collect()

    config.set_value("home-world", dead)

    assert not config.contains("home-world")

def test_registry_priority_order():
    registry = default_registry()
    names = [codec.name for codec in registry.codecs]

    assert names == ["inventory", "date", "long", "uuid", "sound", "location", "chunk", "world", "item"]
    assert registry.find("plain") is None
    assert registry.find(7) is None
    assert registry.find(True) is None

def test_custom_codec_takes_priority():
    registry = default_registry()
    registry.register(
        Codec(UUID, lambda v: [("", v.hex)], lambda config, path: UUID(config.get_string(path)), name="hex"),
        index=0,
    )
    uid = uuid4()

    assert registry.expand("id", uid) == [("id", uid.hex)]

def test_expand_is_recursive():
    registry = CodecRegistry()
    registry.register(Codec(UUID, lambda v: [("", str(v))], lambda config, path: None, name="uuid"))
    registry.register(Codec(tuple, lambda v: [("first", v[0]), ("second", v[1])], lambda config, path: None))
    uid = uuid4()

    assert registry.expand("pair", (uid, 2)) == [
        ("pair", None),
        ("pair.first", str(uid)),
        ("pair.second", 2),
    ]
