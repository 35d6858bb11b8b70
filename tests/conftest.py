import os
import sys
import uuid
import pytest

# Ensure project packages can be imported
sys.path.append(os.getcwd())


@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    from corelib.core.events import EventBus
    return EventBus()


@pytest.fixture
def world():
    from host.world import World
    return World(name="world")


@pytest.fixture
def server(world):
    """Server with an overworld and a nether."""
    from host.server import Server
    from host.world import World
    return Server([world, World(name="world_nether")])


@pytest.fixture
def config_file(tmp_path):
    return tmp_path / "plugins" / "Demo" / "config.yml"


@pytest.fixture
def config(config_file, server):
    from corelib.config.store import Config
    return Config(config_file, server=server)


@pytest.fixture
def plugin(tmp_path):
    from host.plugin import Plugin
    return Plugin("Demo Plugin", base_dir=tmp_path)


@pytest.fixture
def owner():
    from host.entity import Player
    return Player(unique_id=uuid.uuid4(), name="Owner")


@pytest.fixture
def stranger():
    from host.entity import Player
    return Player(unique_id=uuid.uuid4(), name="Stranger")


@pytest.fixture
def claims_plugin():
    """Running claims plugin; disabled again after the test."""
    from claims import ClaimsPlugin
    instance = ClaimsPlugin.enable()
    yield instance
    ClaimsPlugin.disable()
