import uuid

import pytest

from player_registry import Player, PlayerRegistry

ALICE = Player(uuid.UUID("00000000-0000-0000-0000-00000000000a"), "Alice")
BOB = Player(uuid.UUID("00000000-0000-0000-0000-00000000000b"), "bob")


@pytest.fixture
def registry():
    registry = PlayerRegistry()
    registry.connect(BOB)
    registry.connect(ALICE)
    return registry


def test_online_players_sorted_by_name(registry):
    assert registry.online_players() == [ALICE, BOB]


@pytest.mark.parametrize("name, expected", [
    ("alice", ALICE),
    ("BOB", BOB),
    ("carol", None),
])
def test_find_online_by_name(registry, name, expected):
    assert registry.find_online_by_name(name) == expected


def test_disconnected_player_keeps_known_name(registry):
    assert registry.disconnect(BOB.player_id) == BOB
    assert registry.get_online(BOB.player_id) is None
    assert registry.find_online_by_name("bob") is None
    assert registry.find_known_by_name("Bob") == BOB.player_id
    assert registry.display_name(BOB.player_id) == "bob"


def test_display_name_falls_back_to_uuid(registry):
    stranger = uuid.uuid4()
    assert registry.display_name(stranger) == str(stranger)
    assert registry.disconnect(stranger) is None
