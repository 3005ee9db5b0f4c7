import asyncio
import json
import uuid

import pytest

from bot import ChatServer, IGNORE_USAGE, console_player
from commands.base import CommandResult
from player_registry import Player

ALICE = Player(uuid.UUID("00000000-0000-0000-0000-00000000000a"), "Alice")
BOB = Player(uuid.UUID("00000000-0000-0000-0000-00000000000b"), "Bob")
CAROL = Player(uuid.UUID("00000000-0000-0000-0000-00000000000c"), "Carol")


@pytest.fixture
def ignore_file(tmp_path):
    return tmp_path / "config" / "outofsight.json"


@pytest.fixture
def inboxes():
    return {}


@pytest.fixture
def server(tmp_path, ignore_file, inboxes):
    server = ChatServer(
        ignore_list_file=ignore_file,
        messages_file=tmp_path / "config" / "outofsight" / "messages.json",
        command_prefix="/",
    )
    server.start()
    for player in (ALICE, BOB, CAROL):
        inbox = inboxes.setdefault(player.name, [])

        async def deliver(line, inbox=inbox):
            inbox.append(line)
        server.join(player, deliver)
    yield server
    server.stop()


def test_broadcast_reaches_everyone_by_default(server, inboxes):
    recipients = asyncio.run(server.broadcast(ALICE.player_id, "hello"))
    assert recipients == [ALICE, BOB, CAROL]
    assert inboxes["Bob"] == ["<Alice> hello"]


def test_ignore_command_hides_next_message(server, inboxes):
    result = asyncio.run(server.handle_line(BOB.player_id, "/ignore add alice"))
    assert result is CommandResult.EXECUTED
    assert inboxes["Bob"] == ["Now ignoring Alice"]

    assert asyncio.run(server.handle_line(ALICE.player_id, "hi all")) is None
    assert inboxes["Bob"] == ["Now ignoring Alice"]
    assert inboxes["Carol"] == ["<Alice> hi all"]

    # The ignore is one-directional
    asyncio.run(server.handle_line(BOB.player_id, "still here"))
    assert inboxes["Alice"][-1] == "<Bob> still here"

    asyncio.run(server.handle_line(BOB.player_id, "/ignore remove Alice"))
    asyncio.run(server.handle_line(ALICE.player_id, "back again"))
    assert inboxes["Bob"][-1] == "<Alice> back again"


def test_announce_is_never_filtered(server, inboxes):
    server.store.add_ignore(BOB.player_id, ALICE.player_id)
    asyncio.run(server.announce("Server restarting"))
    assert inboxes["Bob"] == ["Server restarting"]


@pytest.mark.parametrize("line", ["/ignore", "/ignore block Bob"])
def test_bad_ignore_usage(server, inboxes, line):
    assert asyncio.run(server.handle_line(ALICE.player_id, line)) is CommandResult.PARAMETERS_INVALID
    assert inboxes["Alice"] == [IGNORE_USAGE]


def test_list_command(server, inboxes):
    asyncio.run(server.handle_line(ALICE.player_id, "/ignore add Carol"))
    asyncio.run(server.handle_line(ALICE.player_id, "/ignore add Bob"))
    asyncio.run(server.handle_line(ALICE.player_id, "/IGNORE list"))
    assert inboxes["Alice"][-1] == "Ignored players: Bob, Carol"


def test_unknown_sender_is_dropped(server, inboxes):
    assert asyncio.run(server.handle_line(uuid.uuid4(), "who am I")) is None
    assert all(not inbox for inbox in inboxes.values())


def test_stop_flushes_and_start_restores(tmp_path, ignore_file):
    messages_file = tmp_path / "config" / "outofsight" / "messages.json"
    first = ChatServer(ignore_list_file=ignore_file, messages_file=messages_file)
    first.start()
    first.store.add_ignore(ALICE.player_id, BOB.player_id)
    first.stop()

    assert json.loads(ignore_file.read_text(encoding="utf-8")) == {
        str(ALICE.player_id): [str(BOB.player_id)]
    }

    second = ChatServer(ignore_list_file=ignore_file, messages_file=messages_file)
    second.start()
    assert second.chat_filter.should_filter(BOB.player_id, ALICE.player_id)
    second.stop()


def test_console_player_ids_are_stable():
    assert console_player("Alice").player_id == console_player("alice").player_id
    assert console_player("Alice").name == "Alice"
