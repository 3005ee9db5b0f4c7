import uuid

import pytest

from chat_filter import ChatFilter
from ignore_store import IgnoreStore
from player_registry import Player

A = uuid.UUID("00000000-0000-0000-0000-00000000000a")
B = uuid.UUID("00000000-0000-0000-0000-00000000000b")
C = uuid.UUID("00000000-0000-0000-0000-00000000000c")


@pytest.fixture
def store(tmp_path):
    store = IgnoreStore(tmp_path / "outofsight.json")
    yield store
    store.close()


@pytest.fixture
def chat_filter(store):
    return ChatFilter(store)


def test_should_filter_when_recipient_ignores_sender(store, chat_filter):
    store.add_ignore(A, C)
    # A ignores C: C's messages are hidden from A, not the reverse
    assert chat_filter.should_filter(sender=C, recipient=A) is True
    assert chat_filter.should_filter(sender=A, recipient=C) is False


def test_scenario_after_add_and_remove(store, chat_filter):
    store.add_ignore(A, B)
    store.add_ignore(A, C)
    store.remove_ignore(A, B)
    assert chat_filter.should_filter(sender=A, recipient=C) is False
    assert chat_filter.should_filter(sender=B, recipient=A) is False
    assert chat_filter.should_filter(sender=C, recipient=A) is True


def test_recipient_filter_is_negation(store, chat_filter):
    store.add_ignore(B, A)
    should_deliver = chat_filter.build_recipient_filter(A)
    assert should_deliver(B) is False
    assert should_deliver(C) is True


def test_recipient_filter_sees_later_changes(store, chat_filter):
    should_deliver = chat_filter.build_recipient_filter(A)
    assert should_deliver(B) is True
    store.add_ignore(B, A)
    assert should_deliver(B) is False
    store.remove_ignore(B, A)
    assert should_deliver(B) is True


def test_filter_recipients_keeps_order(store, chat_filter):
    players = [Player(C, "carol"), Player(B, "bob"), Player(A, "alice")]
    store.add_ignore(B, A)
    assert chat_filter.filter_recipients(A, players) == [players[0], players[2]]
