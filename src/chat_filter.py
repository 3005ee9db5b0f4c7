"""Decides which recipients should see a player's chat message."""
import uuid
from typing import Callable, Iterable, List

from ignore_store import IgnoreStore


class ChatFilter:
    """Filters chat delivery using the recipients' ignore lists."""

    def __init__(self, store: IgnoreStore):
        self.store = store

    def should_filter(self, sender: uuid.UUID, recipient: uuid.UUID) -> bool:
        """Hide the message when the recipient ignores the sender."""
        return self.store.is_ignoring(recipient, sender)

    def build_recipient_filter(self, sender: uuid.UUID) -> Callable[[uuid.UUID], bool]:
        """
        Build a predicate telling whether a recipient should receive sender's message.

        The store is queried on every call, so ignore list changes apply to
        the very next recipient checked.
        """
        def should_deliver(recipient: uuid.UUID) -> bool:
            return not self.should_filter(sender, recipient)

        return should_deliver

    def filter_recipients(self, sender: uuid.UUID, recipients: Iterable) -> List:
        """Keep the players (anything with a player_id) that should get the message."""
        should_deliver = self.build_recipient_filter(sender)
        return [recipient for recipient in recipients if should_deliver(recipient.player_id)]
