"""Chat server wiring ignore lists into command handling and message delivery."""
import sys
import os
# Add parent directory to path to allow imports when running as module
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import logging
import asyncio
import uuid
from typing import Awaitable, Callable, Dict, List, Optional

from config import IGNORE_LIST_FILE, MESSAGES_FILE, COMMAND_PREFIX, LOG_LEVEL
from chat_filter import ChatFilter
from command_handler import CommandHandler
from commands.base import CommandResult
from ignore_store import IgnoreStore
from messages_config import MessagesConfig
from player_registry import Player, PlayerRegistry

logger = logging.getLogger(__name__)

IGNORE_USAGE = "Usage: /ignore <add|remove|list|reload> [player]"
IGNORE_SUBCOMMANDS = ("add", "remove", "list", "reload")

# Delivers one line of text to a connected player
Deliver = Callable[[str], Awaitable[None]]


class ChatServer:
    """Routes player input to commands or chat, hiding messages from ignored senders."""

    def __init__(
        self,
        ignore_list_file=IGNORE_LIST_FILE,
        messages_file=MESSAGES_FILE,
        command_prefix: str = COMMAND_PREFIX
    ):
        self.store = IgnoreStore(ignore_list_file)
        self.messages_config = MessagesConfig(messages_file)
        self.players = PlayerRegistry()
        self.chat_filter = ChatFilter(self.store)
        self.command_handler = CommandHandler(self.store, self.players, self.messages_config)
        self.command_prefix = command_prefix
        self._delivery: Dict[uuid.UUID, Deliver] = {}

    def start(self):
        """Load configuration; call once before any chat or command traffic."""
        logger.info("Server starting...")
        self.messages_config.load()
        self.store.load()
        logger.info("Server started")

    def stop(self):
        """Flush ignore lists to disk; call once on shutdown."""
        logger.info("Server stopping...")
        self.store.save_sync()
        self.store.close()
        logger.info("Server stopped")

    def join(self, player: Player, deliver: Deliver):
        self._delivery[player.player_id] = deliver
        self.players.connect(player)

    def leave(self, player_id: uuid.UUID):
        self.players.disconnect(player_id)
        self._delivery.pop(player_id, None)

    async def handle_line(self, player_id: uuid.UUID, text: str) -> Optional[CommandResult]:
        """
        Handle one line of input from a player.

        Returns:
            CommandResult for commands, None for chat messages
        """
        player = self.players.get_online(player_id)
        if player is None:
            logger.warning(f"Ignoring input from unknown player {player_id}")
            return None

        command_word = f"{self.command_prefix}ignore"
        words = text.strip().split()
        if words and words[0].lower() == command_word:
            return await self.handle_ignore_command(player, words[1:])

        await self.broadcast(player_id, text)
        return None

    async def handle_ignore_command(self, player: Player, args: List[str]) -> CommandResult:
        reply = self._reply_to(player)
        if not args or args[0].lower() not in IGNORE_SUBCOMMANDS:
            await reply(IGNORE_USAGE)
            return CommandResult.PARAMETERS_INVALID

        command_name = f"ignore_{args[0].lower()}"
        parameters = {"player": args[1]} if len(args) > 1 else {}
        return await self.command_handler.execute_command(command_name, parameters, player, reply)

    async def broadcast(self, sender_id: uuid.UUID, text: str) -> List[Player]:
        """
        Send a chat message to every online player who does not ignore the sender.

        Returns:
            Players the message was delivered to
        """
        sender = self.players.get_online(sender_id)
        sender_name = sender.name if sender else self.players.display_name(sender_id)
        line = f"<{sender_name}> {text}"

        online = self.players.online_players()
        recipients = self.chat_filter.filter_recipients(sender_id, online)
        for recipient in online:
            if recipient not in recipients:
                logger.debug(f"Hiding message from {sender_name} for {recipient.name}")

        await asyncio.gather(*(self._deliver(recipient, line) for recipient in recipients))
        return recipients

    async def announce(self, text: str):
        """Send a system message to everyone; never filtered."""
        await asyncio.gather(*(self._deliver(player, text) for player in self.players.online_players()))

    async def _deliver(self, player: Player, line: str):
        deliver = self._delivery.get(player.player_id)
        if deliver is None:
            return
        try:
            await deliver(line)
        except Exception as e:
            logger.error(f"Failed to deliver message to {player.name}: {e}")

    def _reply_to(self, player: Player) -> Callable[[str], Awaitable[None]]:
        async def reply(text: str):
            await self._deliver(player, text)
        return reply


def console_player(name: str) -> Player:
    """Build a console player with a stable id derived from the name."""
    return Player(player_id=uuid.uuid3(uuid.NAMESPACE_OID, name.lower()), name=name)


async def main_async():
    """Run a console host: each stdin line is '<name>: <text>'."""
    server = ChatServer()
    server.start()
    loop = asyncio.get_running_loop()

    def make_deliver(player: Player):
        async def deliver(line: str):
            print(f"[to {player.name}] {line}", flush=True)
        return deliver

    logger.info("Reading '<name>: <message>' lines from stdin")
    try:
        while True:
            raw = await loop.run_in_executor(None, sys.stdin.readline)
            if not raw:
                break
            name, sep, text = raw.rstrip("\n").partition(":")
            if not sep or not name.strip():
                print("Expected '<name>: <message>'", flush=True)
                continue
            player = console_player(name.strip())
            if server.players.get_online(player.player_id) is None:
                server.join(player, make_deliver(player))
                await server.announce(f"{player.name} joined the game")
            await server.handle_line(player.player_id, text.strip())
    finally:
        server.stop()


def main():
    """Start the console server."""
    # Enable logging
    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO)
    )
    try:
        asyncio.run(main_async())
    except KeyboardInterrupt:
        logger.info("Shutting down...")


if __name__ == "__main__":
    main()
