"""Ignore list commands: add, remove, list and reload."""
import logging

from .base import BaseCommand, CommandResult, PlayerArgumentCommand

logger = logging.getLogger(__name__)


class IgnoreAddCommand(PlayerArgumentCommand):
    """Command to stop receiving chat messages from a player."""

    def __init__(self, store, players, messages_config):
        super().__init__(
            name="ignore_add",
            description="Hide chat messages from an online player"
        )
        self.store = store
        self.players = players
        self.messages_config = messages_config

    async def execute(self, parameters: dict = None, player=None, reply=None) -> CommandResult:
        """
        Add the named online player to the issuer's ignore list.

        Args:
            parameters: {"player": <name>}
            player: Player issuing the command
            reply: Feedback coroutine

        Returns:
            CommandResult.EXECUTED if the list changed, REJECTED otherwise
        """
        msg = self.messages_config.get()
        name = parameters["player"].strip()
        target = self.players.find_online_by_name(name)

        if target is None:
            await reply(msg.player_not_found.format(name))
            return CommandResult.REJECTED

        if target.player_id == player.player_id:
            await reply(msg.cannot_ignore_self)
            return CommandResult.REJECTED

        if self.store.add_ignore(player.player_id, target.player_id):
            await reply(msg.now_ignoring.format(target.name))
            return CommandResult.EXECUTED

        await reply(msg.already_ignoring.format(target.name))
        return CommandResult.REJECTED


class IgnoreRemoveCommand(PlayerArgumentCommand):
    """Command to receive chat messages from a player again."""

    def __init__(self, store, players, messages_config):
        super().__init__(
            name="ignore_remove",
            description="Show chat messages from a previously ignored player again"
        )
        self.store = store
        self.players = players
        self.messages_config = messages_config

    async def execute(self, parameters: dict = None, player=None, reply=None) -> CommandResult:
        msg = self.messages_config.get()
        name = parameters["player"].strip()
        # Players who left can still be removed by their last known name
        target_id = self.players.find_known_by_name(name)

        if target_id is None:
            await reply(msg.not_ignoring.format(name))
            return CommandResult.REJECTED

        target_name = self.players.display_name(target_id)
        if self.store.remove_ignore(player.player_id, target_id):
            await reply(msg.no_longer_ignoring.format(target_name))
            return CommandResult.EXECUTED

        await reply(msg.not_ignoring.format(target_name))
        return CommandResult.REJECTED


class IgnoreListCommand(BaseCommand):
    """Command to show the issuer's ignore list."""

    def __init__(self, store, players, messages_config):
        super().__init__(
            name="ignore_list",
            description="List the players you are ignoring"
        )
        self.store = store
        self.players = players
        self.messages_config = messages_config

    async def execute(self, parameters: dict = None, player=None, reply=None) -> CommandResult:
        msg = self.messages_config.get()
        ignored = self.store.get_ignored_players(player.player_id)

        if not ignored:
            await reply(msg.ignore_list_empty)
            return CommandResult.EXECUTED

        names = sorted((self.players.display_name(player_id) for player_id in ignored), key=str.lower)
        await reply(msg.ignored_players.format(", ".join(names)))
        return CommandResult.EXECUTED


class IgnoreReloadCommand(BaseCommand):
    """Command to reload messages and ignore lists from disk."""

    def __init__(self, store, players, messages_config):
        super().__init__(
            name="ignore_reload",
            description="Reload messages and ignore lists from the config files"
        )
        self.store = store
        self.players = players
        self.messages_config = messages_config

    async def execute(self, parameters: dict = None, player=None, reply=None) -> CommandResult:
        self.messages_config.load()
        self.store.load()
        logger.info(f"Configuration reloaded by {player.name if player else 'console'}")

        await reply(self.messages_config.get().config_reloaded)
        return CommandResult.EXECUTED
