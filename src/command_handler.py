"""Command handler for managing and executing server commands."""
import logging
from typing import Dict, List

from commands.base import BaseCommand, CommandResult
from commands.ignore_commands import (
    IgnoreAddCommand,
    IgnoreRemoveCommand,
    IgnoreListCommand,
    IgnoreReloadCommand
)

logger = logging.getLogger(__name__)


class CommandHandler:
    """Manages server commands and their execution."""

    def __init__(self, store, players, messages_config):
        self.commands: Dict[str, BaseCommand] = {}
        self._register_default_commands(store, players, messages_config)

    def _register_default_commands(self, store, players, messages_config):
        """Register default commands."""
        default_commands = [
            IgnoreAddCommand(store, players, messages_config),
            IgnoreRemoveCommand(store, players, messages_config),
            IgnoreListCommand(store, players, messages_config),
            IgnoreReloadCommand(store, players, messages_config),
        ]
        for cmd in default_commands:
            self.register_command(cmd)

    def register_command(self, command: BaseCommand):
        """Register a new command."""
        self.commands[command.name] = command

    def get_available_commands(self) -> List[dict]:
        """Get list of available commands with descriptions."""
        return [cmd.get_info() for cmd in self.commands.values()]

    def validate_command(self, command_name: str, parameters: dict = None) -> tuple[bool, str | None]:
        """
        Validate command parameters before execution.

        Args:
            command_name: Name of the command to validate
            parameters: Parameters for the command

        Returns:
            Tuple of (is_valid, error_message)
            - is_valid: True if parameters are valid, False otherwise
            - error_message: Error message if invalid, None if valid
        """
        if command_name not in self.commands:
            return False, f"Unknown command '{command_name}'."

        command = self.commands[command_name]
        return command.validate_parameters(parameters)

    async def execute_command(
        self,
        command_name: str,
        parameters: dict = None,
        player=None,
        reply=None
    ) -> CommandResult:
        """
        Execute a command by name.

        Args:
            command_name: Name of the command to execute
            parameters: Parameters for the command
            player: Player issuing the command
            reply: Coroutine function sending feedback to that player

        Returns:
            CommandResult indicating what happened
        """
        if command_name not in self.commands:
            await reply(f"Unknown command '{command_name}'.")
            return CommandResult.UNKNOWN_COMMAND

        # Validate parameters before execution (safety check)
        is_valid, error_message = self.validate_command(command_name, parameters)
        if not is_valid:
            await reply(error_message)
            return CommandResult.PARAMETERS_INVALID

        try:
            command = self.commands[command_name]
            return await command.execute(parameters or {}, player, reply)
        except Exception as e:
            logger.error(f"Error executing command {command_name}: {e}", exc_info=True)
            await reply(f"An error occurred while executing the command: {e}")
            return CommandResult.REJECTED
