"""Base command class for all server commands."""
from abc import ABC, abstractmethod
from enum import Enum
from typing import Awaitable, Callable, Optional, Tuple


class CommandResult(Enum):
    EXECUTED = "executed"
    REJECTED = "rejected"
    UNKNOWN_COMMAND = "unknown_command"
    PARAMETERS_INVALID = "parameters_invalid"


# Sends a line of feedback back to the player who issued the command
Reply = Callable[[str], Awaitable[None]]


class BaseCommand(ABC):
    """Base class for all server commands."""

    def __init__(self, name: str, description: str):
        self.name = name
        self.description = description
        # Human readable parameter synopsis, shown in usage errors
        self.parameters = ""

    def validate_parameters(self, parameters: dict = None) -> Tuple[bool, Optional[str]]:
        """
        Validate command parameters before execution.

        Args:
            parameters: Dictionary of parameters to validate

        Returns:
            Tuple of (is_valid, error_message)
            - is_valid: True if parameters are valid, False otherwise
            - error_message: Error message if invalid, None if valid
        """
        # Default implementation: all parameters are valid
        # Override in subclasses to add validation
        return True, None

    @abstractmethod
    async def execute(
        self,
        parameters: dict = None,
        player=None,
        reply: Reply = None
    ) -> CommandResult:
        """
        Execute the command.

        Args:
            parameters: Dictionary of parameters for the command
            player: Player who issued the command
            reply: Coroutine function sending feedback to that player

        Returns:
            CommandResult indicating what happened
        """
        pass

    def get_info(self) -> dict:
        """Get command information."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters,
        }


class PlayerArgumentCommand(BaseCommand):
    """Base for commands taking a single player name."""

    def __init__(self, name: str, description: str):
        super().__init__(name=name, description=description)
        self.parameters = "<player>"

    def validate_parameters(self, parameters: dict = None) -> Tuple[bool, Optional[str]]:
        """Validate that a non-empty player name was given."""
        params = parameters or {}
        player_name = params.get("player")
        if not isinstance(player_name, str) or not player_name.strip():
            return False, f"Usage: {self.name} {self.parameters}"
        return True, None
