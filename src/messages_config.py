"""Player-facing feedback messages loaded from a JSON file."""
import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class Messages:
    cannot_ignore_self: str = "You cannot ignore yourself"
    now_ignoring: str = "Now ignoring {}"
    already_ignoring: str = "{} is already on your ignore list"
    no_longer_ignoring: str = "No longer ignoring {}"
    not_ignoring: str = "{} is not on your ignore list"
    ignore_list_empty: str = "Your ignore list is empty"
    ignored_players: str = "Ignored players: {}"
    config_reloaded: str = "Configuration reloaded"
    player_not_found: str = "Player {} is not online"


class MessagesConfig:
    """Holds the current messages and keeps them in sync with the config file."""

    def __init__(self, path):
        self.path = Path(path)
        self.messages = Messages()

    def load(self):
        """Load messages, writing the defaults if no file exists yet."""
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except FileNotFoundError:
            logger.info("No messages config found, creating default")
            self.save()
            return
        except OSError as e:
            logger.error(f"Failed to load messages config: {e}")
            return
        except (ValueError, RecursionError) as e:
            logger.error(f"Invalid messages config format, using defaults: {e}")
            return

        if raw is None:
            return
        if not isinstance(raw, dict):
            logger.error("Invalid messages config format, using defaults")
            return

        known = {field.name for field in fields(Messages)}
        # Missing keys keep their defaults, unknown keys are dropped
        values = {key: value for key, value in raw.items() if key in known and isinstance(value, str)}
        self.messages = Messages(**values)
        logger.info("Loaded messages config")

    def save(self):
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(asdict(self.messages), f, indent=2, ensure_ascii=False)
            logger.debug("Saved messages config")
        except OSError as e:
            logger.error(f"Failed to save messages config: {e}")

    def get(self) -> Messages:
        return self.messages
