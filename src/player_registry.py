"""Online players and the names of players seen before."""
from dataclasses import dataclass
from typing import Dict, List, Optional
import logging
import threading
import uuid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Player:
    player_id: uuid.UUID
    name: str


class PlayerRegistry:
    """Tracks connected players and remembers names of those who left."""

    def __init__(self):
        self._online: Dict[uuid.UUID, Player] = {}
        # Last name seen for every player, online or not
        self._known_names: Dict[uuid.UUID, str] = {}
        self._lock = threading.Lock()

    def connect(self, player: Player):
        with self._lock:
            self._online[player.player_id] = player
            self._known_names[player.player_id] = player.name
        logger.info(f"Player {player.name} ({player.player_id}) connected")

    def disconnect(self, player_id: uuid.UUID) -> Optional[Player]:
        with self._lock:
            player = self._online.pop(player_id, None)
        if player:
            logger.info(f"Player {player.name} ({player.player_id}) disconnected")
        return player

    def get_online(self, player_id: uuid.UUID) -> Optional[Player]:
        with self._lock:
            return self._online.get(player_id)

    def online_players(self) -> List[Player]:
        """Get online players ordered by name."""
        with self._lock:
            players = list(self._online.values())
        return sorted(players, key=lambda p: (p.name.lower(), str(p.player_id)))

    def find_online_by_name(self, name: str) -> Optional[Player]:
        """Find an online player by name (case insensitive)."""
        wanted = name.lower()
        with self._lock:
            for player in self._online.values():
                if player.name.lower() == wanted:
                    return player
        return None

    def find_known_by_name(self, name: str) -> Optional[uuid.UUID]:
        """Find any player ever seen by name, preferring online players."""
        online = self.find_online_by_name(name)
        if online:
            return online.player_id
        wanted = name.lower()
        with self._lock:
            for player_id, known_name in self._known_names.items():
                if known_name.lower() == wanted:
                    return player_id
        return None

    def display_name(self, player_id: uuid.UUID) -> str:
        """
        Get a name to show for a player.

        Falls back from the online name to the last known name, and finally
        to the UUID string for players never seen by this process.
        """
        with self._lock:
            player = self._online.get(player_id)
            if player:
                return player.name
            return self._known_names.get(player_id, str(player_id))
