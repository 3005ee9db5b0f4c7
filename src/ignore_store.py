"""Per-player ignore lists backed by a JSON file."""
import json
import logging
import os
import tempfile
import threading
import uuid
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Set

logger = logging.getLogger(__name__)


def _current_umask() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return umask


class IgnoreStore:
    """Manages which players each player ignores.

    All reads and writes of the registry go through one lock, so add/remove
    and membership checks on an owner are linearizable and dropping an empty
    owner entry cannot race with a concurrent add. Persistence runs on a
    single background worker and never holds the registry lock while writing.
    """

    def __init__(self, path):
        self.path = Path(path)
        # owner -> targets the owner ignores; a set is never kept empty
        self.ignore_lists: Dict[uuid.UUID, Set[uuid.UUID]] = {}
        self._lock = threading.RLock()
        self._save_lock = threading.Lock()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="ignore-store-save")
        # Guards the closed flag together with scheduling on the executor
        self._executor_lock = threading.RLock()
        self._closed = False
        self._file_mode = 0o666 & ~_current_umask()

    def load(self) -> bool:
        """
        Replace the in-memory registry with the contents of the backing file.

        A missing file is not an error. Unreadable or malformed files are
        logged and leave the current registry untouched.

        Returns:
            True if the registry was replaced, False otherwise
        """
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except FileNotFoundError:
            logger.info(f"No ignore list found at {self.path}, starting with empty lists")
            return False
        except OSError as e:
            logger.error(f"Failed to load ignore list from {self.path}: {e}")
            return False
        except (ValueError, RecursionError) as e:
            logger.error(f"Invalid ignore list format in {self.path}, keeping current lists: {e}")
            return False

        if raw is None:
            return False

        try:
            loaded = self._parse(raw)
        except (ValueError, TypeError, AttributeError) as e:
            logger.error(f"Invalid ignore list format in {self.path}, keeping current lists: {e}")
            return False

        with self._lock:
            self.ignore_lists = loaded
        logger.info(f"Loaded ignore list with {len(loaded)} player entries")
        return True

    @staticmethod
    def _parse(raw) -> Dict[uuid.UUID, Set[uuid.UUID]]:
        if not isinstance(raw, dict):
            raise ValueError(f"expected an object, got {type(raw).__name__}")

        loaded: Dict[uuid.UUID, Set[uuid.UUID]] = {}
        for owner_str, targets in raw.items():
            if not isinstance(targets, list):
                raise ValueError(f"targets of {owner_str} must be a list")
            owner = uuid.UUID(owner_str)
            ignored = {uuid.UUID(target_str) for target_str in targets}
            if ignored:
                loaded[owner] = ignored
        return loaded

    def snapshot(self) -> Dict[str, List[str]]:
        """Return the registry in its serialized form."""
        with self._lock:
            return {
                str(owner): sorted(str(target) for target in targets)
                for owner, targets in sorted(self.ignore_lists.items(), key=lambda item: str(item[0]))
                if targets
            }

    def save(self) -> Optional[Future]:
        """Schedule a full write of the registry without blocking the caller."""
        with self._executor_lock:
            if not self._closed:
                try:
                    return self._executor.submit(self.save_sync)
                except RuntimeError as e:
                    logger.warning(f"Save worker unavailable ({e}), saving synchronously")
                    self.save_sync()
                    return None

        logger.warning("Ignore store is closed, saving synchronously")
        self.save_sync()
        return None

    def save_sync(self) -> bool:
        """
        Write the registry to disk on the calling thread.

        The file is replaced atomically. Errors are logged and swallowed, the
        in-memory registry stays authoritative and the next save retries in full.

        Returns:
            True if the file was written, False otherwise
        """
        with self._save_lock:
            data = self.snapshot()
            tmp_path = None
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                fd, tmp_path = tempfile.mkstemp(
                    prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
                )
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                    f.write("\n")
                # mkstemp creates 0600; keep the existing file's mode or the umask default
                try:
                    mode = os.stat(self.path).st_mode & 0o777
                except FileNotFoundError:
                    mode = self._file_mode
                os.chmod(tmp_path, mode)
                os.replace(tmp_path, self.path)
                tmp_path = None
                logger.debug(f"Saved ignore list with {len(data)} player entries to {self.path}")
                return True
            except OSError as e:
                logger.error(f"Failed to save ignore list to {self.path}: {e}")
                return False
            finally:
                if tmp_path is not None and os.path.exists(tmp_path):
                    os.remove(tmp_path)

    def close(self):
        """Wait for pending background saves and stop the save worker."""
        with self._executor_lock:
            self._closed = True
        self._executor.shutdown(wait=True)

    def add_ignore(self, owner: uuid.UUID, target: uuid.UUID) -> bool:
        """Add target to owner's list. Returns True if the list changed."""
        with self._lock:
            targets = self.ignore_lists.setdefault(owner, set())
            if target in targets:
                return False
            targets.add(target)

        logger.info(f"Player {owner} now ignoring {target}")
        self.save()
        return True

    def remove_ignore(self, owner: uuid.UUID, target: uuid.UUID) -> bool:
        """Remove target from owner's list. Returns True if it was there."""
        with self._lock:
            targets = self.ignore_lists.get(owner)
            if targets is None or target not in targets:
                return False
            targets.discard(target)
            if not targets:
                del self.ignore_lists[owner]

        logger.info(f"Player {owner} no longer ignoring {target}")
        self.save()
        return True

    def is_ignoring(self, owner: uuid.UUID, target: uuid.UUID) -> bool:
        """Check if owner has target on their ignore list."""
        with self._lock:
            targets = self.ignore_lists.get(owner)
            return targets is not None and target in targets

    def get_ignored_players(self, owner: uuid.UUID) -> FrozenSet[uuid.UUID]:
        """Get a read-only snapshot of the players owner ignores."""
        with self._lock:
            return frozenset(self.ignore_lists.get(owner, ()))

    def owners(self) -> FrozenSet[uuid.UUID]:
        """Get every player that currently ignores someone."""
        with self._lock:
            return frozenset(self.ignore_lists)
