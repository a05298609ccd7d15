"""
Persistence service for the Soccer Game Tracker.

This module stores roster settings and completed games as JSON documents, one
file per fixed key. Every write is a full-snapshot overwrite, so failures are
logged and swallowed: in-memory state stays authoritative for the session.
"""
import json
import logging
import os
import tempfile
from typing import Any, List, Optional

from ..utils import get_data_dir

logger = logging.getLogger(__name__)


class PersistenceService:
    """
    Key-value store backed by JSON files in a data directory.

    ``load`` returns None when a key has never been saved or cannot be read;
    ``save`` returns False when the write fails. Neither raises.
    """

    def __init__(self, data_dir: Optional[str] = None):
        """
        Initialize PersistenceService.

        Args:
            data_dir: Directory for JSON documents (defaults to configured data dir)
        """
        self.data_dir = data_dir or get_data_dir()

    def path_for(self, key: str) -> str:
        """Return the file path used for a key."""
        return os.path.join(self.data_dir, f"{key}.json")

    def load(self, key: str) -> Optional[Any]:
        """
        Load the value stored under a key.

        Args:
            key: Storage key

        Returns:
            Decoded JSON value, or None if missing or unreadable
        """
        file_path = self.path_for(key)
        if not os.path.exists(file_path):
            return None

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Could not load %s from %s: %s", key, file_path, e)
            return None

    def save(self, key: str, value: Any) -> bool:
        """
        Save a JSON-serializable value under a key.

        The document is written to a temporary file first and then moved into
        place, so a failed write never truncates the previous snapshot.

        Args:
            key: Storage key
            value: JSON-serializable value

        Returns:
            True if saved, False if the write failed
        """
        file_path = self.path_for(key)
        tmp_path = None
        try:
            os.makedirs(self.data_dir, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.data_dir, prefix=f".{key}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(value, f, indent=2)
            os.replace(tmp_path, file_path)
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error("Could not save %s to %s: %s", key, file_path, e)
            if tmp_path and os.path.exists(tmp_path):
                try:
                    os.remove(tmp_path)
                except OSError:
                    logger.debug("Could not remove temporary file %s", tmp_path)
            return False

    def delete(self, key: str) -> bool:
        """Remove a stored key. Returns True if a file was removed."""
        file_path = self.path_for(key)
        try:
            os.remove(file_path)
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.error("Could not delete %s: %s", file_path, e)
            return False

    def list_keys(self) -> List[str]:
        """Return the keys currently stored, sorted by name."""
        if not os.path.isdir(self.data_dir):
            return []
        return sorted(
            name[:-len(".json")]
            for name in os.listdir(self.data_dir)
            if name.endswith(".json") and not name.startswith(".")
        )
