import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

KEY_PREFIX = "walkathon-"
PARTICIPANTS_KEY = f"{KEY_PREFIX}participants"
CHECKED_IN_KEY = f"{KEY_PREFIX}checked-in"
CHECKED_OUT_KEY = f"{KEY_PREFIX}checked-out"
LAST_SYNC_KEY = f"{KEY_PREFIX}last-sync"
SHEET_DATA_KEY = f"{KEY_PREFIX}sheet-data"


class LocalStore:
    """
    Durable key -> text mapping backed by one file per key in a directory.

    Survives process restarts. Holds the cached spreadsheet data, the last sync
    time, the attendance sets, and the registration list when no remote store is
    configured.
    """

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def __repr__(self):
        return f"LocalStore({self.directory})"

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        # write then rename so a crash never leaves a half-written file behind
        tmp_path = path.with_suffix(".tmp")
        tmp_path.write_text(value, encoding="utf-8")
        os.replace(tmp_path, path)

    def get_json(self, key: str, default=None):
        """
        Loads and decodes a JSON value.

        Unreadable JSON is logged and treated as missing.

        Args:
            key (str): Storage key.
            default: Returned when the key is missing or corrupt.
        """
        text = self.get(key)
        if text is None:
            return default
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            logger.error("Ignoring corrupt local data for %s: %s", key, e)
            return default

    def set_json(self, key: str, value) -> None:
        self.set(key, json.dumps(value, indent=2))
