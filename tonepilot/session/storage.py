"""Session key-value storage backends."""

import copy
import json
from pathlib import Path
from typing import Any

from loguru import logger

from tonepilot.errors import PersistenceError
from tonepilot.utils.helpers import ensure_dir, safe_filename


class InMemorySessionStorage:
    """
    Process-local key-value storage.

    Values are deep-copied on the way in and out so callers never share
    structures with the stored state. Lives as long as the object does,
    which matches a browser session's lifetime in a host process.
    """

    def __init__(self):
        self._data: dict[str, Any] = {}

    async def get(self, key: str) -> Any | None:
        if key not in self._data:
            return None
        return copy.deepcopy(self._data[key])

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    def clear(self) -> None:
        """Drop every key (host session end)."""
        self._data.clear()


class JsonFileSessionStorage:
    """
    Key-value storage backed by one JSON file per key.

    Files live in a single directory; the host deletes it (or calls clear())
    when the session ends.
    """

    def __init__(self, directory: Path):
        self.directory = ensure_dir(Path(directory).expanduser())

    def _get_path(self, key: str) -> Path:
        return self.directory / f"{safe_filename(key)}.json"

    async def get(self, key: str) -> Any | None:
        path = self._get_path(key)
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceError(f"Failed to read {path}: {e}") from e

    async def set(self, key: str, value: Any) -> None:
        path = self._get_path(key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            tmp_path.write_text(json.dumps(value, ensure_ascii=False), encoding="utf-8")
            tmp_path.replace(path)
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceError(f"Failed to write {path}: {e}") from e

    def clear(self) -> None:
        """Delete every stored key."""
        for path in self.directory.glob("*.json"):
            try:
                path.unlink()
            except OSError as e:
                logger.warning(f"Failed to remove session file {path}: {e}")
