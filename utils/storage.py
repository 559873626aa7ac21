"""Key-value backends used by the expense store for persistence."""
import contextlib
import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

from utils.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class KeyValueBackend(Protocol):
    """Anything that can read and write a string blob under a key."""

    def read(self, key: str) -> Optional[str]:
        ...

    def write(self, key: str, blob: str) -> None:
        ...


class InMemoryBackend:
    """Dict-backed store. ``fail_writes`` simulates a full storage quota."""

    def __init__(self, initial: Optional[Dict[str, str]] = None, fail_writes: bool = False):
        self.data: Dict[str, str] = dict(initial or {})
        self.fail_writes = fail_writes

    def read(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def write(self, key: str, blob: str) -> None:
        if self.fail_writes:
            raise PersistenceError(f"Storage quota exceeded while writing '{key}'")
        self.data[key] = blob


class JsonFileBackend:
    """
    Stores every key in a single JSON object on disk.

    A missing or unreadable file behaves like an empty store. Writes go to a
    temporary sibling file which then replaces the original.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def read(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def write(self, key: str, blob: str) -> None:
        data = self._load()
        data[key] = blob
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp_path.unlink()
            logger.error(f"Failed to write key '{key}' to {self.path}: {e}")
            raise PersistenceError(f"Failed to write '{key}' to {self.path}: {e}") from e
        logger.debug(f"Wrote {len(blob)} chars under key '{key}' to {self.path}")

    def _load(self) -> Dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read storage file {self.path}: {e}. Treating it as empty.")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Storage file {self.path} does not hold a JSON object. Treating it as empty.")
            return {}
        return data
