"""
Local key-value storage for the saved profile.

The store only moves raw strings under a key, the way browser localStorage
does; the session controller owns the JSON shape of the profile itself.
"""
import json
import threading
from pathlib import Path
from typing import Dict, Optional, Protocol

from loguru import logger

from config import STORAGE_KEY, STORAGE_PATH


class ProfileStore(Protocol):
    def load(self) -> Optional[str]:
        ...

    def save(self, value: str) -> None:
        ...

    def clear(self) -> None:
        ...


class InMemoryProfileStore:
    def __init__(self, value: Optional[str] = None) -> None:
        self.value = value

    def load(self) -> Optional[str]:
        return self.value

    def save(self, value: str) -> None:
        self.value = value

    def clear(self) -> None:
        self.value = None


class JsonFileProfileStore:
    """Keeps entries in a small JSON document on disk, one string per key."""

    def __init__(self, path: Path = STORAGE_PATH, key: str = STORAGE_KEY) -> None:
        self.path = Path(path)
        self.key = key
        self._lock = threading.Lock()

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError, RecursionError) as e:
            logger.warning("Ignoring unreadable storage file {}: {}", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring storage file {}: not a JSON object", self.path)
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        tmp_path.replace(self.path)

    def load(self) -> Optional[str]:
        with self._lock:
            return self._read_all().get(self.key)

    def save(self, value: str) -> None:
        with self._lock:
            data = self._read_all()
            data[self.key] = value
            self._write_all(data)
        logger.debug("Saved storage entry {} ({} chars)", self.key, len(value))

    def clear(self) -> None:
        with self._lock:
            data = self._read_all()
            if data.pop(self.key, None) is None:
                return
            self._write_all(data)
        logger.debug("Removed storage entry {}", self.key)
