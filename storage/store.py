"""
Key-value stores for persisted game data.

Values are opaque bytes; callers serialize and deserialize them.
Any store operation may raise StorageUnavailable.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Union

logger = logging.getLogger(__name__)


class StorageUnavailable(Exception):
    """The store cannot be read or written right now."""


class KeyValueStore:
    """Interface of a string-keyed byte store."""

    def get(self, key: str) -> Optional[bytes]:
        raise NotImplementedError

    def set(self, key: str, value: bytes):
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    """
    In-memory store.

    Set `available = False` to make every call raise StorageUnavailable,
    which is how tests simulate a blocked storage backend.
    """

    def __init__(self, initial: Optional[Dict[str, bytes]] = None):
        self.data: Dict[str, bytes] = dict(initial or {})
        self.available = True

    def _check(self):
        if not self.available:
            raise StorageUnavailable("memory store disabled")

    def get(self, key: str) -> Optional[bytes]:
        self._check()
        return self.data.get(key)

    def set(self, key: str, value: bytes):
        self._check()
        self.data[key] = bytes(value)


class JsonFileStore(KeyValueStore):
    """
    Store backed by one JSON object on disk: {key: value-as-text}.

    The whole file is rewritten on every set. A missing file reads as
    empty; an unreadable or corrupt file raises StorageUnavailable.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise StorageUnavailable(f"cannot read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageUnavailable(f"{self.path} does not hold a JSON object")
        return data

    def get(self, key: str) -> Optional[bytes]:
        value = self._load().get(key)
        if value is None:
            return None
        return str(value).encode("utf-8")

    def set(self, key: str, value: bytes):
        data = self._load()
        try:
            data[key] = bytes(value).decode("utf-8")
        except UnicodeDecodeError as e:
            raise StorageUnavailable(f"value for {key!r} is not UTF-8 text") from e

        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as e:
            raise StorageUnavailable(f"cannot write {self.path}: {e}") from e
        logger.debug("Stored %s in %s", key, self.path)
