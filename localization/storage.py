"""
Persisted key-value storage and the active-language store built on it.
"""

import json
import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from .errors import PersistenceError
from .languages import DEFAULT_LANGUAGE, supported_codes

logger = logging.getLogger("UrbanPulse.Storage")


class KeyValueStore(ABC):
    """
    String key -> string value persistence.

    Implementations raise PersistenceError on any read or write failure;
    callers decide whether that is fatal.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        pass


class MemoryStore(KeyValueStore):
    """Process-local store, mainly for tests and ephemeral sessions."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore(KeyValueStore):
    """Whole-file JSON object on disk. Every write rewrites the file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.lock = threading.Lock()

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists() or self.path.stat().st_size == 0:
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceError(f"Failed to read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise PersistenceError(f"Store file {self.path} does not hold a JSON object")
        return data

    def _write_all(self, data: dict[str, str]) -> None:
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
            tmp_path.replace(self.path)
        except OSError as e:
            raise PersistenceError(f"Failed to write {self.path}: {e}") from e

    def _read_for_update(self) -> tuple[dict[str, str], bool]:
        """Current contents and whether they were readable. A corrupt file reads as empty."""
        try:
            return self._read_all(), True
        except PersistenceError as e:
            logger.warning(f"Replacing unreadable store file: {e}")
            return {}, False

    def get(self, key: str) -> Optional[str]:
        with self.lock:
            value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        with self.lock:
            data, _ = self._read_for_update()
            data[key] = value
            self._write_all(data)

    def remove(self, key: str) -> None:
        with self.lock:
            data, readable = self._read_for_update()
            if key in data or not readable:
                data.pop(key, None)
                self._write_all(data)


class LanguageStore:
    """Persisted active language code. Failures are logged, never raised."""

    def __init__(
        self,
        store: KeyValueStore,
        storage_key: str = "@urbanpulse_language",
        default_language: str = DEFAULT_LANGUAGE,
        supported: Optional[list[str]] = None,
    ):
        self.store = store
        self.storage_key = storage_key
        self.default_language = default_language
        self.supported = supported or supported_codes()

    def load(self) -> str:
        """Return the saved language, or the default if absent or unreadable."""
        try:
            saved = self.store.get(self.storage_key)
        except PersistenceError as e:
            logger.error(f"Error loading language preference: {e}")
            return self.default_language

        if not saved:
            return self.default_language
        if saved not in self.supported:
            logger.warning(f"Ignoring unsupported saved language '{saved}'")
            return self.default_language
        return saved

    def save(self, code: str) -> bool:
        """Persist *code*. Returns False if the write failed."""
        try:
            self.store.set(self.storage_key, code)
        except PersistenceError as e:
            logger.error(f"Error saving language preference: {e}")
            return False
        logger.debug(f"Saved language preference '{code}'")
        return True
