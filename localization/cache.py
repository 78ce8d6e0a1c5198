"""
Free-text translation cache with a fixed time-to-live.

Entries are keyed by the exact (source, target, text) triple; no case or
whitespace normalisation happens. Expiry is checked on read: an entry older
than the TTL is a miss and is dropped from memory at that point. Expired
rows are also skipped when the persisted payload is loaded.
"""

import asyncio
import json
import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from .errors import PersistenceError
from .storage import KeyValueStore

logger = logging.getLogger("UrbanPulse.TranslationCache")

CACHE_SCHEMA_VERSION = 1
DEFAULT_TTL_SECONDS = 7 * 24 * 60 * 60

CacheKey = tuple[str, str, str]


@dataclass(frozen=True)
class CacheEntry:
    translated_text: str
    stored_at: float


class TranslationCache:
    """
    In-memory cache mirrored to a KeyValueStore under a single key.

    The persisted form is
    ``{"version": 1, "entries": [[source, target, text, translated, stored_at], ...]}``.
    Payloads with any other version are ignored.
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        storage_key: str = "@urbanpulse_translation_cache",
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.store = store
        self.storage_key = storage_key
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._entries: dict[CacheKey, CacheEntry] = {}
        self.lock = threading.Lock()
        self._save_lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: CacheKey) -> bool:
        return key in self._entries

    def is_fresh(self, entry: CacheEntry, now: Optional[float] = None) -> bool:
        now = self.clock() if now is None else now
        return now - entry.stored_at < self.ttl_seconds

    # ------------------------------------------------------------------
    # Lookup / store
    # ------------------------------------------------------------------

    def get(self, source_lang: str, target_lang: str, text: str) -> Optional[str]:
        """Return the cached translation, or None on a miss or expired entry."""
        key = (source_lang, target_lang, text)
        with self.lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if not self.is_fresh(entry):
                del self._entries[key]
                logger.debug(f"Expired cache entry for {source_lang}->{target_lang}")
                return None
        return entry.translated_text

    def put(self, source_lang: str, target_lang: str, text: str, translated_text: str) -> None:
        """Store a translation stamped with the current time and persist the cache."""
        self._store_entry(source_lang, target_lang, text, translated_text)
        self._save()

    async def aput(self, source_lang: str, target_lang: str, text: str, translated_text: str) -> None:
        """put() for coroutines: the entry is visible at once, the store is written off the event loop."""
        self._store_entry(source_lang, target_lang, text, translated_text)
        await asyncio.to_thread(self._save)

    def _store_entry(self, source_lang: str, target_lang: str, text: str, translated_text: str) -> None:
        with self.lock:
            self._entries[(source_lang, target_lang, text)] = CacheEntry(
                translated_text=translated_text,
                stored_at=self.clock(),
            )

    def clear(self) -> None:
        with self.lock:
            self._entries.clear()
        if self.store is None:
            return
        with self._save_lock:
            try:
                self.store.remove(self.storage_key)
                logger.info("Translation cache cleared")
            except PersistenceError as e:
                logger.error(f"Error clearing translation cache: {e}")

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self) -> int:
        """Replace in-memory entries with the persisted ones. Returns the count loaded."""
        if self.store is None:
            return 0
        try:
            raw = self.store.get(self.storage_key)
        except PersistenceError as e:
            logger.error(f"Error loading translation cache: {e}")
            return 0
        if not raw:
            return 0

        entries = self._deserialise(raw)
        with self.lock:
            self._entries = entries
        logger.info(f"Loaded {len(entries)} cached translations")
        return len(entries)

    def _serialise(self) -> str:
        rows = [
            [source, target, text, entry.translated_text, entry.stored_at]
            for (source, target, text), entry in self._entries.items()
        ]
        return json.dumps(
            {"version": CACHE_SCHEMA_VERSION, "entries": rows},
            ensure_ascii=False,
        )

    def _deserialise(self, raw: str) -> dict[CacheKey, CacheEntry]:
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Discarding unreadable translation cache: {e}")
            return {}

        if not isinstance(data, dict) or data.get("version") != CACHE_SCHEMA_VERSION:
            logger.warning("Discarding translation cache with unknown schema version")
            return {}

        now = self.clock()
        entries: dict[CacheKey, CacheEntry] = {}
        skipped = 0
        for row in data.get("entries") or []:
            try:
                source, target, text, translated, stored_at = row
                entry = CacheEntry(translated_text=str(translated), stored_at=float(stored_at))
            except (TypeError, ValueError):
                skipped += 1
                continue
            if self.is_fresh(entry, now):
                entries[(str(source), str(target), str(text))] = entry
        if skipped:
            logger.warning(f"Skipped {skipped} malformed cache rows")
        return entries

    def _save(self) -> None:
        if self.store is None:
            return
        # Snapshot inside the save lock so an older payload never lands last
        with self._save_lock:
            with self.lock:
                payload = self._serialise()
            try:
                self.store.set(self.storage_key, payload)
            except PersistenceError as e:
                logger.error(f"Error saving translation cache: {e}")
