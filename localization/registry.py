"""
Registry of texts currently rendered somewhere in the UI.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger("UrbanPulse.TextRegistry")


@dataclass(frozen=True)
class RegisteredText:
    key: str
    source_text: str
    last_seen: float


class TextRegistry:
    """
    Last-write-wins mapping of translation key -> most recent source text.

    Entries are overwritten on every render and never deleted, so the size is
    bounded by the number of distinct keys in the app.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self.clock = clock
        self._entries: dict[str, RegisteredText] = {}
        self.lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def register(self, key: str, source_text: str) -> None:
        entry = RegisteredText(key=key, source_text=source_text, last_seen=self.clock())
        with self.lock:
            previous = self._entries.get(key)
            self._entries[key] = entry
        if previous is None or previous.source_text != source_text:
            logger.debug(f"Registered source text for '{key}'")

    def get(self, key: str) -> RegisteredText | None:
        with self.lock:
            return self._entries.get(key)

    def snapshot(self) -> list[tuple[str, str]]:
        """Copy of (key, source_text) pairs, safe to iterate while others register."""
        with self.lock:
            return [(entry.key, entry.source_text) for entry in self._entries.values()]
