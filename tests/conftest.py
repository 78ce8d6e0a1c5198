"""
Shared fixtures: an in-memory provider, a controllable clock and a service
wired to both.
"""

import asyncio
import threading
from typing import Callable, Optional

import pytest

from localization.errors import TranslationProviderError
from localization.storage import MemoryStore
from services.base import TranslationProvider


class FakeProvider(TranslationProvider):
    """Deterministic provider that tags text with the target language."""

    name = "fake"

    def __init__(
        self,
        fail: bool = False,
        detected: str = "en",
        gate: Optional[asyncio.Event] = None,
        translate_func: Optional[Callable[[str, str, str], str]] = None,
    ):
        self.fail = fail
        self.detected = detected
        self.gate = gate
        self.translate_func = translate_func or (lambda text, src, tgt: f"[{tgt}] {text}")
        self.calls: list[tuple[str, str, str]] = []
        self.detect_calls: list[str] = []
        self.closed = False

    async def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        self.calls.append((text, source_lang, target_lang))
        if self.gate is not None:
            await self.gate.wait()
        if self.fail:
            raise TranslationProviderError("simulated outage")
        return self.translate_func(text, source_lang, target_lang)

    async def detect(self, text: str) -> str:
        self.detect_calls.append(text)
        if self.fail:
            raise TranslationProviderError("simulated outage")
        return self.detected

    async def aclose(self) -> None:
        self.closed = True


class ThreadRecordingStore(MemoryStore):
    """MemoryStore that records which thread performed each write."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        super().__init__(initial)
        self.writer_threads: list[int] = []

    def set(self, key: str, value: str) -> None:
        self.writer_threads.append(threading.get_ident())
        super().set(key, value)


class FakeClock:
    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def make_service(clock):
    """Build a LocalizationService over a MemoryStore and the given provider."""
    from localization.service import LocalizationService
    from services.translation_client import RemoteTranslationClient

    def _make(provider: TranslationProvider, store=None, **kwargs) -> LocalizationService:
        service = LocalizationService(
            store=store if store is not None else MemoryStore(),
            remote=RemoteTranslationClient(provider=provider),
            clock=clock,
            **kwargs,
        )
        service.load()
        return service

    return _make
