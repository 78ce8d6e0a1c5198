"""
Tests for LocalizationService: lookups, free-text translation and the
language change run.
"""

import asyncio
import threading
from unittest.mock import patch

import pytest

from localization.errors import ConcurrentLanguageChangeError
from localization.service import LanguageChangeState
from localization.storage import JsonFileStore, LanguageStore, MemoryStore

from conftest import FakeProvider, ThreadRecordingStore


class TestStartup:
    def test_loads_saved_language(self, make_service, provider):
        store = MemoryStore({"@urbanpulse_language": "te"})
        service = make_service(provider, store=store)

        assert service.current_language == "te"
        assert service.is_loading is False
        assert service.revision == 0
        assert service.state is LanguageChangeState.IDLE

    def test_is_loading_until_load(self, clock, provider):
        from localization.service import LocalizationService
        from services.translation_client import RemoteTranslationClient

        service = LocalizationService(
            store=MemoryStore(), remote=RemoteTranslationClient(provider=provider), clock=clock
        )
        assert service.is_loading is True
        assert service.current_language == "en"


class TestStaticLookup:
    def test_t_uses_current_language(self, make_service, provider):
        service = make_service(provider, store=MemoryStore({"@urbanpulse_language": "hi"}))
        assert service.t("profile.language") == "भाषा"

    def test_t_falls_back_to_english_then_key(self, make_service, provider):
        service = make_service(provider, store=MemoryStore({"@urbanpulse_language": "te"}))

        assert service.t("translation.title") == "Translate Text"
        assert service.t("nothing.here") == "nothing.here"

    def test_t_registers_fallback_text(self, make_service, provider):
        service = make_service(provider)
        service.t("dashboard.viewAll", "View All")
        service.t("dashboard.viewAll", "See everything")

        assert service.registry.snapshot() == [("dashboard.viewAll", "See everything")]

    def test_t_without_fallback_does_not_register(self, make_service, provider):
        service = make_service(provider)
        service.t("dashboard.viewAll")
        assert len(service.registry) == 0

    def test_t_empty_inputs(self, make_service, provider):
        service = make_service(provider)
        assert service.t("") == ""
        assert service.t("", "Plain fallback") == "Plain fallback"

    def test_t_literal_text_reads_cache(self, make_service, provider):
        service = make_service(provider, store=MemoryStore({"@urbanpulse_language": "hi"}))
        service.cache.put("en", "hi", "Good morning", "सुप्रभात")

        assert service.t("Good morning") == "सुप्रभात"
        assert service.t("Good evening") == "Good evening"

    def test_t_bare_fallback_with_dots_reads_cache(self, make_service, provider):
        service = make_service(provider, store=MemoryStore({"@urbanpulse_language": "hi"}))
        service.cache.put("en", "hi", "Loading...", "लोड हो रहा है...")

        assert service.t("", "Loading...") == "लोड हो रहा है..."
        assert service.t("", "Saving...") == "Saving..."
        assert len(service.registry) == 0

    def test_t_never_raises(self, make_service, provider):
        service = make_service(provider)
        with patch.object(service.resolver, "resolve", side_effect=RuntimeError("boom")):
            assert service.t("dashboard.viewAll") == "dashboard.viewAll"


class TestFreeText:
    def test_translates_and_caches(self, make_service, provider):
        service = make_service(provider)

        first = asyncio.run(service.translate_free_text("Hello", "en", "hi"))
        second = asyncio.run(service.translate_free_text("Hello", "en", "hi"))

        assert first == second == "[hi] Hello"
        assert provider.calls == [("Hello", "en", "hi")]

    @pytest.mark.parametrize("text", ["", "Hello", "   "])
    def test_same_language_short_circuits(self, make_service, provider, text):
        service = make_service(provider)

        with patch.object(service.cache, "get", wraps=service.cache.get) as cache_get:
            result = asyncio.run(service.translate_free_text(text, "hi", "hi"))

        assert result == text
        cache_get.assert_not_called()
        assert provider.calls == []

    def test_blank_text_short_circuits(self, make_service, provider):
        service = make_service(provider)
        assert asyncio.run(service.translate_free_text("  ", "en", "hi")) == "  "
        assert provider.calls == []

    def test_case_variants_cached_independently(self, make_service, provider):
        service = make_service(provider)

        asyncio.run(service.translate_free_text("Hello", "en", "hi"))
        asyncio.run(service.translate_free_text("hello", "en", "hi"))

        assert len(provider.calls) == 2
        assert service.cache.get("en", "hi", "Hello") == "[hi] Hello"
        assert service.cache.get("en", "hi", "hello") == "[hi] hello"

    def test_provider_failure_returns_input(self, make_service):
        provider = FakeProvider(fail=True)
        service = make_service(provider)

        assert asyncio.run(service.translate_free_text("Hello", "en", "hi")) == "Hello"
        assert len(service.cache) == 0

    def test_identity_result_not_cached(self, make_service):
        provider = FakeProvider(translate_func=lambda text, src, tgt: text)
        service = make_service(provider)

        assert asyncio.run(service.translate_free_text("UrbanPulse", "en", "hi")) == "UrbanPulse"
        assert len(service.cache) == 0

    def test_defaults_detect_source_and_use_current_target(self, make_service):
        provider = FakeProvider(detected="te")
        service = make_service(provider, store=MemoryStore({"@urbanpulse_language": "hi"}))

        result = asyncio.run(service.translate_free_text("నీరు"))

        assert result == "[hi] నీరు"
        assert provider.calls == [("నీరు", "te", "hi")]

    def test_detected_source_equal_to_target_skips_provider(self, make_service):
        provider = FakeProvider(detected="en")
        service = make_service(provider)

        assert asyncio.run(service.translate_free_text("Hello")) == "Hello"
        assert provider.calls == []

    def test_batch_preserves_order(self, make_service, provider):
        service = make_service(provider)

        result = asyncio.run(service.translate_batch(["One", "Two", "Three"], "en", "te"))

        assert result == ["[te] One", "[te] Two", "[te] Three"]
        assert asyncio.run(service.translate_batch([], "en", "te")) == []

    def test_detect_failure_defaults_to_english(self, make_service):
        service = make_service(FakeProvider(fail=True))
        assert asyncio.run(service.detect_language("Bonjour")) == "en"

    def test_abandoned_wait_still_caches(self, make_service):
        async def scenario():
            gate = asyncio.Event()
            provider = FakeProvider(gate=gate)
            service = make_service(provider)

            caller = asyncio.create_task(service.translate_free_text("Hello", "en", "hi"))
            while not provider.calls:
                await asyncio.sleep(0)
            caller.cancel()
            with pytest.raises(asyncio.CancelledError):
                await caller

            gate.set()

            async def cached():
                while service.cache.get("en", "hi", "Hello") is None:
                    await asyncio.sleep(0)

            await asyncio.wait_for(cached(), timeout=1.0)
            return service

        service = asyncio.run(scenario())
        assert service.cache.get("en", "hi", "Hello") == "[hi] Hello"

    def test_cache_write_does_not_block_event_loop(self, make_service, provider):
        store = ThreadRecordingStore()
        service = make_service(provider, store=store)

        assert asyncio.run(service.translate_free_text("Hello", "en", "hi")) == "[hi] Hello"

        assert len(store.writer_threads) == 1
        assert store.writer_threads[0] != threading.get_ident()

    def test_concurrent_identical_requests_share_one_call(self, make_service, provider):
        service = make_service(provider)

        async def scenario():
            return await asyncio.gather(
                service.translate_free_text("Hello", "en", "hi"),
                service.translate_free_text("Hello", "en", "hi"),
            )

        assert asyncio.run(scenario()) == ["[hi] Hello", "[hi] Hello"]
        assert len(provider.calls) == 1

    def test_clear_cache(self, make_service, provider):
        service = make_service(provider)
        asyncio.run(service.translate_free_text("Hello", "en", "hi"))

        service.clear_cache()

        assert len(service.cache) == 0


class TestChangeLanguage:
    def test_end_to_end(self, make_service, provider):
        service = make_service(provider)
        service.t("a.b", "Hello")
        service.t("a.c", "World")

        asyncio.run(service.change_language("hi"))

        assert service.current_language == "hi"
        assert service.revision == 1
        assert service.state is LanguageChangeState.PUBLISHED
        assert dict(service.last_translations) == {"a.b": "[hi] Hello", "a.c": "[hi] World"}
        assert service.language_store.load() == "hi"

    def test_end_to_end_with_provider_failure(self, make_service):
        service = make_service(FakeProvider(fail=True))
        service.t("a.b", "Hello")
        service.t("a.c", "World")

        asyncio.run(service.change_language("hi"))

        assert service.current_language == "hi"
        assert service.revision == 1
        assert dict(service.last_translations) == {"a.b": "Hello", "a.c": "World"}

    def test_repeat_change_is_a_no_op(self, make_service, provider):
        service = make_service(provider)
        service.t("a.b", "Hello")

        asyncio.run(service.change_language("hi"))
        entries_before = dict(service.cache._entries)
        calls_before = list(provider.calls)

        asyncio.run(service.change_language("hi"))

        assert service.revision == 1
        assert dict(service.cache._entries) == entries_before
        assert provider.calls == calls_before

    def test_persistence_failure_keeps_new_language(self, make_service, provider):
        service = make_service(provider)
        with patch.object(service.language_store, "save", return_value=False):
            asyncio.run(service.change_language("te"))

        assert service.current_language == "te"
        assert service.revision == 1

    def test_survives_restart(self, make_service, provider, tmp_path):
        path = tmp_path / "storage.json"
        service = make_service(provider, store=JsonFileStore(path))
        asyncio.run(service.change_language("te"))

        assert LanguageStore(JsonFileStore(path)).load() == "te"
        assert make_service(provider, store=JsonFileStore(path)).current_language == "te"

    def test_corrupt_storage_file_is_rewritten(self, make_service, provider, tmp_path):
        path = tmp_path / "storage.json"
        path.write_text("{not json", encoding="utf-8")

        service = make_service(provider, store=JsonFileStore(path))
        asyncio.run(service.change_language("te"))
        asyncio.run(service.translate_free_text("Water", "en", "hi"))

        restarted = make_service(provider, store=JsonFileStore(path))
        assert restarted.current_language == "te"
        assert restarted.cache.get("en", "hi", "Water") == "[hi] Water"

    def test_unsupported_language_rejected(self, make_service, provider):
        service = make_service(provider)
        with pytest.raises(ValueError, match="Unsupported language"):
            asyncio.run(service.change_language("xx"))
        assert service.revision == 0

    def test_listeners_notified_once_per_change(self, make_service, provider):
        service = make_service(provider)
        service.t("a.b", "Hello")
        events = []
        unsubscribe = service.on_language_changed(events.append)

        asyncio.run(service.change_language("hi"))
        asyncio.run(service.change_language("hi"))

        assert len(events) == 1
        assert events[0].previous_language == "en"
        assert events[0].current_language == "hi"
        assert events[0].revision == 1
        assert dict(events[0].translations) == {"a.b": "[hi] Hello"}

        unsubscribe()
        asyncio.run(service.change_language("te"))
        assert len(events) == 1

    def test_failing_listener_does_not_break_publish(self, make_service, provider):
        service = make_service(provider)
        received = []

        def broken(event):
            raise RuntimeError("listener bug")

        service.on_language_changed(broken)
        service.on_language_changed(received.append)

        asyncio.run(service.change_language("hi"))

        assert service.revision == 1
        assert len(received) == 1

    def test_concurrent_changes_are_serialised(self, make_service, provider):
        service = make_service(provider)
        service.t("a.b", "Hello")
        events = []
        service.on_language_changed(events.append)

        async def scenario():
            await asyncio.gather(
                service.change_language("hi"),
                service.change_language("te"),
            )

        asyncio.run(scenario())

        assert service.current_language == "te"
        assert service.revision == 2
        assert [(e.previous_language, e.current_language) for e in events] == [
            ("en", "hi"),
            ("hi", "te"),
        ]
        assert service.is_translating is False

    def test_queued_change_to_new_current_is_dropped(self, make_service, provider):
        service = make_service(provider)
        service.t("a.b", "Hello")

        async def scenario():
            await asyncio.gather(
                service.change_language("hi"),
                service.change_language("hi"),
            )

        asyncio.run(scenario())
        assert service.revision == 1

    def test_overlap_fails_fast(self, make_service, provider):
        service = make_service(provider)
        service._translating = True

        with pytest.raises(ConcurrentLanguageChangeError):
            asyncio.run(service.change_language("hi"))

    def test_cancelled_change_leaves_state_untouched(self, make_service):
        async def scenario():
            gate = asyncio.Event()
            provider = FakeProvider(gate=gate)
            service = make_service(provider)
            service.t("a.b", "Hello")

            change = asyncio.create_task(service.change_language("hi"))
            while not provider.calls:
                await asyncio.sleep(0)
            assert service.state is LanguageChangeState.TRANSLATING
            change.cancel()
            with pytest.raises(asyncio.CancelledError):
                await change
            gate.set()
            return service

        service = asyncio.run(scenario())
        assert service.current_language == "en"
        assert service.revision == 0
        assert service.state is LanguageChangeState.IDLE
        assert service.is_translating is False
