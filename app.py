"""
UrbanPulse - localization console

A Streamlit front end that owns the LocalizationService instance and
exercises it: language switching, keyed UI text and free-text translation.
"""

import asyncio
import atexit
import logging
import threading
from concurrent.futures import Future
from typing import Any, Coroutine

import streamlit as st

from localization import LANGUAGES, LanguageChangeEvent, LocalizationService, get_language
from settings import settings
from utils.logging_handler import clear_logs, get_log_entries, setup_logging
from utils.text_utils import interpolate

st.set_page_config(
    page_title="UrbanPulse",
    page_icon="🏙️",
    layout="wide",
    initial_sidebar_state="expanded",
)

logger = setup_logging(settings.log_level)


class ServiceRuntime:
    """
    Runs the service's coroutines on one long-lived event loop thread, so
    the HTTP client and the language-change lock always see the same loop.
    """

    def __init__(self, service: LocalizationService):
        self.service = service
        self.loop = asyncio.new_event_loop()
        self.thread = threading.Thread(target=self.loop.run_forever, daemon=True)
        self.thread.start()

    def submit(self, coro: Coroutine[Any, Any, Any]) -> Future:
        return asyncio.run_coroutine_threadsafe(coro, self.loop)

    def run(self, coro: Coroutine[Any, Any, Any], timeout: float = 60.0) -> Any:
        return self.submit(coro).result(timeout=timeout)

    def shutdown(self) -> None:
        logger.info("Shutting down localization runtime...")
        try:
            self.run(self.service.aclose(), timeout=5.0)
        finally:
            self.loop.call_soon_threadsafe(self.loop.stop)


def log_language_change(event: LanguageChangeEvent) -> None:
    logging.getLogger("UrbanPulse.App").info(
        f"Revision {event.revision}: {event.previous_language} -> "
        f"{event.current_language}, {len(event.translations)} texts re-translated"
    )


@st.cache_resource
def get_runtime() -> ServiceRuntime:
    """Create the process-wide service (composition root)."""
    service = LocalizationService()
    service.load()
    service.on_language_changed(log_language_change)

    runtime = ServiceRuntime(service)
    atexit.register(runtime.shutdown)
    return runtime


def render_sidebar(runtime: ServiceRuntime):
    service = runtime.service
    t = service.t

    with st.sidebar:
        st.subheader(t("profile.language", "Language"))

        codes = [lang.code for lang in LANGUAGES if lang.code in service.supported_languages]
        labels = [f"{get_language(c).native_name} ({get_language(c).name})" for c in codes]
        current_index = codes.index(service.current_language) if service.current_language in codes else 0

        selected_label = st.selectbox(
            t("language.title", "Choose App Language"),
            options=labels,
            index=current_index,
            label_visibility="collapsed",
        )
        selected_code = codes[labels.index(selected_label)]

        if selected_code != service.current_language:
            with st.spinner(t("language.updating", "Updating language...")):
                runtime.run(service.change_language(selected_code))
            st.rerun()

        st.caption(f"Revision {service.revision} · {service.state.value}")

        st.divider()
        with st.expander(f"🔧 {t('console.title', 'Debug Console')}", expanded=False):
            if st.button(t("console.clear", "Clear Logs")):
                clear_logs()
                st.rerun()

            logs = get_log_entries()
            if logs:
                st.code(
                    "\n".join(f"[{log['timestamp']}] {log['level']}: {log['message']}" for log in logs),
                    language="log",
                )
            else:
                st.info(t("console.empty", "No logs yet"))


def render_dashboard(service: LocalizationService):
    t = service.t

    st.title(f"🏙️ {t('landing.welcome', 'Welcome to UrbanPulse')}")
    st.markdown(f"*{t('landing.tagline', 'Your smart city companion')}*")

    st.subheader(t("dashboard.todaysServices", "Today's Services"))
    services = [
        ("🗑️", "dashboard.garbageCollection", "Garbage Collection", "dashboard.onSchedule", "On Schedule"),
        ("💧", "dashboard.waterSupply", "Water Supply", "dashboard.normal", "Normal"),
        ("⚡", "dashboard.powerUpdates", "Power Updates", "dashboard.normal", "Normal"),
        ("🏥", "dashboard.healthServices", "Health Services", "dashboard.normal", "Normal"),
    ]
    for col, (icon, key, fallback, status_key, status_fallback) in zip(st.columns(4), services):
        with col:
            with st.container(border=True):
                st.markdown(f"{icon} **{t(key, fallback)}**")
                st.caption(t(status_key, status_fallback))

    st.subheader(t("emergency.title", "Emergency Services"))
    st.caption(t("emergency.selectService", "Select an emergency service to call"))
    for col, (key, fallback, number) in zip(
        st.columns(3),
        [
            ("emergency.ambulance", "Ambulance", "108"),
            ("emergency.police", "Police", "100"),
            ("emergency.fire", "Fire", "101"),
        ],
    ):
        with col:
            name = t(key, fallback)
            if st.button(f"📞 {name}", use_container_width=True):
                st.warning(interpolate(t("emergency.callMessage", "Are you sure you want to call {number}?"), number=number))


def render_translation_widget(runtime: ServiceRuntime):
    service = runtime.service
    t = service.t

    st.subheader(f"🌐 {t('translation.title', 'Translate Text')}")
    text = st.text_area(
        t("translation.inputPlaceholder", "Type or paste text to translate"),
        key="free_text_input",
        label_visibility="collapsed",
    )

    c_translate, c_clear = st.columns([1, 1])
    with c_translate:
        if st.button(t("translation.translate", "Translate"), type="primary", disabled=not text.strip()):
            detected = runtime.run(service.detect_language(text))
            st.caption(interpolate(
                t("translation.detected", "Detected language: {language}"),
                language=get_language(detected).native_name,
            ))
            st.session_state.free_text_result = runtime.run(
                service.translate_free_text(text, detected, service.current_language)
            )
    with c_clear:
        if st.button(t("translation.clearCache", "Clear Translation Cache")):
            service.clear_cache()
            st.toast(t("common.done", "Done"), icon="✅")

    if st.session_state.get("free_text_result"):
        st.success(st.session_state.free_text_result)


def main():
    runtime = get_runtime()

    render_sidebar(runtime)
    render_dashboard(runtime.service)
    st.divider()
    render_translation_widget(runtime)


if __name__ == "__main__":
    main()
