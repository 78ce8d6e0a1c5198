"""
MyMemory translation API client with retry logic.
"""

import logging
from typing import Any, Optional

import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    before_sleep_log,
)

from localization.errors import TranslationProviderError
from settings import settings
from utils.text_utils import split_surrounding_whitespace, split_text_smart

from .base import TranslationProvider

logger = logging.getLogger("UrbanPulse.MyMemoryClient")

# MyMemory rejects queries longer than this
MAX_QUERY_CHARS = 500

_RETRYABLE = (httpx.TransportError,)


class MyMemoryClient(TranslationProvider):
    """
    Client for the free MyMemory HTTP API (no key required).
    Long texts are split into chunks that fit the per-request limit.
    """

    name = "mymemory"

    def __init__(
        self,
        base_url: Optional[str] = None,
        email: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url: str = base_url or settings.mymemory_url
        self.email: Optional[str] = email if email is not None else settings.mymemory_email
        self.timeout: float = timeout or settings.request_timeout
        self._client: Optional[httpx.AsyncClient] = client
        self._owns_client = client is None

        logger.info(f"MyMemory client initialised: {self.base_url}")

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    @retry(
        stop=stop_after_attempt(settings.max_retries),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        retry=retry_if_exception_type(_RETRYABLE),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    async def _query(self, text: str, langpair: str) -> dict[str, Any]:
        params = {"q": text, "langpair": langpair}
        if self.email:
            params["de"] = self.email

        response = await self.client.get(self.base_url, params=params)
        if response.status_code != 200:
            raise TranslationProviderError(
                f"MyMemory returned HTTP {response.status_code}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise TranslationProviderError(f"MyMemory returned invalid JSON: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("responseData"), dict):
            raise TranslationProviderError("MyMemory response has no responseData")

        # responseStatus arrives as int on success and sometimes as a string on errors
        if str(data.get("responseStatus")) != "200":
            details = data.get("responseDetails") or "unknown error"
            raise TranslationProviderError(
                f"MyMemory status {data.get('responseStatus')}: {details}"
            )
        return data

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    async def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        if not text or not text.strip():
            return text

        chunks = split_text_smart(text, MAX_QUERY_CHARS)
        if len(chunks) > 1:
            logger.info(f"Text too large ({len(text)} chars), sending {len(chunks)} chunks")

        translated_chunks = []
        for chunk in chunks:
            leading, core, trailing = split_surrounding_whitespace(chunk)
            if not core:
                translated_chunks.append(chunk)
                continue
            translated = await self._translate_chunk(core, source_lang, target_lang)
            translated_chunks.append(f"{leading}{translated}{trailing}")

        return "".join(translated_chunks)

    async def _translate_chunk(self, text: str, source_lang: str, target_lang: str) -> str:
        logger.debug(f"Translating {source_lang}->{target_lang}: {text[:50]}...")
        data = await self._query(text, f"{source_lang}|{target_lang}")

        translated = data["responseData"].get("translatedText")
        if not isinstance(translated, str) or not translated.strip():
            raise TranslationProviderError("MyMemory returned empty translatedText")
        return translated

    # ------------------------------------------------------------------
    # Detection
    # ------------------------------------------------------------------

    async def detect(self, text: str) -> str:
        data = await self._query(text[:MAX_QUERY_CHARS], "auto|en")
        response_data = data["responseData"]
        detected = response_data.get("detectedSourceLanguage") or response_data.get(
            "detectedLanguage"
        )
        if not isinstance(detected, str) or not detected.strip():
            raise TranslationProviderError("MyMemory did not report a detected language")
        return detected
