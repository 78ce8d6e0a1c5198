"""
LLM translation client with OpenAI-compatible API and retry logic.
"""

import logging
import re
from typing import Optional

from openai import (
    AsyncOpenAI,
    APIConnectionError,
    APITimeoutError,
    InternalServerError,
    RateLimitError,
)
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    before_sleep_log,
)

from localization.errors import TranslationProviderError
from localization.languages import get_language, is_supported
from settings import settings

from .base import TranslationProvider

logger = logging.getLogger("UrbanPulse.LLMClient")

# Exception types that warrant a retry
_RETRYABLE = (
    ConnectionError,
    TimeoutError,
    APIConnectionError,
    APITimeoutError,
    InternalServerError,
    RateLimitError,
)

_LANGUAGE_CODE = re.compile(r"[a-z]{2,3}(?:[-_][a-z]{2,4})?")


def _language_label(code: str) -> str:
    if is_supported(code):
        lang = get_language(code)
        return f"{lang.name} ({lang.native_name})"
    return code


class LLMClient(TranslationProvider):
    """
    OpenAI-compatible LLM client with exponential backoff retry logic.
    Supports local LLM backends (LM Studio, AnythingLLM) and cloud providers.
    """

    name = "llm"

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url: str = base_url or settings.llm_base_url
        self.api_key: str = api_key or settings.llm_api_key
        self.model: str = model or settings.llm_model

        self.client = AsyncOpenAI(
            base_url=self.base_url,
            api_key=self.api_key,
            timeout=timeout or settings.request_timeout,
            max_retries=0,  # we handle retries ourselves via tenacity
        )

        logger.info(f"LLM Client initialised: {self.base_url} using {self.model}")

    async def aclose(self) -> None:
        await self.client.close()

    # ------------------------------------------------------------------
    # Completion
    # ------------------------------------------------------------------

    @retry(
        stop=stop_after_attempt(settings.max_retries),
        wait=wait_exponential(multiplier=1, min=1, max=16),
        retry=retry_if_exception_type(_RETRYABLE),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    async def _complete(self, system_prompt: str, user_prompt: str, max_tokens: int) -> str:
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=0.1,
            max_tokens=max_tokens,
        )

        if not response.choices:
            raise TranslationProviderError("LLM returned empty choices list")

        content = response.choices[0].message.content
        if content is None or not content.strip():
            raise TranslationProviderError("LLM returned empty content")
        return content.strip()

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    async def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        if not text or not text.strip():
            return text

        system_prompt = "\n".join([
            f"You are a professional translator. Translate the following text "
            f"from {_language_label(source_lang)} to {_language_label(target_lang)}.",
            "Maintain the original meaning and tone.",
            "Keep placeholders in curly braces, such as {service}, unchanged.",
            "Only output the translation, nothing else.",
        ])

        logger.debug(f"Translating {source_lang}->{target_lang}: {text[:50]}...")
        translated = await self._complete(
            system_prompt, text, max_tokens=max(len(text) * 4, 200)
        )
        logger.debug(f"Translated to: {translated[:50]}...")
        return translated

    # ------------------------------------------------------------------
    # Detection
    # ------------------------------------------------------------------

    async def detect(self, text: str) -> str:
        system_prompt = (
            "Identify the language of the user's text. "
            "Reply with the ISO 639-1 code only, for example: en"
        )
        reply = await self._complete(system_prompt, text[:1000], max_tokens=8)

        code = reply.strip().strip(".'\"`").lower()
        if not _LANGUAGE_CODE.fullmatch(code):
            raise TranslationProviderError(f"LLM gave no language code: {reply[:20]!r}")
        return code
