"""content.providers.grok

Grok provider: xAI's OpenAI-compatible chat completion endpoint, called through
the OpenAI SDK's async client.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from openai import AsyncOpenAI, OpenAIError

from .base import ProviderError, ProviderStatus

log = logging.getLogger(__name__)

GROK_BASE_URL = "https://api.x.ai/v1"
GROK_MODEL = "grok-3-mini"


class GrokProvider:
    def __init__(self, api_key: str, model_name: str = GROK_MODEL, timeout_s: float = 20.0, base_url: str = GROK_BASE_URL):
        self.api_key = (api_key or "").strip()
        self.model_name = model_name
        self.last_error = ""
        self.client = None
        if self.api_key:
            self.client = AsyncOpenAI(api_key=self.api_key, base_url=base_url, timeout=float(timeout_s), max_retries=0)
        else:
            self.last_error = "missing GROK_API_KEY"

    def status(self) -> ProviderStatus:
        if self.client is None:
            return ProviderStatus(False, "none", "", error=self.last_error)
        return ProviderStatus(True, "openai-compatible", self.model_name)

    async def complete(
        self,
        messages: List[Dict[str, str]],
        *,
        json_mode: bool = False,
        temperature: float = 0.7,
        max_output_tokens: int = 400,
    ) -> str:
        if self.client is None:
            raise ProviderError(self.last_error or "Grok client not configured")

        kwargs: Dict[str, Any] = {
            "model": self.model_name,
            "messages": messages,
            "temperature": float(temperature),
            "max_tokens": int(max_output_tokens),
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = await self.client.chat.completions.create(**kwargs)
        except OpenAIError as e:
            self.last_error = f"{type(e).__name__}: {e}"
            raise ProviderError(f"Grok error: {e}") from e

        content = ""
        if response.choices:
            content = (response.choices[0].message.content or "").strip()
        if not content:
            raise ProviderError("No response from Grok")

        if response.usage:
            log.debug(
                "Grok tokens: prompt=%s completion=%s total=%s",
                response.usage.prompt_tokens,
                response.usage.completion_tokens,
                response.usage.total_tokens,
            )
        return content
