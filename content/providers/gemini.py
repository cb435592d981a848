"""content.providers.gemini

Gemini provider (LLM) on top of google-genai's async client.

- Tries a list of candidate models, then rotates API keys.
- Returns raw text or raises ProviderError.

Important: This provider is UI-agnostic (no Streamlit dependency).
Secrets/env loading is done in engine.settings.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .base import ProviderError, ProviderStatus, split_messages

log = logging.getLogger(__name__)

DEFAULT_MODELS = [
    "gemini-2.5-flash",
    "gemini-2.0-flash",
    "gemini-2.5-pro",
]


@dataclass
class GeminiProvider:
    api_keys: List[str]
    models: List[str] = field(default_factory=lambda: list(DEFAULT_MODELS))
    timeout_s: float = 20.0

    # runtime
    backend: str = "none"  # genai | none
    model_in_use: str = ""
    last_error: str = ""

    _client: Any = None

    def __post_init__(self) -> None:
        self.api_keys = [k.strip() for k in (self.api_keys or []) if str(k).strip()]
        self._init_backend()

    @staticmethod
    def from_api_key_string(raw: str, **kwargs: Any) -> "GeminiProvider":
        if not raw:
            return GeminiProvider([], **kwargs)
        raw = str(raw)
        keys = [x.strip() for x in raw.split(",") if x.strip()] if "," in raw else [raw.strip()]
        return GeminiProvider(keys, **kwargs)

    def _init_backend(self) -> None:
        self._client = None
        self.backend = "none"
        self.model_in_use = ""

        if not self.api_keys:
            self.last_error = "missing GEMINI_API_KEY"
            return

        try:
            from google import genai

            self._client = genai.Client(
                api_key=self.api_keys[0],
                http_options={"timeout": int(float(self.timeout_s) * 1000)},
            )
            self.backend = "genai"
            self.model_in_use = self.models[0] if self.models else ""
            self.last_error = ""
        except Exception as e:
            self.last_error = f"google-genai unavailable: {e}"
            log.warning("Gemini client init failed: %s", e)

    def status(self) -> ProviderStatus:
        if self.backend == "none":
            return ProviderStatus(False, "none", "", note="", error=str(self.last_error or ""))
        return ProviderStatus(True, self.backend, self.model_in_use, note=f"{len(self.api_keys)} key(s)", error="")

    def _rotate_key(self) -> None:
        if len(self.api_keys) <= 1:
            return
        self.api_keys = self.api_keys[1:] + self.api_keys[:1]
        self._init_backend()

    async def complete(
        self,
        messages: List[Dict[str, str]],
        *,
        json_mode: bool = False,
        temperature: float = 0.7,
        max_output_tokens: int = 400,
    ) -> str:
        system, user = split_messages(messages)
        last_err: Optional[Exception] = None

        for _ in range(max(1, len(self.api_keys))):
            if self.backend == "genai" and self._client is not None:
                for m in self.models:
                    cfg: Dict[str, Any] = {
                        "temperature": float(temperature),
                        "max_output_tokens": int(max_output_tokens),
                    }
                    if system:
                        cfg["system_instruction"] = system
                    if json_mode:
                        cfg["response_mime_type"] = "application/json"
                    try:
                        resp = await self._client.aio.models.generate_content(model=m, contents=user, config=cfg)
                    except Exception as e:
                        log.warning("Gemini model %s failed: %s", m, e)
                        last_err = e
                        continue

                    txt = (getattr(resp, "text", "") or "").strip()
                    if txt:
                        self.model_in_use = m
                        return txt
                    last_err = ProviderError(f"empty answer from {m}")

            self._rotate_key()

        self.last_error = str(last_err or self.last_error or "no answer")
        raise ProviderError(f"Gemini error: {last_err}" if last_err else "Gemini did not answer")
