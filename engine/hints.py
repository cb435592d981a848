"""engine.hints

Hint Generator.

next_hint(index, city, previous_hints, locale) -> str

Hints 1-9 come from the provider (tiered guideline, previous hints passed
along); hint 10 is the masked city name, built locally. Any provider problem
yields the deterministic locale fallback instead of an error.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Sequence

from content.fallback import fallback_hint
from content.i18n import get_translations
from content.parsing import clean_hint_text
from content.prompts import build_hint_messages
from content.providers.base import ChatProvider, ProviderError
from core.rng import rng_from
from core.rules import mask_city_name, redact_city_name
from core.state import MAX_HINTS, City, normalize_locale

from .config import EngineConfig

log = logging.getLogger(__name__)

REVEAL_INDEX = MAX_HINTS


class HintGenerator:
    def __init__(self, *, provider: ChatProvider, config: Optional[EngineConfig] = None):
        self.provider = provider
        self.config = config or EngineConfig()
        self.last_raw = ""
        self.last_fallback = False

    def reveal_hint(self, city: City, locale: str, *, round_id: int = 0) -> str:
        rng = rng_from("mask", city.key, int(round_id), base_seed=self.config.mask_seed)
        prefix = get_translations(locale)["reveal_prefix"]
        return f"{prefix} {mask_city_name(city.name, rng)}"

    async def next_hint(
        self,
        index: int,
        city: City,
        previous_hints: Sequence[str],
        locale: str,
        *,
        round_id: int = 0,
    ) -> str:
        index = int(index)
        if not 1 <= index <= MAX_HINTS:
            raise ValueError(f"hint index out of range: {index}")
        if index != len(previous_hints) + 1:
            raise ValueError(f"hint index {index} does not follow {len(previous_hints)} previous hint(s)")

        locale = normalize_locale(locale)
        self.last_fallback = False

        if index == REVEAL_INDEX:
            return self.reveal_hint(city, locale, round_id=round_id)

        try:
            hint = await self._ask(index, city, previous_hints, locale)
        except (ProviderError, ValueError, asyncio.TimeoutError) as e:
            log.warning("Hint #%s generation failed, using fallback: %s", index, e or type(e).__name__)
            self.last_fallback = True
            return fallback_hint(index, locale)
        return hint

    async def _ask(self, index: int, city: City, previous_hints: Sequence[str], locale: str) -> str:
        messages = build_hint_messages(index=index, city=city, previous_hints=previous_hints, locale=locale)
        raw = await asyncio.wait_for(
            self.provider.complete(messages, json_mode=False, temperature=0.7, max_output_tokens=300),
            timeout=float(self.config.request_timeout_s),
        )
        self.last_raw = raw

        hint = clean_hint_text(raw)
        if not hint:
            raise ValueError("empty hint")
        if any(hint.casefold() == str(p).strip().casefold() for p in previous_hints):
            raise ValueError("hint repeats a previous hint")

        redacted = redact_city_name(hint, city)
        if redacted != hint:
            log.info("Hint #%s mentioned the city name; masked it", index)
        return redacted
