"""engine.catalog

City Catalog / Selector.

select_city() returns the target City for a new round:
- static mode: uniform pick from content.fallback.STATIC_CITIES
- generative mode: ask the provider (difficulty prompt + locale + excluded names),
  retrying a bounded number of times when it repeats a used city

Only one selection runs at a time per catalog; concurrent callers share the
pending task. The chosen canonical name is appended to the session history.
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Dict, Optional, Sequence

from content.fallback import STATIC_CITIES
from content.parsing import try_parse_json
from content.prompts import build_city_messages, build_json_repair_messages
from content.providers.base import ChatProvider, ProviderError
from content.schemas import city_from_llm
from core.modes import DEFAULT_DIFFICULTIES, DifficultySpec
from core.state import City, normalize_difficulty, normalize_locale

from .config import SELECTION_STATIC, EngineConfig
from .session import UsedCityHistory

log = logging.getLogger(__name__)


class CitySelectionError(RuntimeError):
    """The round could not be initialized (no city and no fallback)."""


class CityCatalog:
    def __init__(
        self,
        *,
        provider: ChatProvider,
        history: UsedCityHistory,
        config: Optional[EngineConfig] = None,
        difficulties: Optional[Dict[str, DifficultySpec]] = None,
        static_cities: Sequence[City] = STATIC_CITIES,
        rng: Optional[random.Random] = None,
    ):
        self.provider = provider
        self.history = history
        self.config = config or EngineConfig()
        self.difficulties = dict(difficulties or DEFAULT_DIFFICULTIES)
        self.static_cities = tuple(static_cities)
        self.rng = rng or random.Random()
        self.last_raw = ""
        self._pending: Optional["asyncio.Future[City]"] = None

    @property
    def pending(self) -> bool:
        return self._pending is not None and not self._pending.done()

    async def select_city(self, difficulty: str, locale: str) -> City:
        if self._pending is not None and not self._pending.done():
            log.debug("City selection already in flight; sharing it")
            return await self._pending

        task = asyncio.ensure_future(self._select(normalize_difficulty(difficulty), normalize_locale(locale)))
        self._pending = task
        try:
            return await task
        finally:
            if self._pending is task:
                self._pending = None

    async def _select(self, difficulty: str, locale: str) -> City:
        if self.config.selection_mode == SELECTION_STATIC:
            city = self._pick_static()
        else:
            city = await self._select_generative(difficulty, locale)

        self.history.add(city.name_en)
        log.info("Selected city %s (difficulty=%s, locale=%s)", city.name_en, difficulty, locale)
        return city

    def _pick_static(self) -> City:
        if not self.static_cities:
            raise CitySelectionError("could not initialize round: no static cities")
        return self.rng.choice(self.static_cities)

    async def _select_generative(self, difficulty: str, locale: str) -> City:
        spec = self.difficulties.get(difficulty) or self.difficulties["medium"]
        attempts = int(self.config.max_selection_attempts)
        duplicate: Optional[City] = None

        for attempt in range(1, attempts + 1):
            try:
                city = await self._ask(spec, locale, self.history.names())
            except (ProviderError, ValueError, asyncio.TimeoutError) as e:
                log.warning("City selection call failed (attempt %s/%s): %s", attempt, attempts, e or type(e).__name__)
                return self._fallback(e)

            if city.name_en not in self.history:
                return city

            log.info("Model repeated used city %s (attempt %s/%s)", city.name_en, attempt, attempts)
            duplicate = city

        log.warning("Accepting duplicate city %s after %s attempts", duplicate.name_en, attempts)
        return duplicate

    async def _ask(self, spec: DifficultySpec, locale: str, excluded: Sequence[str]) -> City:
        """One provider round-trip (+ one JSON repair pass) -> validated City."""
        messages = build_city_messages(spec=spec, locale=locale, excluded=excluded)
        raw = await self._complete(messages, temperature=spec.temp)
        self.last_raw = raw

        res = try_parse_json(raw)
        if res.data is None:
            log.info("City JSON unreadable (%s); running repair pass", res.error)
            raw = await self._complete(build_json_repair_messages(raw), temperature=0.1)
            self.last_raw = raw
            res = try_parse_json(raw)
            if res.data is None:
                raise ValueError(res.error or "city JSON parse failed")

        return city_from_llm(res.data)

    async def _complete(self, messages, *, temperature: float) -> str:
        return await asyncio.wait_for(
            self.provider.complete(messages, json_mode=True, temperature=temperature, max_output_tokens=200),
            timeout=float(self.config.request_timeout_s),
        )

    def _fallback(self, error: BaseException) -> City:
        if self.config.fallback_to_static and self.static_cities:
            city = self._pick_static()
            log.warning("Falling back to static city list: %s", city.name_en)
            return city
        raise CitySelectionError("could not initialize round") from error
