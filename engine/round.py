"""engine.round

Round State Machine (headless).

    not_started --start_round--> in_progress --hint/guess--> terminal(win|lose)
    any --restart--> not_started --> start_round(previous difficulty/locale)

Responsibilities:
- own RoundState (core.state) and swap it atomically on every transition
- charge hint costs / guess penalties via core.rules
- gate mutating calls behind the busy flag while an external call is pending
- drop responses that arrive after their round was replaced or finished

Rejections (wrong phase, busy, not enough points) are StepResult values,
not exceptions. Only an unrecoverable start failure (CitySelectionError)
propagates to the caller.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Sequence, Tuple

from core.rules import apply_guess, apply_hint, hint_cost, start_state
from core.state import IN_PROGRESS, NOT_STARTED, RoundState, default_start_state, normalize_difficulty, normalize_locale

from .catalog import CityCatalog
from .config import EngineConfig
from .hints import HintGenerator

log = logging.getLogger(__name__)

# rejection reasons
NOT_IN_PROGRESS = "not_in_progress"
BUSY = "busy"
INSUFFICIENT_SCORE = "insufficient_score"
NO_MORE_HINTS = "no_more_hints"
EMPTY_GUESS = "empty_guess"
STALE = "stale"


@dataclass(frozen=True)
class StepResult:
    accepted: bool
    reason: str = ""
    hint: str = ""
    cost: int = 0


class RoundMachine:
    def __init__(
        self,
        *,
        catalog: CityCatalog,
        hints: HintGenerator,
        config: Optional[EngineConfig] = None,
        state: Optional[RoundState] = None,
    ):
        self.catalog = catalog
        self.hints = hints
        self.config = config or EngineConfig()
        self._state = state or default_start_state(
            difficulty=self.config.default_difficulty, locale=self.config.default_locale
        )
        self._inflight = 0
        self._starting: Optional["asyncio.Future[StepResult]"] = None
        # (difficulty, locale) of the last dispatched start
        self._requested: Optional[Tuple[str, str]] = None
        self.events: List[Dict[str, Any]] = []

    # ---- read side ----

    @property
    def state(self) -> RoundState:
        return self._state

    @property
    def busy(self) -> bool:
        return self._inflight > 0

    def next_hint_cost(self) -> int:
        return hint_cost(self._state.hint_count + 1, free_hints=self.config.free_hints, cost=self.config.hint_cost)

    def can_request_hint(self) -> bool:
        return self._hint_rejection() == ""

    def can_guess(self) -> bool:
        return self._state.phase == IN_PROGRESS and not self.busy

    def _hint_rejection(self) -> str:
        s = self._state
        if s.phase != IN_PROGRESS:
            return NOT_IN_PROGRESS
        if self.busy:
            return BUSY
        if s.hint_count >= int(self.config.max_hints):
            return NO_MORE_HINTS
        if s.score < self.next_hint_cost():
            return INSUFFICIENT_SCORE
        return ""

    def _log(self, kind: str, **data: Any) -> None:
        self.events.append({"round_id": int(self._state.round_id), "event": kind, **data})

    # ---- transitions ----

    async def start_round(self, difficulty: str, locale: str) -> StepResult:
        if self._starting is not None and not self._starting.done():
            return await self._starting
        if self._state.phase != NOT_STARTED:
            return StepResult(False, NOT_IN_PROGRESS)

        difficulty, locale = normalize_difficulty(difficulty), normalize_locale(locale)
        self._requested = (difficulty, locale)
        task = asyncio.ensure_future(self._start(difficulty, locale))
        self._starting = task
        try:
            return await task
        finally:
            if self._starting is task:
                self._starting = None

    async def _start(self, difficulty: str, locale: str) -> StepResult:
        token = self._state.round_id
        self._inflight += 1
        try:
            city = await self.catalog.select_city(difficulty, locale)
        finally:
            self._inflight -= 1

        if self._state.round_id != token or self._state.phase != NOT_STARTED:
            log.info("Discarding city for replaced round %s", token)
            return StepResult(False, STALE)

        base = replace(
            default_start_state(round_id=token, difficulty=difficulty, locale=locale),
            score=int(self.config.initial_score),
        )
        self._state = start_state(base, city)
        self._log("start", difficulty=difficulty, locale=locale, city=city.name_en)
        return StepResult(True)

    async def request_hint(self) -> StepResult:
        reason = self._hint_rejection()
        if reason:
            return StepResult(False, reason)

        s = self._state
        token = s.round_id
        index = s.hint_count + 1
        cost = self.next_hint_cost()

        self._inflight += 1
        try:
            hint = await self.hints.next_hint(index, s.city, list(s.hints), s.locale, round_id=token)
        finally:
            self._inflight -= 1

        cur = self._state
        if cur.round_id != token or cur.phase != IN_PROGRESS or cur.hint_count != index - 1:
            log.info("Discarding stale hint #%s for round %s", index, token)
            return StepResult(False, STALE)

        self._state = apply_hint(cur, hint, cost=cost, loss_rule=self.config.hint_loss_rule)
        self._log("hint", index=index, cost=cost, score=self._state.score, fallback=bool(self.hints.last_fallback))
        if self._state.terminal:
            self._log("end", outcome=self._state.outcome, score=self._state.score)
        return StepResult(True, hint=hint, cost=cost)

    def submit_guess(self, text: str, aliases: Sequence[str] = ()) -> StepResult:
        """Judge `text`. `aliases` are alternative names of a map pick (its admin areas)."""
        if self._state.phase != IN_PROGRESS:
            return StepResult(False, NOT_IN_PROGRESS)
        if self.busy:
            return StepResult(False, BUSY)
        if not str(text or "").strip():
            return StepResult(False, EMPTY_GUESS)

        before = self._state.score
        self._state = apply_guess(
            self._state,
            text,
            ruleset=self.config.guess_ruleset,
            penalty=self.config.guess_penalty,
            loss_rule=self.config.guess_loss_rule,
            aliases=tuple(aliases),
        )
        self._log("guess", guess=str(text).strip(), score=self._state.score, penalty=before - self._state.score)
        if self._state.terminal:
            self._log("end", outcome=self._state.outcome, score=self._state.score)
        return StepResult(True)

    async def restart(self) -> StepResult:
        prev = self._state
        if self._requested is not None:
            difficulty, locale = self._requested
        else:
            difficulty = prev.difficulty or self.config.default_difficulty
            locale = prev.locale or self.config.default_locale
        self._state = default_start_state(round_id=prev.round_id + 1, difficulty=difficulty, locale=locale)
        self._starting = None
        self._log("restart", difficulty=difficulty, locale=locale)
        return await self.start_round(difficulty, locale)
