"""engine.sim_runner

Headless runner for quick sanity checks.

Plays full rounds without network calls: static city list plus a NullProvider,
so every hint comes from the locale fallback table. The scripted player asks
for hints until it can no longer afford one, then guesses the answer at the
end (or a wrong city first, to exercise the penalty path).
"""

from __future__ import annotations

import asyncio
import random
from typing import Any, Dict, List, Optional

from content.providers.base import NullProvider
from core.state import NOT_STARTED

from .catalog import CityCatalog
from .config import SELECTION_STATIC, EngineConfig
from .hints import HintGenerator
from .round import RoundMachine
from .session import MappingSessionStore, UsedCityHistory


def build_offline_machine(config: Optional[EngineConfig] = None, *, seed: int = 123) -> RoundMachine:
    cfg = config or EngineConfig(selection_mode=SELECTION_STATIC, mask_seed=seed)
    provider = NullProvider("offline run")
    history = UsedCityHistory(MappingSessionStore())
    catalog = CityCatalog(provider=provider, history=history, config=cfg, rng=random.Random(seed))
    hints = HintGenerator(provider=provider, config=cfg)
    return RoundMachine(catalog=catalog, hints=hints, config=cfg)


async def _play(machine: RoundMachine, *, difficulty: str, locale: str, wrong_first: bool) -> Dict[str, Any]:
    if machine.state.phase == NOT_STARTED:
        await machine.start_round(difficulty, locale)
    else:
        await machine.restart()

    while machine.can_request_hint():
        await machine.request_hint()

    if wrong_first and machine.can_guess():
        machine.submit_guess("Atlantis")
    if machine.can_guess():
        machine.submit_guess(machine.state.city.name)

    s = machine.state
    return {
        "city": s.city.name_en if s.city else "",
        "outcome": s.outcome,
        "score": s.score,
        "hints": list(s.hints),
    }


def run_headless_rounds(rounds: int = 3, *, difficulty: str = "medium", locale: str = "en") -> Dict[str, Any]:
    """Play `rounds` consecutive rounds in one session and return a summary."""
    machine = build_offline_machine()
    results: List[Dict[str, Any]] = []

    async def _run() -> None:
        for i in range(int(rounds)):
            results.append(await _play(machine, difficulty=difficulty, locale=locale, wrong_first=bool(i % 2)))

    asyncio.run(_run())
    return {
        "rounds": int(rounds),
        "results": results,
        "used_cities": machine.catalog.history.names(),
        "events": list(machine.events),
    }
