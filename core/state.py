"""
core.state
Core domain data models (UI/LLM independent).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


# Round phases
NOT_STARTED = "not_started"
IN_PROGRESS = "in_progress"
TERMINAL = "terminal"

# Terminal outcomes
WIN = "win"
LOSE = "lose"

ALLOWED_DIFFICULTIES = ("easy", "medium", "hard")
ALLOWED_LOCALES = ("en", "ru", "uk")

INITIAL_SCORE = 70
MAX_HINTS = 10


def normalize_difficulty(value: Any, default: str = "medium") -> str:
    d = str(value or "").strip().lower()
    return d if d in ALLOWED_DIFFICULTIES else default


def normalize_locale(value: Any, default: str = "en") -> str:
    loc = str(value or "").strip().lower()
    # "en-US" -> "en"
    loc = loc.split("-")[0].split("_")[0]
    return loc if loc in ALLOWED_LOCALES else default


def city_key(name: str) -> str:
    """Deduplication key of a canonical city name."""
    return " ".join(str(name or "").split()).casefold()


@dataclass(frozen=True)
class City:
    """The secret target of a round.

    - name: display name in the round locale
    - name_en: canonical English name (dedup key)
    - lat/lng: -90..90 / -180..180
    """

    name: str
    name_en: str
    lat: float
    lng: float

    @property
    def key(self) -> str:
        return city_key(self.name_en or self.name)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "nameEn": self.name_en, "lat": float(self.lat), "lng": float(self.lng)}


@dataclass(frozen=True)
class RoundState:
    """Aggregate owned by the round state machine.

    Transitions never mutate an instance; they return a new one.
    """

    round_id: int = 0
    phase: str = NOT_STARTED
    outcome: Optional[str] = None
    score: int = INITIAL_SCORE
    hints: Tuple[str, ...] = field(default_factory=tuple)
    guesses: Tuple[str, ...] = field(default_factory=tuple)
    city: Optional[City] = None
    difficulty: str = "medium"
    locale: str = "en"

    @property
    def hint_count(self) -> int:
        return len(self.hints)

    @property
    def terminal(self) -> bool:
        return self.phase == TERMINAL


def state_to_dict(s: RoundState) -> Dict[str, Any]:
    return {
        "round_id": int(s.round_id),
        "phase": str(s.phase),
        "outcome": s.outcome,
        "score": int(s.score),
        "hints": list(s.hints),
        "guesses": list(s.guesses),
        "city": s.city.to_dict() if s.city else None,
        "difficulty": str(s.difficulty),
        "locale": str(s.locale),
    }


def default_start_state(round_id: int = 0, difficulty: str = "medium", locale: str = "en") -> RoundState:
    """Baseline state before a city is chosen.

    Kept in core so headless tests and UI share the same baseline.
    """
    return RoundState(
        round_id=int(round_id),
        phase=NOT_STARTED,
        outcome=None,
        score=INITIAL_SCORE,
        hints=(),
        guesses=(),
        city=None,
        difficulty=normalize_difficulty(difficulty),
        locale=normalize_locale(locale),
    )
