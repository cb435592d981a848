"""
core.modes
Difficulty specifications (selection pool / prompt scope).

Kept in core as plain data so prompt text can be revised without touching
the selection logic. The UI reads labels from here too.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class DifficultySpec:
    key: str
    desc: str
    pool_prompt: str
    temp: float


DEFAULT_DIFFICULTIES: Dict[str, DifficultySpec] = {
    "easy": DifficultySpec(
        key="easy",
        desc="Capital cities only",
        pool_prompt=(
            "Create a list of 300 world capital cities (only national capitals like London, Paris, "
            "Berlin, Tokyo, Washington D.C., etc.), and randomly select one city from it."
        ),
        temp=0.7,
    ),
    "medium": DifficultySpec(
        key="medium",
        desc="Well-known cities",
        pool_prompt=(
            "Create a list of 600 well-known cities from around the world, WITHOUT CAPITAL CITIES "
            "(major cities that most people would recognize like New York, Barcelona, Sydney, "
            "Prague, etc.), and randomly select one city from it."
        ),
        temp=0.8,
    ),
    "hard": DifficultySpec(
        key="hard",
        desc="Any cities worldwide",
        pool_prompt=(
            "Create a list of 1,000 cities from ANY country in the world, including smaller cities "
            "and towns that are not necessarily well-known internationally, and randomly select one "
            "city from it. DO NOT INCLUDE CAPITAL CITIES OR VERY WELL KNOWN BIG CITIES in this list."
        ),
        temp=0.9,
    ),
}
