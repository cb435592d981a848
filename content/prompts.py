"""content.prompts

Prompt builders for the city/hint generation layer.

Prompts are chat message lists ([{"role": ..., "content": ...}]) so every
provider can map them onto its own API.

Game-economy logic stays OUT of the model: the model only picks a city or
writes a hint sentence. Costs, masking and win/lose are decided by the engine.
"""

from __future__ import annotations

from typing import Dict, List, Sequence

from core.modes import DifficultySpec
from core.state import City

from .i18n import language_name

Message = Dict[str, str]

CITY_SYSTEM = "You are a geography expert selecting cities for a guessing game."
HINT_SYSTEM = (
    "You provide geography hints that are progressively more specific "
    "but never reveal the city name directly."
)

# index -> content guideline (1-based)
HINT_TIERS: Dict[int, str] = {
    1: "Be maximally abstract: the continent or broad region, or an obscure piece of trivia.",
    2: "Stay abstract: region-level geography or another obscure piece of trivia.",
    3: "Describe the climate of the city.",
    4: "Give a lesser-known historical fact about the city.",
    5: "Name a dish the city is associated with, or a notable person connected to it.",
    6: "Give a moderately well-known fact about the city.",
    7: "Describe the architecture or the skyline of the city.",
    8: "Give fairly obvious clues: you may name famous landmarks or events of the city and the country it is in.",
    9: "Name the country and state that the city name has exactly {length} characters.",
    10: "Reveal the masked city name.",
}


def hint_guideline(index: int, city: City) -> str:
    g = HINT_TIERS.get(int(index), HINT_TIERS[8])
    return g.format(length=len(city.name))


def build_city_messages(
    *,
    spec: DifficultySpec,
    locale: str,
    excluded: Sequence[str] = (),
) -> List[Message]:
    """Ask the model for one city as JSON: {name, nameEn, lat, lng}."""
    lang = language_name(locale)
    excluded = [str(x).strip() for x in excluded if str(x).strip()]
    excluded_s = ", ".join(excluded) if excluded else "(none)"

    user = f"""
{spec.pool_prompt}
The city should be appropriate for the {spec.key} difficulty level.

Do NOT choose any of these cities (already used in this session): {excluded_s}

Write "name" in {lang}. Write "nameEn" in English.
Respond in valid JSON format only with this exact structure:
{{"name": "CityName in {lang}", "nameEn": "CityName in English", "lat": latitude, "lng": longitude}}

Do not include any additional text or explanation in your response.
""".strip()

    return [
        {"role": "system", "content": CITY_SYSTEM},
        {"role": "user", "content": user},
    ]


def build_hint_messages(
    *,
    index: int,
    city: City,
    previous_hints: Sequence[str],
    locale: str,
) -> List[Message]:
    """Ask the model for hint #index (plain text, 1-3 sentences)."""
    lang = language_name(locale)
    prev = [str(h).strip() for h in previous_hints if str(h).strip()]
    prev_s = "\n".join(f"{i}. {h}" for i, h in enumerate(prev, start=1)) if prev else "(none)"

    user = f"""
You are helping with a geography guessing game. The player needs to guess the city: {city.name_en}.

Please provide hint #{int(index)} of 10 about this city.

Guideline for this hint: {hint_guideline(index, city)}

Rules:
- NEVER reveal the name of the city directly.
- Keep the hint to 1-3 sentences.
- Make sure the hint is factually accurate.
- DO NOT REPEAT INFORMATION FROM PREVIOUS HINTS.
- Write the hint in {lang}.

Previous hints:
{prev_s}

Respond with ONLY the hint text, nothing else.
""".strip()

    return [
        {"role": "system", "content": HINT_SYSTEM},
        {"role": "user", "content": user},
    ]


def build_json_repair_messages(broken_text: str) -> List[Message]:
    broken_text = str(broken_text or "")
    user = f"""The text below contains broken JSON. Your task: return ONLY valid JSON.
- No comments, no markdown.
- Do not rename fields, only fix them.
- Fix missing commas, quotes and similar problems.

BROKEN TEXT:
{broken_text}
""".strip()
    return [{"role": "user", "content": user}]
