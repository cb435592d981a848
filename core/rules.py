"""
core.rules
Round rules:
- hint cost schedule
- depletion (loss) thresholds
- guess normalization / matching
- state transitions for hints and guesses
- hint #10 letter masking
"""

from __future__ import annotations

import random
import re
from dataclasses import replace
from typing import List, Sequence

from .state import IN_PROGRESS, LOSE, MAX_HINTS, TERMINAL, WIN, City, RoundState

MASK_CHAR = "*"

# loss rules
LOSS_NEGATIVE = "negative"  # lose when score < 0
LOSS_ZERO = "zero"          # lose when score <= 0
ALLOWED_LOSS_RULES = {LOSS_NEGATIVE, LOSS_ZERO}

# guess rulesets
RULESET_RETRY = "retry"    # wrong guess costs points
RULESET_STRICT = "strict"  # wrong guess ends the round
ALLOWED_RULESETS = {RULESET_RETRY, RULESET_STRICT}


def hint_cost(index: int, *, free_hints: int = 3, cost: int = 10) -> int:
    """Cost of the hint with 1-based `index`."""
    return 0 if int(index) <= int(free_hints) else int(cost)


def is_depleted(score: int, rule: str = LOSS_NEGATIVE) -> bool:
    if rule == LOSS_ZERO:
        return int(score) <= 0
    return int(score) < 0


def start_state(state: RoundState, city: City) -> RoundState:
    """NotStarted -> InProgress with a fresh hint/guess slate."""
    return replace(state, phase=IN_PROGRESS, outcome=None, hints=(), guesses=(), city=city)


def finish(state: RoundState, outcome: str) -> RoundState:
    return replace(state, phase=TERMINAL, outcome=outcome)


def apply_hint(state: RoundState, hint: str, *, cost: int, loss_rule: str = LOSS_NEGATIVE) -> RoundState:
    """Charge `cost`, append `hint`, then run the depletion check."""
    if len(state.hints) >= MAX_HINTS:
        raise ValueError("hint sequence is full")
    s = replace(state, score=int(state.score) - int(cost), hints=state.hints + (str(hint),))
    if is_depleted(s.score, loss_rule):
        s = finish(s, LOSE)
    return s


def normalize_guess(text: str) -> str:
    return str(text or "").strip().casefold()


def guess_matches(text: str, city: City, aliases: Sequence[str] = ()) -> bool:
    """Trimmed, case-folded exact match against the localized or English name.

    `aliases` are other names of the same place (admin areas of a map pick);
    any of them matching counts as the guess matching.
    """
    targets = {normalize_guess(city.name), normalize_guess(city.name_en)}
    for g in (text, *aliases):
        g = normalize_guess(g)
        if g and g in targets:
            return True
    return False


def apply_guess(
    state: RoundState,
    text: str,
    *,
    ruleset: str = RULESET_RETRY,
    penalty: int = 20,
    loss_rule: str = LOSS_ZERO,
    aliases: Sequence[str] = (),
) -> RoundState:
    if state.city is None:
        raise ValueError("round has no target city")
    s = replace(state, guesses=state.guesses + (str(text).strip(),))
    if guess_matches(text, state.city, aliases):
        return finish(s, WIN)
    if ruleset == RULESET_STRICT:
        return finish(s, LOSE)
    s = replace(s, score=int(s.score) - int(penalty))
    if is_depleted(s.score, loss_rule):
        s = finish(s, LOSE)
    return s


def _word_initial_positions(name: str) -> List[int]:
    out: List[int] = []
    prev_alpha = False
    for i, ch in enumerate(name):
        is_alpha = ch.isalpha()
        if is_alpha and not prev_alpha:
            out.append(i)
        prev_alpha = is_alpha
    return out


def mask_city_name(name: str, rng: random.Random, mask_char: str = MASK_CHAR) -> str:
    """Mask roughly one third of the letters of `name`.

    - mask count = round(letters / 3), half rounded up
    - word-initial letters are never masked
    - non-letter characters are kept as-is
    """
    chars = list(str(name or ""))
    letters = [i for i, ch in enumerate(chars) if ch.isalpha()]
    initials = set(_word_initial_positions("".join(chars)))
    maskable = [i for i in letters if i not in initials]

    n = min(len(maskable), int(len(letters) / 3 + 0.5))
    if n <= 0:
        return "".join(chars)

    for i in rng.sample(maskable, n):
        chars[i] = mask_char
    return "".join(chars)


def _name_mention(found: str, name: str) -> bool:
    # "nice" in running text is a word, "Nice" / "NICE" is the city
    if found == name or found.isupper():
        return True
    return not (name[:1].isupper() and found[:1].islower())


def redact_city_name(text: str, city: City, mask_char: str = MASK_CHAR) -> str:
    """Replace whole-word mentions of the city name (either form) with mask characters."""
    out = str(text or "")
    for name in sorted({city.name, city.name_en}, key=len, reverse=True):
        name = (name or "").strip()
        if not name:
            continue
        pattern = re.compile(rf"(?<!\w){re.escape(name)}(?!\w)", re.IGNORECASE)
        out = pattern.sub(
            lambda m, name=name: mask_char * len(m.group(0)) if _name_mention(m.group(0), name) else m.group(0),
            out,
        )
    return out
