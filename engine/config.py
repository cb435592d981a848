"""engine.config

Round rules and selection behaviour, passed from the UI (or tests).
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from core.rules import (
    ALLOWED_LOSS_RULES,
    ALLOWED_RULESETS,
    LOSS_NEGATIVE,
    LOSS_ZERO,
    RULESET_RETRY,
)
from core.state import INITIAL_SCORE, MAX_HINTS

SELECTION_STATIC = "static"
SELECTION_GENERATIVE = "generative"
ALLOWED_SELECTION_MODES = {SELECTION_STATIC, SELECTION_GENERATIVE}


@dataclass(frozen=True)
class EngineConfig:
    initial_score: int = INITIAL_SCORE
    free_hints: int = 3
    hint_cost: int = 10
    max_hints: int = MAX_HINTS
    guess_penalty: int = 20
    guess_ruleset: str = RULESET_RETRY
    hint_loss_rule: str = LOSS_NEGATIVE
    guess_loss_rule: str = LOSS_ZERO

    selection_mode: str = SELECTION_GENERATIVE
    fallback_to_static: bool = True
    max_selection_attempts: int = 3
    request_timeout_s: float = 20.0

    default_difficulty: str = "medium"
    default_locale: str = "en"
    # None => fresh entropy for the hint #10 mask
    mask_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.guess_ruleset not in ALLOWED_RULESETS:
            raise ValueError(f"unknown guess_ruleset: {self.guess_ruleset}")
        if self.hint_loss_rule not in ALLOWED_LOSS_RULES or self.guess_loss_rule not in ALLOWED_LOSS_RULES:
            raise ValueError("loss rules must be 'negative' or 'zero'")
        if self.selection_mode not in ALLOWED_SELECTION_MODES:
            raise ValueError(f"unknown selection_mode: {self.selection_mode}")
        if not 1 <= int(self.max_hints) <= MAX_HINTS:
            raise ValueError(f"max_hints must be 1..{MAX_HINTS}")
        if int(self.max_selection_attempts) < 1:
            raise ValueError("max_selection_attempts must be >= 1")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
