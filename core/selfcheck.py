"""
core.selfcheck
Minimal "it runs" proof for the round rules (no engine, no network).

Run:
  python -m core.selfcheck
"""

from __future__ import annotations

import random
from dataclasses import asdict

from .rules import apply_guess, apply_hint, hint_cost, mask_city_name, start_state
from .state import IN_PROGRESS, LOSE, TERMINAL, WIN, City, default_start_state


def run_round_smoke() -> None:
    paris = City(name="Paris", name_en="Paris", lat=48.8566, lng=2.3522)
    state = start_state(default_start_state(), paris)
    assert state.phase == IN_PROGRESS and state.score == 70

    # 3 free hints, then 10 per hint
    for i in range(1, 8):
        cost = hint_cost(i)
        assert cost == (0 if i <= 3 else 10)
        state = apply_hint(state, f"hint {i}", cost=cost)
    assert state.hint_count == 7
    assert state.score == 30
    assert state.phase == IN_PROGRESS

    lost = apply_guess(state, "Berlin", penalty=20)
    assert lost.score == 10 and lost.phase == IN_PROGRESS
    lost = apply_guess(lost, "Rome", penalty=20)
    assert lost.phase == TERMINAL and lost.outcome == LOSE

    won = apply_guess(state, "  PARIS ")
    assert won.phase == TERMINAL and won.outcome == WIN

    masked = mask_city_name("Rio de Janeiro", random.Random(7))
    assert masked[0] == "R" and masked[4] == "d" and masked[7] == "J"
    assert masked.count("*") == 4

    print("OK: round rules smoke test passed.")
    print("Final state:", asdict(won))
    print("Mask sample:", masked)


if __name__ == "__main__":
    run_round_smoke()
