import asyncio
from dataclasses import replace

import pytest

from conftest import PARIS, FakeProvider, city_json, make_machine
from content.providers.base import ProviderError
from core.rules import LOSS_NEGATIVE, RULESET_STRICT
from core.state import IN_PROGRESS, LOSE, NOT_STARTED, TERMINAL, WIN, City
from engine.catalog import CitySelectionError
from engine.config import EngineConfig
from engine.hints import HintGenerator
from engine.round import BUSY, EMPTY_GUESS, INSUFFICIENT_SCORE, NO_MORE_HINTS, NOT_IN_PROGRESS, STALE
from engine.session import UsedCityHistory

ROME = City("Rome", "Rome", 41.9028, 12.4964)


def _with(machine, **changes):
    machine._state = replace(machine.state, **changes)
    return machine


def test_start_round_picks_city_with_initial_score():
    m = make_machine(FakeProvider([city_json("Paris")]))
    res = asyncio.run(m.start_round("easy", "en"))
    assert res.accepted
    s = m.state
    assert s.phase == IN_PROGRESS
    assert s.city == PARIS
    assert s.score == 70 and s.hint_count == 0
    assert s.difficulty == "easy" and s.locale == "en"


@pytest.mark.parametrize("difficulty", ["easy", "medium", "hard"])
def test_every_difficulty_yields_valid_city(static_config, difficulty):
    m = make_machine(FakeProvider(), config=static_config, static_cities=(PARIS, ROME))
    asyncio.run(m.start_round(difficulty, "en"))
    c = m.state.city
    assert c.name and -90 <= c.lat <= 90 and -180 <= c.lng <= 180


def test_three_free_hints_then_paid(started):
    for _ in range(3):
        res = asyncio.run(started.request_hint())
        assert res.accepted and res.cost == 0
    assert started.state.score == 70 and started.state.hint_count == 3

    res = asyncio.run(started.request_hint())
    assert res.accepted and res.cost == 10
    assert started.state.score == 60 and started.state.hint_count == 4


def test_paid_hint_rejected_when_score_too_low(started):
    for _ in range(3):
        asyncio.run(started.request_hint())
    _with(started, score=5)
    before = started.state

    res = asyncio.run(started.request_hint())
    assert not res.accepted and res.reason == INSUFFICIENT_SCORE
    assert started.state is before
    assert not started.can_request_hint()


def test_hint_indexes_are_sequential(static_config):
    seen = []

    class SpyHints(HintGenerator):
        async def next_hint(self, index, city, previous_hints, locale, *, round_id=0):
            seen.append((index, len(previous_hints)))
            return await super().next_hint(index, city, previous_hints, locale, round_id=round_id)

    m = make_machine(FakeProvider(), config=static_config)
    m.hints = SpyHints(provider=FakeProvider(), config=static_config)
    asyncio.run(m.start_round("medium", "en"))
    for _ in range(10):
        assert asyncio.run(m.request_hint()).accepted

    assert seen == [(i, i - 1) for i in range(1, 11)]
    assert m.state.score == 0 and m.state.phase == IN_PROGRESS
    assert m.state.hints[-1].startswith("The city's name: P")
    assert asyncio.run(m.request_hint()).reason == NO_MORE_HINTS


def test_correct_guess_wins(started):
    res = started.submit_guess("paris")
    assert res.accepted
    assert started.state.phase == TERMINAL and started.state.outcome == WIN
    assert [e["event"] for e in started.events] == ["start", "guess", "end"]


def test_wrong_guess_below_zero_loses(started):
    _with(started, score=15)
    started.submit_guess("berlin")
    assert started.state.score == -5
    assert started.state.outcome == LOSE


def test_guess_threshold_variants(static_config):
    zero = make_machine(FakeProvider(), config=static_config)
    asyncio.run(zero.start_round("medium", "en"))
    _with(zero, score=20).submit_guess("berlin")
    assert zero.state.score == 0 and zero.state.outcome == LOSE

    cfg = replace(static_config, guess_loss_rule=LOSS_NEGATIVE)
    negative = make_machine(FakeProvider(), config=cfg)
    asyncio.run(negative.start_round("medium", "en"))
    _with(negative, score=20).submit_guess("berlin")
    assert negative.state.score == 0 and negative.state.phase == IN_PROGRESS


def test_strict_ruleset_loses_on_first_wrong_guess(static_config):
    m = make_machine(FakeProvider(), config=replace(static_config, guess_ruleset=RULESET_STRICT))
    asyncio.run(m.start_round("medium", "en"))
    m.submit_guess("Rome")
    assert m.state.outcome == LOSE and m.state.score == 70


def test_terminal_round_ignores_further_actions(started):
    started.submit_guess("Paris")
    before = started.state
    assert asyncio.run(started.request_hint()).reason == NOT_IN_PROGRESS
    assert started.submit_guess("Rome").reason == NOT_IN_PROGRESS
    assert started.state is before


def test_empty_guess_rejected(started):
    res = started.submit_guess("   ")
    assert res.reason == EMPTY_GUESS
    assert started.state.guesses == ()


def test_actions_before_start_are_rejected(static_config):
    m = make_machine(FakeProvider(), config=static_config)
    assert asyncio.run(m.request_hint()).reason == NOT_IN_PROGRESS
    assert m.submit_guess("Paris").reason == NOT_IN_PROGRESS
    assert m.state.phase == NOT_STARTED


def test_second_start_is_rejected(started):
    res = asyncio.run(started.start_round("hard", "en"))
    assert not res.accepted
    assert started.state.difficulty == "medium"


def test_start_failure_propagates():
    cfg = EngineConfig(fallback_to_static=False)
    m = make_machine(FakeProvider([ProviderError("down")]), config=cfg)
    with pytest.raises(CitySelectionError):
        asyncio.run(m.start_round("medium", "en"))
    assert m.state.phase == NOT_STARTED
    assert not m.busy


def test_concurrent_starts_share_one_selection():
    async def run():
        gate = asyncio.Event()
        provider = FakeProvider([city_json("Paris")], gate=gate)
        m = make_machine(provider)
        a = asyncio.ensure_future(m.start_round("easy", "en"))
        b = asyncio.ensure_future(m.start_round("easy", "en"))
        await asyncio.sleep(0)
        gate.set()
        return provider, m, await asyncio.gather(a, b)

    provider, m, results = asyncio.run(run())
    assert len(provider.calls) == 1
    assert all(r.accepted for r in results)
    assert m.state.city == PARIS


def test_busy_blocks_actions_and_stale_hint_is_dropped(static_config):
    async def run():
        gate = asyncio.Event()
        m = make_machine(FakeProvider(["A river runs through it."], gate=gate), config=static_config)
        await m.start_round("medium", "en")
        pending = asyncio.ensure_future(m.request_hint())
        await asyncio.sleep(0)
        assert m.busy
        assert (await m.request_hint()).reason == BUSY
        assert m.submit_guess("Paris").reason == BUSY
        await m.restart()
        gate.set()
        return m, await pending

    m, res = asyncio.run(run())
    assert res.reason == STALE
    assert m.state.round_id == 1
    assert m.state.hints == ()
    assert m.state.score == 70


def test_restart_keeps_settings_and_history_unique(static_config, store):
    m = make_machine(FakeProvider(), config=static_config, store=store, static_cities=(PARIS, ROME))
    asyncio.run(m.start_round("hard", "ru"))
    for i in range(6):
        m.submit_guess("Atlantis")
        asyncio.run(m.restart())
        assert m.state.round_id == i + 1
        assert m.state.difficulty == "hard" and m.state.locale == "ru"
        assert m.state.score == 70 and m.state.hints == () and m.state.guesses == ()

    names = UsedCityHistory(store).names()
    assert len(names) == len(set(names))
    assert set(names) <= {"Paris", "Rome"}


def test_map_pick_inside_the_city_wins_through_its_admin_area(static_config):
    new_york = City("New York", "New York", 40.7128, -74.0060)
    m = make_machine(FakeProvider(), config=static_config, static_cities=(new_york,))
    asyncio.run(m.start_round("easy", "en"))

    m.submit_guess("Manhattan", aliases=("New York County", "New York"))
    assert m.state.outcome == WIN
    assert m.state.guesses == ("Manhattan",)
    assert m.state.score == 70


def test_district_guess_without_aliases_is_wrong(started):
    started.submit_guess("Barbican")
    assert started.state.phase == IN_PROGRESS and started.state.score == 50
    started.submit_guess("Barbican", aliases=("Greater London", "London"))
    assert started.state.phase == IN_PROGRESS and started.state.score == 30


def test_restart_during_first_start_keeps_requested_settings():
    async def run():
        gate = asyncio.Event()
        provider = FakeProvider([city_json("Paris")], gate=gate)
        m = make_machine(provider)
        first = asyncio.ensure_future(m.start_round("hard", "uk"))
        await asyncio.sleep(0)
        second = asyncio.ensure_future(m.restart())
        await asyncio.sleep(0)
        gate.set()
        return m, await first, await second

    m, first, second = asyncio.run(run())
    assert first.reason == STALE
    assert second.accepted
    assert m.state.round_id == 1
    assert m.state.difficulty == "hard" and m.state.locale == "uk"
