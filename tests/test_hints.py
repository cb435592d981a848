import asyncio

import pytest

from conftest import PARIS, FakeProvider
from content.fallback import fallback_hint
from content.prompts import hint_guideline
from content.providers.base import ProviderError
from core.rules import redact_city_name
from core.state import City
from engine.config import EngineConfig
from engine.hints import HintGenerator

NICE = City("Nice", "Nice", 43.7102, 7.2620)
BATH = City("Bath", "Bath", 51.3811, -2.3590)
RIO = City("Rio de Janeiro", "Rio de Janeiro", -22.9068, -43.1729)


def _gen(provider, **cfg):
    return HintGenerator(provider=provider, config=EngineConfig(mask_seed=1, **cfg))


def test_hint_from_provider_is_cleaned():
    provider = FakeProvider(['```text\nHint #2: "A famous iron tower stands here."\n```'])
    hint = asyncio.run(_gen(provider).next_hint(2, PARIS, ["It is in Europe."], "en"))
    assert hint == "A famous iron tower stands here."
    prompt = provider.calls[0]["messages"][-1]["content"]
    assert "hint #2 of 10" in prompt
    assert "It is in Europe." in prompt


def test_city_name_is_redacted():
    provider = FakeProvider(["Paris is known as the city of light."])
    hint = asyncio.run(_gen(provider).next_hint(1, PARIS, [], "en"))
    assert "Paris" not in hint
    assert hint.startswith("*****")


def test_provider_failure_uses_locale_fallback():
    gen = _gen(FakeProvider([ProviderError("boom")]))
    hint = asyncio.run(gen.next_hint(4, PARIS, ["a", "b", "c"], "uk"))
    assert hint == fallback_hint(4, "uk")
    assert gen.last_fallback


@pytest.mark.parametrize("reply", ["", "   ", "It is in Europe."])
def test_empty_or_repeated_hint_uses_fallback(reply):
    gen = _gen(FakeProvider([reply]))
    hint = asyncio.run(gen.next_hint(2, PARIS, ["It is in Europe."], "en"))
    assert hint == fallback_hint(2, "en")


def test_timeout_uses_fallback():
    async def run():
        gen = _gen(FakeProvider(["late"], gate=asyncio.Event()), request_timeout_s=0.05)
        return await gen.next_hint(1, PARIS, [], "en")

    assert asyncio.run(run()) == fallback_hint(1, "en")


def test_tenth_hint_is_masked_name_without_provider_call():
    provider = FakeProvider()
    gen = _gen(provider)
    previous = [f"hint {i}" for i in range(1, 10)]
    hint = asyncio.run(gen.next_hint(10, PARIS, previous, "en"))
    assert hint.startswith("The city's name: P")
    masked = hint.split(": ", 1)[1]
    assert len(masked) == 5 and masked.count("*") == 2
    assert provider.calls == []


def test_mask_is_stable_per_round():
    gen = _gen(FakeProvider())
    assert gen.reveal_hint(PARIS, "en", round_id=3) == gen.reveal_hint(PARIS, "en", round_id=3)


@pytest.mark.parametrize("index,previous", [(0, []), (11, ["h"] * 10), (3, ["only one"])])
def test_bad_index_raises(index, previous):
    with pytest.raises(ValueError):
        asyncio.run(_gen(FakeProvider()).next_hint(index, PARIS, previous, "en"))


def test_redaction_masks_whole_words_only():
    assert redact_city_name("A nice seaside promenade runs through Nice.", NICE) == (
        "A nice seaside promenade runs through ****."
    )
    assert redact_city_name("NICE hosts a carnival.", NICE) == "**** hosts a carnival."
    assert redact_city_name("Roman bathing houses gave Bath its name.", BATH) == (
        "Roman bathing houses gave **** its name."
    )


def test_ordinary_words_survive_in_generated_hint():
    provider = FakeProvider(["The weather is very nice in winter."])
    hint = asyncio.run(_gen(provider).next_hint(3, NICE, ["a", "b"], "en"))
    assert hint == "The weather is very nice in winter."


@pytest.mark.parametrize("index", range(1, 10))
def test_each_index_gets_its_own_tier_guideline(index):
    provider = FakeProvider(["A fresh clue."])
    previous = [f"clue {i}" for i in range(1, index)]
    asyncio.run(_gen(provider).next_hint(index, RIO, previous, "en"))

    prompt = provider.calls[0]["messages"][-1]["content"]
    assert hint_guideline(index, RIO) in prompt
    for other in range(1, 10):
        if other != index:
            assert hint_guideline(other, RIO) not in prompt


def test_ninth_hint_prompt_carries_name_length():
    assert "exactly 14 characters" in hint_guideline(9, RIO)
    provider = FakeProvider(["It is in Brazil."])
    asyncio.run(_gen(provider).next_hint(9, RIO, [f"clue {i}" for i in range(1, 9)], "en"))
    assert "14" in provider.calls[0]["messages"][-1]["content"]
