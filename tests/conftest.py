import asyncio
import json
import random
from typing import Any, Dict, List, Optional

import pytest

from content.providers.base import ProviderError, ProviderStatus
from core.state import City
from engine.catalog import CityCatalog
from engine.config import SELECTION_STATIC, EngineConfig
from engine.hints import HintGenerator
from engine.round import RoundMachine
from engine.session import MappingSessionStore, UsedCityHistory

PARIS = City("Paris", "Paris", 48.8566, 2.3522)


def city_json(name: str, name_en: Optional[str] = None, lat: float = 48.8566, lng: float = 2.3522) -> str:
    return json.dumps({"name": name, "nameEn": name_en or name, "lat": lat, "lng": lng}, ensure_ascii=False)


class FakeProvider:
    """Scripted provider: pops one reply per call (str or exception).

    With `gate` set, every call waits for the event before answering.
    """

    def __init__(self, replies: Optional[List[Any]] = None, default: Any = None, gate: Optional[asyncio.Event] = None):
        self.replies = list(replies or [])
        self.default = default
        self.gate = gate
        self.calls: List[Dict[str, Any]] = []

    def status(self) -> ProviderStatus:
        return ProviderStatus(True, "fake", "fake-1")

    async def complete(self, messages, *, json_mode=False, temperature=0.7, max_output_tokens=400):
        self.calls.append({"messages": messages, "json_mode": json_mode, "temperature": temperature})
        if self.gate is not None:
            await self.gate.wait()
        reply = self.replies.pop(0) if self.replies else self.default
        if reply is None:
            raise ProviderError("no scripted reply")
        if isinstance(reply, BaseException):
            raise reply
        return reply


def make_machine(
    provider: FakeProvider,
    *,
    config: Optional[EngineConfig] = None,
    store: Optional[MappingSessionStore] = None,
    static_cities=(PARIS,),
    state=None,
) -> RoundMachine:
    cfg = config or EngineConfig(mask_seed=1)
    history = UsedCityHistory(store or MappingSessionStore())
    catalog = CityCatalog(
        provider=provider, history=history, config=cfg, static_cities=static_cities, rng=random.Random(0)
    )
    return RoundMachine(catalog=catalog, hints=HintGenerator(provider=provider, config=cfg), config=cfg, state=state)


@pytest.fixture()
def store():
    return MappingSessionStore()


@pytest.fixture()
def history(store):
    return UsedCityHistory(store)


@pytest.fixture()
def static_config():
    return EngineConfig(selection_mode=SELECTION_STATIC, mask_seed=1)


@pytest.fixture()
def paris():
    return PARIS


@pytest.fixture()
def started(static_config):
    """A machine with a Paris round in progress; every hint comes from the fallback table."""
    m = make_machine(FakeProvider(), config=static_config)
    asyncio.run(m.start_round("medium", "en"))
    return m
