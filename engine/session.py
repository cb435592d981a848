"""engine.session

Session-scoped key/value storage.

The engine never touches Streamlit directly: it talks to a SessionStore.
MappingSessionStore adapts any mutable mapping (st.session_state in the app,
a plain dict in tests). Values are stored JSON-serialized.
"""

from __future__ import annotations

import json
import logging
from typing import Any, List, MutableMapping, Optional, Protocol, Tuple

from core.state import city_key, normalize_difficulty, normalize_locale

log = logging.getLogger(__name__)

USED_CITIES_KEY = "city_guesser.used_cities"
DIFFICULTY_KEY = "city_guesser.difficulty"
LOCALE_KEY = "city_guesser.locale"


class SessionStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MappingSessionStore:
    def __init__(self, mapping: Optional[MutableMapping[str, Any]] = None):
        self._data: MutableMapping[str, Any] = {} if mapping is None else mapping

    def get(self, key: str) -> Optional[str]:
        v = self._data.get(key)
        return None if v is None else str(v)

    def set(self, key: str, value: str) -> None:
        self._data[key] = str(value)

    def remove(self, key: str) -> None:
        if key in self._data:
            del self._data[key]


def _load_json(store: SessionStore, key: str, default: Any) -> Any:
    raw = store.get(key)
    if raw is None:
        return default
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        log.warning("Dropping unreadable session value for %s", key)
        store.remove(key)
        return default


class UsedCityHistory:
    """Ordered set of canonical city names used in this session."""

    def __init__(self, store: SessionStore, key: str = USED_CITIES_KEY):
        self.store = store
        self.key = key

    def names(self) -> List[str]:
        data = _load_json(self.store, self.key, [])
        if not isinstance(data, list):
            return []
        return [str(x) for x in data if str(x).strip()]

    def __contains__(self, name: object) -> bool:
        k = city_key(str(name))
        return any(city_key(n) == k for n in self.names())

    def __len__(self) -> int:
        return len(self.names())

    def add(self, name: str) -> bool:
        """Append `name` unless already present. Returns True when appended."""
        name = " ".join(str(name or "").split())
        if not name or name in self:
            return False
        names = self.names()
        names.append(name)
        self.store.set(self.key, json.dumps(names, ensure_ascii=False))
        return True

    def clear(self) -> None:
        self.store.remove(self.key)


def save_preferences(store: SessionStore, *, difficulty: str, locale: str) -> None:
    store.set(DIFFICULTY_KEY, json.dumps(normalize_difficulty(difficulty)))
    store.set(LOCALE_KEY, json.dumps(normalize_locale(locale)))


def load_preferences(store: SessionStore, *, default_difficulty: str = "medium", default_locale: str = "en") -> Tuple[str, str]:
    difficulty = _load_json(store, DIFFICULTY_KEY, default_difficulty)
    locale = _load_json(store, LOCALE_KEY, default_locale)
    return normalize_difficulty(difficulty, default_difficulty), normalize_locale(locale, default_locale)


def end_session(store: SessionStore) -> None:
    """Session end hook: forget used cities and preferences."""
    for key in (USED_CITIES_KEY, DIFFICULTY_KEY, LOCALE_KEY):
        store.remove(key)
