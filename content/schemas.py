"""content.schemas

Contract for the city-selection answer of the model:

    {"name": "<localized>", "nameEn": "<English>", "lat": <float>, "lng": <float>}

city_from_llm() normalizes common key variants and validates ranges; anything
that cannot become a valid City raises ValueError (the caller treats that as a
selection failure).
"""

from __future__ import annotations

import math
from typing import Any, Mapping

from core.state import City


def _as_float(x: Any) -> float:
    try:
        v = float(x)
    except (TypeError, ValueError):
        raise ValueError(f"not a number: {x!r}")
    if math.isnan(v) or math.isinf(v):
        raise ValueError(f"not a finite number: {x!r}")
    return v


def _first(data: Mapping[str, Any], *keys: str) -> Any:
    for k in keys:
        if k in data and data[k] not in (None, ""):
            return data[k]
    return None


def city_from_llm(data: Mapping[str, Any]) -> City:
    name = str(_first(data, "name", "city", "localName") or "").strip()
    name_en = str(_first(data, "nameEn", "name_en", "englishName", "english_name") or "").strip()
    if not name and not name_en:
        raise ValueError("city name missing")

    lat_raw = _first(data, "lat", "latitude")
    lng_raw = _first(data, "lng", "lon", "long", "longitude")
    if lat_raw is None or lng_raw is None:
        raise ValueError("city coordinates missing")

    city = City(
        name=name or name_en,
        name_en=name_en or name,
        lat=_as_float(lat_raw),
        lng=_as_float(lng_raw),
    )
    validate_city(city)
    return city


def validate_city(c: City) -> None:
    if len((c.name or "").strip()) < 1:
        raise ValueError("city.name empty")
    if len((c.name_en or "").strip()) < 1:
        raise ValueError("city.name_en empty")
    if not (-90.0 <= float(c.lat) <= 90.0):
        raise ValueError(f"city.lat out of range: {c.lat}")
    if not (-180.0 <= float(c.lng) <= 180.0):
        raise ValueError(f"city.lng out of range: {c.lng}")
