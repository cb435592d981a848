"""content.fallback

Offline content used when the language model is unavailable:
- STATIC_CITIES: small list of well-known cities (English names only)
- FALLBACK_HINTS: generic, city-agnostic hint sentences per locale
"""

from __future__ import annotations

from typing import Dict, List, Tuple

from core.state import City, normalize_locale

STATIC_CITIES: Tuple[City, ...] = (
    City("Tokyo", "Tokyo", 35.6762, 139.6503),
    City("New York", "New York", 40.7128, -74.0060),
    City("London", "London", 51.5074, -0.1278),
    City("Paris", "Paris", 48.8566, 2.3522),
    City("Sydney", "Sydney", -33.8688, 151.2093),
    City("Rio de Janeiro", "Rio de Janeiro", -22.9068, -43.1729),
    City("Cairo", "Cairo", 30.0444, 31.2357),
    City("Mumbai", "Mumbai", 19.0760, 72.8777),
    City("Beijing", "Beijing", 39.9042, 116.4074),
    City("Cape Town", "Cape Town", -33.9249, 18.4241),
    City("Moscow", "Moscow", 55.7558, 37.6173),
    City("Mexico City", "Mexico City", 19.4326, -99.1332),
    City("Berlin", "Berlin", 52.5200, 13.4050),
    City("Bangkok", "Bangkok", 13.7563, 100.5018),
    City("Rome", "Rome", 41.9028, 12.4964),
    City("Seoul", "Seoul", 37.5665, 126.9780),
    City("Toronto", "Toronto", 43.6532, -79.3832),
    City("Singapore", "Singapore", 1.3521, 103.8198),
    City("Istanbul", "Istanbul", 41.0082, 28.9784),
    City("Dubai", "Dubai", 25.2048, 55.2708),
)


FALLBACK_HINTS: Dict[str, List[str]] = {
    "en": [
        "This city is located on a continent with diverse cultures and languages.",
        "The climate here features distinct seasonal changes throughout the year.",
        "This urban area has historical significance dating back centuries.",
        "Water plays an important role in the geography of this location.",
        "The local cuisine has distinctive flavors and ingredients.",
        "Unique architectural styles define the city's skyline.",
        "The city has been featured in many famous creative works.",
        "A notable transportation system is used by locals and tourists.",
        "An iconic landmark can be seen from many points in the city.",
        "The city hosts a well-known annual event that attracts visitors.",
    ],
    "ru": [
        "Этот город находится на континенте с разнообразием культур и языков.",
        "Климат здесь отличается заметной сменой времён года.",
        "Этот город имеет многовековую историю.",
        "Вода играет важную роль в географии этого места.",
        "Местная кухня славится своими особыми вкусами и продуктами.",
        "Облик города определяют узнаваемые архитектурные стили.",
        "Город не раз появлялся в известных произведениях искусства.",
        "Здесь есть примечательная транспортная система, которой пользуются и жители, и туристы.",
        "Знаменитую достопримечательность видно из многих точек города.",
        "Город проводит известное ежегодное событие, привлекающее гостей.",
    ],
    "uk": [
        "Це місто розташоване на континенті з розмаїттям культур і мов.",
        "Клімат тут вирізняється помітною зміною пір року.",
        "Це місто має багатовікову історію.",
        "Вода відіграє важливу роль у географії цього місця.",
        "Місцева кухня славиться особливими смаками та продуктами.",
        "Вигляд міста визначають впізнавані архітектурні стилі.",
        "Місто неодноразово з'являлося у відомих творах мистецтва.",
        "Тут є примітна транспортна система, якою користуються і мешканці, і туристи.",
        "Знамениту пам'ятку видно з багатьох точок міста.",
        "Місто проводить відому щорічну подію, що приваблює гостей.",
    ],
}


def fallback_hint(index: int, locale: str) -> str:
    """Deterministic generic hint for 1-based `index` (cycles past the list)."""
    hints = FALLBACK_HINTS.get(normalize_locale(locale), FALLBACK_HINTS["en"])
    return hints[(max(1, int(index)) - 1) % len(hints)]
