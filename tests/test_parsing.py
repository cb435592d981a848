import pytest

from content.parsing import clean_hint_text, must_parse_json, try_parse_json
from content.schemas import city_from_llm


def test_parse_fenced_json_with_trailing_comma():
    raw = '```json\n{"name": "Рим", "nameEn": "Rome", "lat": 41.9, "lng": 12.5,}\n```'
    assert try_parse_json(raw).data == {"name": "Рим", "nameEn": "Rome", "lat": 41.9, "lng": 12.5}


def test_parse_object_inside_prose_and_smart_quotes():
    raw = "Here you go: {“name”: “Oslo”, “nameEn”: “Oslo”, “lat”: 59.9, “lng”: 10.7} enjoy"
    assert try_parse_json(raw).data["name"] == "Oslo"


def test_parse_python_style_literal():
    assert try_parse_json("{'name': 'Lima', 'ok': true}").data == {"name": "Lima", "ok": True}


@pytest.mark.parametrize("raw", ["", "no json here", "[1, 2]"])
def test_unparseable_reports_error(raw):
    res = try_parse_json(raw)
    assert res.data is None and res.error
    with pytest.raises(ValueError):
        must_parse_json(raw)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("Hint #4: The river splits the city.", "The river splits the city."),
        ('"It hosts a famous carnival."', "It hosts a famous carnival."),
        ("Подсказка 2: Город стоит на реке.", "Город стоит на реке."),
        ("  Two\n lines  ", "Two lines"),
        ("```\n```", ""),
    ],
)
def test_clean_hint_text(raw, expected):
    assert clean_hint_text(raw) == expected


def test_city_from_llm_accepts_key_variants():
    c = city_from_llm({"city": "Lisboa", "englishName": "Lisbon", "latitude": "38.72", "longitude": -9.14})
    assert (c.name, c.name_en, c.lat, c.lng) == ("Lisboa", "Lisbon", 38.72, -9.14)


def test_city_from_llm_fills_missing_name_form():
    c = city_from_llm({"nameEn": "Oslo", "lat": 59.9, "lng": 10.7})
    assert c.name == "Oslo"


@pytest.mark.parametrize(
    "data",
    [
        {"lat": 1, "lng": 2},
        {"name": "X", "lat": 1},
        {"name": "X", "lat": "north", "lng": 2},
        {"name": "X", "lat": 91, "lng": 2},
        {"name": "X", "lat": 1, "lng": -181},
        {"name": "X", "lat": float("nan"), "lng": 2},
    ],
)
def test_city_from_llm_rejects_bad_payloads(data):
    with pytest.raises(ValueError):
        city_from_llm(data)
