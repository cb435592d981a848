from engine.session import (
    DIFFICULTY_KEY,
    USED_CITIES_KEY,
    MappingSessionStore,
    UsedCityHistory,
    end_session,
    load_preferences,
    save_preferences,
)


def test_history_is_an_ordered_set(history):
    assert history.add("Paris")
    assert history.add("New  York")
    assert not history.add("paris")
    assert not history.add(" new york ")
    assert history.names() == ["Paris", "New York"]
    assert "PARIS" in history
    assert len(history) == 2


def test_history_lives_in_the_backing_mapping():
    backing = {}
    UsedCityHistory(MappingSessionStore(backing)).add("Rome")
    assert USED_CITIES_KEY in backing
    assert UsedCityHistory(MappingSessionStore(backing)).names() == ["Rome"]


def test_unreadable_history_is_dropped():
    backing = {USED_CITIES_KEY: "{not json"}
    history = UsedCityHistory(MappingSessionStore(backing))
    assert history.names() == []
    assert USED_CITIES_KEY not in backing


def test_preferences_round_trip_and_defaults(store):
    assert load_preferences(store) == ("medium", "en")
    save_preferences(store, difficulty="hard", locale="uk-UA")
    assert load_preferences(store) == ("hard", "uk")


def test_bad_preferences_fall_back_to_defaults(store):
    store.set(DIFFICULTY_KEY, '"impossible"')
    assert load_preferences(store, default_difficulty="easy")[0] == "easy"


def test_end_session_clears_everything(store, history):
    history.add("Paris")
    save_preferences(store, difficulty="easy", locale="ru")
    end_session(store)
    assert history.names() == []
    assert load_preferences(store) == ("medium", "en")
