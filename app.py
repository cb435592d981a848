"""City Guesser (Streamlit)

Principles:
- UI only renders + triggers.
- Core domain and engine are pure Python modules.
- Cities and hints come from an LLM (Gemini or Grok). If the LLM fails we fall
  back to a static city list / generic hints, and only a failed round start is
  shown to the player.

Entry point for Streamlit Cloud: app.py
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any, Dict

import folium
import streamlit as st
from streamlit_folium import st_folium

from content.geocoding import reverse_geocode_place
from content.i18n import LANGUAGE_NAMES, get_translations
from core.state import ALLOWED_DIFFICULTIES, NOT_STARTED, WIN, RoundState, default_start_state, state_to_dict
from engine.catalog import CityCatalog, CitySelectionError
from engine.hints import HintGenerator
from engine.log_config import configure_logging
from engine.logging import dumps_round_export, make_round_export
from engine.round import RoundMachine, StepResult
from engine.session import MappingSessionStore, UsedCityHistory, end_session, load_preferences, save_preferences
from engine.settings import AppSettings, load_settings


APP_TITLE = "City Guesser"
APP_VERSION = "1.0.0"

st.set_page_config(page_title=APP_TITLE, page_icon="🌍", layout="wide", initial_sidebar_state="expanded")

CSS = """
<style>
.block-container {padding-top: 2.4rem; padding-bottom: 2rem;}
.hint {
  border: 1px solid rgba(255,255,255,0.10);
  border-radius: 12px;
  padding: 10px 14px;
  margin-bottom: 8px;
  background: rgba(255,255,255,0.03);
}
.pill {
  display: inline-block;
  padding: 2px 10px;
  border-radius: 999px;
  border: 1px solid rgba(255,255,255,0.12);
  font-size: 12px;
  opacity: .85;
}
.small {font-size: 13px; opacity:.75;}
</style>
"""

st.markdown(CSS, unsafe_allow_html=True)

log = logging.getLogger("city_guesser.app")


def bootstrap_core_or_stop() -> None:
    """Stop with a helpful message if the repo was partially updated."""
    api_ver = getattr(__import__("core"), "API_VERSION", None)
    if api_ver != "core-v1-city-guesser":
        st.error(
            "Core version does not match the app version (the repo may be mixed up).\n\n"
            f"Expected core: core-v1-city-guesser, found: {api_ver!r}"
        )
        st.stop()


bootstrap_core_or_stop()


# =========================
# Helpers
# =========================


def _now_id() -> str:
    return datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S%f")


def _settings() -> AppSettings:
    s = load_settings(st.secrets)
    configure_logging(level=s.log_level, log_dir=s.log_dir, log_filename=s.log_file or None)
    return s


def _store() -> MappingSessionStore:
    return MappingSessionStore(st.session_state)


def _t() -> Dict[str, str]:
    return get_translations(st.session_state.get("locale", "en"))


def _machine() -> RoundMachine:
    """Rebuild the engine around the persisted round state (one per rerun)."""
    ss = st.session_state
    settings = _settings()
    cfg = settings.engine_config()
    provider = settings.provider()
    catalog = CityCatalog(provider=provider, history=UsedCityHistory(_store()), config=cfg)
    hints = HintGenerator(provider=provider, config=cfg)
    machine = RoundMachine(catalog=catalog, hints=hints, config=cfg, state=ss.round_state)
    machine.events = ss.round_events
    return machine


def _commit(machine: RoundMachine) -> None:
    ss = st.session_state
    ss.round_state = machine.state
    ss.round_events = machine.events
    ss.last_raw = machine.hints.last_raw or machine.catalog.last_raw or ss.get("last_raw", "")


def _run(coro) -> Any:
    return asyncio.run(coro)


# =========================
# Session State
# =========================


def _ensure_state() -> None:
    ss = st.session_state
    if "run_id" not in ss:
        ss.run_id = _now_id()
    if "difficulty" not in ss or "locale" not in ss:
        difficulty, locale = load_preferences(_store())
        ss.difficulty = ss.get("difficulty", difficulty)
        ss.locale = ss.get("locale", locale)
    if "round_state" not in ss:
        ss.round_state = default_start_state(difficulty=ss.difficulty, locale=ss.locale)
    if "round_events" not in ss:
        ss.round_events = []
    if "start_error" not in ss:
        ss.start_error = ""
    if "map_pick" not in ss:
        ss.map_pick = ""
    if "map_aliases" not in ss:
        ss.map_aliases = ()
    if "last_click" not in ss:
        ss.last_click = None
    if "guess_text" not in ss:
        ss.guess_text = ""
    if "flash" not in ss:
        ss.flash = ""
    if "last_raw" not in ss:
        ss.last_raw = ""


def _clear_round_inputs() -> None:
    ss = st.session_state
    ss.map_pick = ""
    ss.map_aliases = ()
    ss.last_click = None
    ss.guess_text = ""
    ss.flash = ""


def _reset_session() -> None:
    """New session: forget used cities and preferences."""
    ss = st.session_state
    end_session(_store())
    for k in list(ss.keys()):
        del ss[k]
    _ensure_state()


# =========================
# Actions
# =========================


def _start_round(restart: bool = False) -> None:
    ss = st.session_state
    machine = _machine()
    save_preferences(_store(), difficulty=ss.difficulty, locale=ss.locale)
    try:
        with st.spinner(_t()["initializing"]):
            if restart:
                _run(machine.restart())
            else:
                _run(machine.start_round(ss.difficulty, ss.locale))
        ss.start_error = ""
    except CitySelectionError as e:
        log.error("Round start failed: %s", e)
        ss.start_error = str(e)
    _clear_round_inputs()
    _commit(machine)


def _request_hint() -> StepResult:
    machine = _machine()
    with st.spinner(_t()["getting_hint"]):
        res = _run(machine.request_hint())
    _commit(machine)
    return res


def _submit_guess(text: str) -> StepResult:
    ss = st.session_state
    machine = _machine()
    # admin areas only count while the box still holds the map pick
    aliases = ss.map_aliases if ss.map_pick and text.strip() == ss.map_pick else ()
    res = machine.submit_guess(text, aliases=aliases)
    _commit(machine)
    if res.accepted and not machine.state.terminal:
        ss.flash = _t()["wrong_guess"].format(penalty=machine.config.guess_penalty)
    return res


# =========================
# UI Pages
# =========================


def page_setup() -> None:
    ss = st.session_state
    t = _t()
    st.title(APP_TITLE)
    st.caption(t["tagline"])

    st.markdown(f"### {t['select_difficulty']}")
    ix = ALLOWED_DIFFICULTIES.index(ss.difficulty) if ss.difficulty in ALLOWED_DIFFICULTIES else 1
    ss.difficulty = st.radio(
        t["select_difficulty"],
        list(ALLOWED_DIFFICULTIES),
        index=ix,
        format_func=lambda k: f"{t[k]} · {t[k + '_description']}",
        label_visibility="collapsed",
    )

    if ss.start_error:
        st.error(t["start_failed"])
        st.caption(ss.start_error)

    label = t["retry"] if ss.start_error else t["start"]
    if st.button(label, type="primary"):
        _start_round()
        st.rerun()


def _render_map(state: RoundState) -> None:
    ss = st.session_state
    m = folium.Map(location=[20.0, 0.0], zoom_start=2, tiles="OpenStreetMap", world_copy_jump=True)

    if ss.last_click:
        lat, lng = ss.last_click
        folium.Marker(
            location=[lat, lng],
            icon=folium.Icon(color="blue", icon="map-marker"),
            tooltip=ss.map_pick or f"{lat:.3f}, {lng:.3f}",
        ).add_to(m)

    if state.terminal and state.city is not None:
        color = "green" if state.outcome == WIN else "red"
        folium.Marker(
            location=[state.city.lat, state.city.lng],
            icon=folium.Icon(color=color, icon="star"),
            popup=state.city.name,
            tooltip=state.city.name,
        ).add_to(m)

    map_data = st_folium(m, height=460, width=None, key="guess_map", returned_objects=["last_clicked"])

    if state.terminal or not map_data or not map_data.get("last_clicked"):
        return
    clicked = (float(map_data["last_clicked"]["lat"]), float(map_data["last_clicked"]["lng"]))
    if clicked != ss.last_click:
        ss.last_click = clicked
        pick = reverse_geocode_place(*clicked)
        ss.map_pick = pick.name if pick else ""
        ss.map_aliases = pick.aliases if pick else ()
        ss.guess_text = ss.map_pick
        st.rerun()


def page_play() -> None:
    ss = st.session_state
    t = _t()
    state: RoundState = ss.round_state
    machine = _machine()

    st.title(APP_TITLE)

    a, b, c = st.columns(3)
    a.metric(t["points"], state.score)
    b.metric(t["hints"], f"{state.hint_count}/{machine.config.max_hints}")
    c.metric(t["difficulty_level"], t.get(state.difficulty, state.difficulty))

    left, right = st.columns([1.0, 1.6])

    with left:
        st.markdown(f"### {t['hints']}")
        if state.hint_count < machine.config.free_hints:
            st.markdown(f"<span class='pill'>{t['free_hints']}</span>", unsafe_allow_html=True)
        else:
            st.markdown(f"<span class='pill'>{t['per_hint'].format(cost=machine.config.hint_cost)}</span>", unsafe_allow_html=True)

        if not state.hints:
            st.caption(t["hints_will_appear"])
        for i, h in enumerate(state.hints, start=1):
            st.markdown(f"<div class='hint'>{h}<br/><span class='small'>{t['hint_number']}{i}</span></div>", unsafe_allow_html=True)

        cost = machine.next_hint_cost()
        if state.hint_count >= machine.config.max_hints:
            btn = t["no_more_hints"]
        elif state.score < cost:
            btn = t["not_enough_points"].format(score=state.score, cost=cost)
        else:
            btn = t["lets_play"] if state.hint_count == 0 else t["next_hint"]

        if st.button(btn, disabled=not machine.can_request_hint(), use_container_width=True):
            _request_hint()
            st.rerun()

    with right:
        st.markdown(f"### {t['map']}")
        _render_map(state)

        if state.terminal:
            city = state.city.name if state.city else ""
            if state.outcome == WIN:
                st.success(f"{t['you_won']} {t['congratulations']} {city}!")
            else:
                st.error(f"{t['game_over']} {t['city_was']} {city}. {t['better_luck']}")
            if st.button(t["play_again"], type="primary", use_container_width=True):
                _start_round(restart=True)
                st.rerun()
            return

        if ss.flash:
            st.warning(ss.flash)
            ss.flash = ""

        with st.form("guess_form", clear_on_submit=False):
            guess = st.text_input(t["city_name"], key="guess_text", placeholder=t["enter_city_name"])
            if ss.map_pick and guess.strip() != ss.map_pick:
                st.caption(f"{t['different_from_map']} **{ss.map_pick}**")
            st.caption(t["write_city_or_map"])
            submitted = st.form_submit_button(t["submit_guess"], disabled=not machine.can_guess())
        if submitted:
            _submit_guess(guess or ss.map_pick)
            st.rerun()


def page_history() -> None:
    ss = st.session_state
    t = _t()
    st.title(t["history"])

    if not ss.round_events:
        st.info(t["no_rounds_yet"])
        return

    for ev in reversed(ss.round_events):
        kind = ev.get("event")
        rid = ev.get("round_id")
        details = {k: v for k, v in ev.items() if k not in {"event", "round_id"}}
        st.markdown(f"**#{rid} · {kind}**: " + ", ".join(f"{k}: {v}" for k, v in details.items()))

    used = UsedCityHistory(_store()).names()
    if used:
        st.markdown("---")
        st.caption(", ".join(used))


def page_debug() -> None:
    ss = st.session_state
    t = _t()
    settings = _settings()
    st.title(t["debug"])

    st.json(asdict(settings.provider().status()))
    st.json(state_to_dict(ss.round_state))

    if ss.last_raw:
        with st.expander(t["last_raw_output"]):
            st.code(ss.last_raw)

    export = make_round_export(config=settings.engine_config(), state=ss.round_state, events=list(ss.round_events))
    st.download_button(
        t["download_round_log"],
        data=dumps_round_export(export).encode("utf-8"),
        file_name=f"city-guesser-{ss.run_id}.json",
        mime="application/json",
    )


# =========================
# Sidebar
# =========================


def sidebar() -> str:
    ss = st.session_state
    t = _t()

    st.sidebar.markdown(f"**{APP_TITLE}**  ")
    st.sidebar.markdown(f"v{APP_VERSION}")
    st.sidebar.markdown("---")

    locales = list(LANGUAGE_NAMES.keys())
    ix = locales.index(ss.locale) if ss.locale in locales else 0
    started = ss.round_state.phase != NOT_STARTED
    ss.locale = st.sidebar.selectbox(
        t["language"], locales, index=ix, format_func=lambda k: LANGUAGE_NAMES[k], disabled=started
    )

    ps = _settings().provider().status()
    if ps.ok:
        st.sidebar.success(t["llm_ready"].format(backend=ps.backend, model=ps.model))
    else:
        st.sidebar.warning(t["llm_offline"])
        st.sidebar.caption(ps.error)

    if st.sidebar.button(t["new_session"], use_container_width=True):
        _reset_session()
        st.rerun()

    st.sidebar.markdown("---")
    return st.sidebar.radio(t["page"], ["play", "history", "debug"], index=0, format_func=lambda k: t[k])


# =========================
# Main
# =========================


def main() -> None:
    _ensure_state()
    page = sidebar()

    ss = st.session_state

    if page == "history":
        page_history()
        return
    if page == "debug":
        page_debug()
        return

    if ss.round_state.phase == NOT_STARTED:
        page_setup()
        return

    try:
        page_play()
    except Exception as e:
        log.exception("Play page failed")
        st.error(_t()["something_went_wrong"].format(error=e))


if __name__ == "__main__":
    main()
