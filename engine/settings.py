"""engine.settings

Deployment settings: Streamlit secrets first, then environment variables.

    LLM_PROVIDER          gemini | grok | none         (default gemini)
    GEMINI_API_KEY        comma-separated list allowed (GOOGLE_API_KEY also read)
    GROK_API_KEY
    CITY_SELECTION_MODE   generative | static          (default generative)
    CITY_FALLBACK_STATIC  1/0                          (default 1)
    GUESS_RULESET         retry | strict               (default retry)
    LLM_TIMEOUT_S         float seconds                (default 20)
    LOG_LEVEL, LOG_DIR, LOG_FILE
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from content.providers import ChatProvider, get_provider
from core.rules import ALLOWED_RULESETS, RULESET_RETRY

from .config import ALLOWED_SELECTION_MODES, SELECTION_GENERATIVE, EngineConfig


def _raw(name: str, secrets: Optional[Mapping[str, Any]]) -> str:
    if secrets is not None:
        try:
            if name in secrets:
                return str(secrets[name] or "").strip()
        except Exception:
            # st.secrets raises when no secrets.toml exists at all
            pass
    return (os.getenv(name) or "").strip()


def _env_bool(name: str, default: bool, secrets: Optional[Mapping[str, Any]]) -> bool:
    raw = _raw(name, secrets).lower()
    if raw in {"1", "true", "yes", "on"}:
        return True
    if raw in {"0", "false", "no", "off"}:
        return False
    return default


def _env_float(name: str, default: float, secrets: Optional[Mapping[str, Any]]) -> float:
    raw = _raw(name, secrets)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_choice(name: str, default: str, allowed: set, secrets: Optional[Mapping[str, Any]]) -> str:
    raw = _raw(name, secrets).lower()
    return raw if raw in allowed else default


@dataclass(frozen=True)
class AppSettings:
    provider_name: str = "gemini"
    gemini_keys: str = ""
    grok_key: str = ""
    selection_mode: str = SELECTION_GENERATIVE
    fallback_to_static: bool = True
    guess_ruleset: str = RULESET_RETRY
    timeout_s: float = 20.0
    log_level: str = "INFO"
    log_dir: str = "logs"
    log_file: str = ""

    def engine_config(self) -> EngineConfig:
        return EngineConfig(
            selection_mode=self.selection_mode,
            fallback_to_static=self.fallback_to_static,
            guess_ruleset=self.guess_ruleset,
            request_timeout_s=self.timeout_s,
        )

    def provider(self) -> ChatProvider:
        return get_provider(
            self.provider_name,
            gemini_keys=self.gemini_keys,
            grok_key=self.grok_key,
            timeout_s=self.timeout_s,
        )


def load_settings(secrets: Optional[Mapping[str, Any]] = None) -> AppSettings:
    return AppSettings(
        provider_name=_env_choice("LLM_PROVIDER", "gemini", {"gemini", "grok", "none"}, secrets),
        gemini_keys=_raw("GEMINI_API_KEY", secrets) or _raw("GOOGLE_API_KEY", secrets),
        grok_key=_raw("GROK_API_KEY", secrets),
        selection_mode=_env_choice("CITY_SELECTION_MODE", SELECTION_GENERATIVE, ALLOWED_SELECTION_MODES, secrets),
        fallback_to_static=_env_bool("CITY_FALLBACK_STATIC", True, secrets),
        guess_ruleset=_env_choice("GUESS_RULESET", RULESET_RETRY, ALLOWED_RULESETS, secrets),
        timeout_s=max(1.0, _env_float("LLM_TIMEOUT_S", 20.0, secrets)),
        log_level=(_raw("LOG_LEVEL", secrets) or "INFO").upper(),
        log_dir=_raw("LOG_DIR", secrets) or "logs",
        log_file=_raw("LOG_FILE", secrets),
    )
