"""engine.logging

Small helpers for storing round logs.

A round export is JSON-serializable so it can be downloaded from the UI and
inspected later.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List

from core.state import RoundState, state_to_dict

from .config import EngineConfig


def make_round_export(*, config: EngineConfig, state: RoundState, events: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "version": 1,
        "config": config.to_dict(),
        "state": state_to_dict(state),
        "events": [dict(e) for e in events],
    }


def dumps_round_export(obj: Dict[str, Any]) -> str:
    return json.dumps(obj, ensure_ascii=False, indent=2, sort_keys=True)
