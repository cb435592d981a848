"""content.parsing

Robust parsing of model outputs.

City selection answers are JSON objects, hints are plain text. Models wrap both
in noise (code fences, smart quotes, "Hint #3:" prefixes, trailing commas), so
we clean before parsing. We never execute code: json.loads first, then an
ast.literal_eval fallback over a normalized literal.
"""

from __future__ import annotations

import ast
import json
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ParseResult:
    data: Optional[Dict[str, Any]]
    raw: str
    cleaned: str
    error: str = ""


_FENCE_RE = re.compile(r"```(?:json|text)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)
_HINT_PREFIX_RE = re.compile(r"^\s*(?:hint|подсказка|підказка)\s*(?:#|№)?\s*\d*\s*[:.\-–]\s*", re.IGNORECASE)


def strip_code_fences(s: str) -> str:
    s = (s or "").strip()
    m = _FENCE_RE.search(s)
    if m:
        return (m.group(1) or "").strip()
    return s


def extract_first_object(s: str) -> str:
    """Extract the outermost {...} block (best effort)."""
    s = (s or "").strip()
    i = s.find("{")
    if i < 0:
        return s
    j = s.rfind("}")
    if j <= i:
        return s[i:]
    return s[i : j + 1]


def normalize_smart_quotes(s: str) -> str:
    return (
        (s or "")
        .replace("\u201c", '"')
        .replace("\u201d", '"')
        .replace("\u00ab", '"')
        .replace("\u00bb", '"')
        .replace("\u2018", "'")
        .replace("\u2019", "'")
        .replace("\u00a0", " ")
    )


def remove_trailing_commas(s: str) -> str:
    return re.sub(r",\s*([}\]])", r"\1", s)


def try_parse_json(raw: str) -> ParseResult:
    """Best-effort parse of a JSON object. Returns ParseResult(data=None, error=...) on failure."""
    raw = (raw or "").strip()
    if not raw:
        return ParseResult(data=None, raw=raw, cleaned="", error="empty response")

    s = strip_code_fences(raw)
    s = extract_first_object(s)
    s = normalize_smart_quotes(s)
    s = remove_trailing_commas(s)

    try:
        obj = json.loads(s)
        if isinstance(obj, dict):
            return ParseResult(data=obj, raw=raw, cleaned=s)
        return ParseResult(data=None, raw=raw, cleaned=s, error="JSON root is not an object")
    except json.JSONDecodeError as e_json:
        err1 = f"json.loads: {e_json}"

    # single quotes, true/false/null
    s2 = re.sub(r"\btrue\b", "True", s, flags=re.IGNORECASE)
    s2 = re.sub(r"\bfalse\b", "False", s2, flags=re.IGNORECASE)
    s2 = re.sub(r"\bnull\b", "None", s2, flags=re.IGNORECASE)
    try:
        obj2 = ast.literal_eval(s2)
    except (ValueError, SyntaxError, TypeError, MemoryError, RecursionError) as e_ast:
        return ParseResult(data=None, raw=raw, cleaned=s, error=f"{err1} | literal_eval: {type(e_ast).__name__}: {e_ast}")
    if isinstance(obj2, dict):
        return ParseResult(data=json.loads(json.dumps(obj2, default=str)), raw=raw, cleaned=s)
    return ParseResult(data=None, raw=raw, cleaned=s, error=f"literal_eval root is not an object; {err1}")


def must_parse_json(raw: str) -> Dict[str, Any]:
    res = try_parse_json(raw)
    if not res.data:
        raise ValueError(res.error or "JSON parse failed")
    return res.data


def clean_hint_text(raw: str) -> str:
    """Turn a raw model answer into a single hint string ("" if nothing usable)."""
    s = strip_code_fences(raw)
    s = normalize_smart_quotes(s).strip()
    s = _HINT_PREFIX_RE.sub("", s)
    if len(s) >= 2 and s[0] == s[-1] and s[0] in {'"', "'"}:
        s = s[1:-1].strip()
    return " ".join(s.split())
