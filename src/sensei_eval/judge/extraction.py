"""Judge reply parsing.

Pulls the {score, reasoning, suggestions} object out of the judge's
text reply, tolerating markdown fences and surrounding prose.
"""

from __future__ import annotations

import json
import re

from sensei_eval.errors import JudgeResponseError
from sensei_eval.judge.base import JudgeVerdict

_FENCE_OPEN_RE = re.compile(r"^```(?:json)?\s*\n?")
_FENCE_CLOSE_RE = re.compile(r"\n?```\s*$")


def strip_code_fences(text: str) -> str:
    """Remove a wrapping ```/```json fence if the model added one."""
    text = text.strip()
    if text.startswith("```"):
        text = _FENCE_OPEN_RE.sub("", text)
        text = _FENCE_CLOSE_RE.sub("", text)
    return text


def extract_json_object(text: str) -> dict | None:
    """Parse a JSON object from text.

    Tries the whole (fence-stripped) text first, then the span from the
    first '{' to the last '}'.

    Returns:
        Parsed dict or None if neither strategy yields an object.
    """
    if not text:
        return None

    stripped = strip_code_fences(text)
    try:
        result = json.loads(stripped)
        if isinstance(result, dict):
            return result
    except json.JSONDecodeError:
        pass

    first_brace = stripped.find("{")
    last_brace = stripped.rfind("}")
    if first_brace != -1 and last_brace > first_brace:
        try:
            result = json.loads(stripped[first_brace : last_brace + 1])
            if isinstance(result, dict):
                return result
        except json.JSONDecodeError:
            pass

    return None


def parse_verdict(text: str | None) -> JudgeVerdict:
    """Turn a judge reply into a JudgeVerdict.

    Non-string suggestions are dropped; a missing suggestions list
    becomes empty.

    Raises:
        JudgeResponseError: If no JSON object is found, or ``score`` is
            not a number, or ``reasoning`` is not a string.
    """
    raw = text or ""
    data = extract_json_object(raw)
    if data is None:
        raise JudgeResponseError(f"Invalid judge response: {raw}", raw_text=raw)

    score = data.get("score")
    reasoning = data.get("reasoning")
    if isinstance(score, bool) or not isinstance(score, (int, float)) or not isinstance(reasoning, str):
        raise JudgeResponseError(f"Invalid judge response: {raw}", raw_text=raw)

    suggestions = data.get("suggestions")
    if isinstance(suggestions, list):
        suggestions = [s for s in suggestions if isinstance(s, str)]
    else:
        suggestions = []

    return JudgeVerdict(score=float(score), reasoning=reasoning, suggestions=suggestions)
