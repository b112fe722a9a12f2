"""Extraction of JSON documents from free-form model output."""

from __future__ import annotations

import json
import re
from typing import Any

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL | re.IGNORECASE)


def _extract_fenced_block(text: str) -> str | None:
    blocks = _FENCED_BLOCK.findall(text)
    return blocks[0].strip() if blocks else None


def _extract_balanced_json_span(text: str) -> str | None:
    """Best-effort extraction of the first balanced top-level JSON object/array."""
    starts = []
    first_obj = text.find("{")
    first_arr = text.find("[")
    if first_obj != -1:
        starts.append((first_obj, "{", "}"))
    if first_arr != -1:
        starts.append((first_arr, "[", "]"))
    if not starts:
        return None

    start_idx, open_ch, close_ch = min(starts, key=lambda x: x[0])
    depth = 0
    in_string = False
    escape = False
    for i in range(start_idx, len(text)):
        ch = text[i]
        if in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == open_ch:
            depth += 1
        elif ch == close_ch:
            depth -= 1
            if depth == 0:
                return text[start_idx : i + 1]
    return None


def json_candidates(raw_text: str) -> list[str]:
    """Return the distinct substrings of ``raw_text`` worth trying as JSON, best first."""
    text = (raw_text or "").strip()
    if not text:
        return []

    candidates: list[str] = []
    fenced = _extract_fenced_block(text)
    if fenced:
        candidates.append(fenced)
    candidates.append(text)
    balanced = _extract_balanced_json_span(text)
    if balanced:
        candidates.append(balanced)

    seen: set[str] = set()
    unique: list[str] = []
    for candidate in candidates:
        c = candidate.strip()
        if not c or c in seen:
            continue
        seen.add(c)
        unique.append(c)
    return unique


def parse_json_payload(raw_text: str) -> Any:
    """Parse the first candidate in ``raw_text`` that is valid JSON.

    Raises:
        ValueError: No candidate parses. The message lists the first parse errors.
    """
    errors: list[str] = []
    for candidate in json_candidates(raw_text):
        try:
            return json.loads(candidate, strict=False)
        except json.JSONDecodeError as e:
            errors.append(str(e))
    raise ValueError("No JSON document found in model output: " + " | ".join(errors[:3]))
