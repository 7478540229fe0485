"""
Tolerant parsing of text-generation output.

The upstream model is asked for JSON but is not bound to produce it, so
every parser here first takes the first well-formed bracketed block, falls
back to parsing the whole reply, and then validates field by field.
"""

import json
import math
import re
from typing import Any, Dict, List, Optional

from dependencies.models import DEFAULT_CATEGORY, DEFAULT_DIFFICULTY, DEFAULT_HOURS

CONFIDENCE_LEVELS = ("high", "medium", "low")
MAX_SUGGESTIONS = 5
MAX_SCRAPED_NAME_LENGTH = 50
EVALUATION_MAX_SCORE = 25

_THINK_BLOCK = re.compile(r"<think>.*?</think>", re.DOTALL | re.IGNORECASE)
_LIST_MARKER = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s+(.*)$")
_NAME_REASON_SPLIT = re.compile(r"\s+[-–—]\s+|:\s+")
_DECODER = json.JSONDecoder()


def _clean(text: str) -> str:
    """Drop reasoning blocks and markdown fences around the payload."""
    result = _THINK_BLOCK.sub("", text or "").strip()

    if result.startswith("```json"):
        result = result[7:]
    elif result.startswith("```"):
        result = result[3:]
    if result.endswith("```"):
        result = result[:-3]

    return result.strip()


def _extract(text: str, opener: str, expected: type) -> Any:
    cleaned = _clean(text)
    if not cleaned:
        raise ValueError("Empty response: no JSON content to parse")

    # First well-formed block of the expected type; prose after it may hold stray brackets.
    start = cleaned.find(opener)
    while start != -1:
        try:
            parsed, _ = _DECODER.raw_decode(cleaned, start)
        except json.JSONDecodeError:
            parsed = None
        if isinstance(parsed, expected):
            return parsed
        start = cleaned.find(opener, start + 1)

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ValueError(f"No JSON {expected.__name__} found in response: {cleaned[:200]}") from e

    if not isinstance(parsed, expected):
        raise ValueError(f"Expected JSON {expected.__name__}, got {type(parsed).__name__}")
    return parsed


def extract_json_object(text: str) -> Dict[str, Any]:
    return _extract(text, "{", dict)


def extract_json_array(text: str) -> List[Any]:
    return _extract(text, "[", list)


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if isinstance(value, (int, float)) and math.isfinite(value):
        return value
    return None


def _as_name_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def coerce_dependency_payload(data: Dict[str, Any], skill_name: str) -> Dict[str, Any]:
    """
    Validate a parsed dependency analysis field by field.

    Returns the wire-shaped object (camelCase keys) with defaults filled in
    for anything missing or of the wrong type.
    """
    description = data.get("description")
    if not isinstance(description, str) or not description.strip():
        description = f"Analysis for {skill_name}"

    difficulty = _as_number(data.get("difficulty"))
    hours = _as_number(data.get("estimatedHours", data.get("estimated_hours")))

    category = data.get("category")
    if not isinstance(category, str) or not category.strip():
        category = DEFAULT_CATEGORY

    return {
        "dependencies": _as_name_list(data.get("dependencies")),
        "description": description.strip(),
        "difficulty": difficulty if difficulty is not None else DEFAULT_DIFFICULTY,
        "estimatedHours": hours if hours is not None else DEFAULT_HOURS,
        "enables": _as_name_list(data.get("enables")),
        "category": category.strip(),
    }


def parse_dependency_analysis(text: str, skill_name: str) -> Dict[str, Any]:
    return coerce_dependency_payload(extract_json_object(text), skill_name)


def validate_suggestions(suggestions: Any) -> List[Dict[str, str]]:
    if not isinstance(suggestions, list):
        return []

    validated = []
    for suggestion in suggestions:
        if not isinstance(suggestion, dict):
            continue
        name = suggestion.get("name")
        if not isinstance(name, str) or not name.strip():
            continue

        reason = suggestion.get("reason")
        confidence = suggestion.get("confidence")
        category = suggestion.get("category")
        validated.append({
            "name": name.strip(),
            "reason": reason if isinstance(reason, str) and reason.strip()
            else "Prerequisite skill identified by AI analysis",
            "confidence": confidence if confidence in CONFIDENCE_LEVELS else "medium",
            "category": category if isinstance(category, str) and category.strip() else "other",
        })

    return validated[:MAX_SUGGESTIONS]


def extract_skills_from_text(text: str, skill_name: str) -> List[Dict[str, str]]:
    """Last-resort scraper for bulleted or numbered skill mentions."""
    skills = []
    for line in _clean(text).splitlines():
        marker = _LIST_MARKER.match(line)
        if not marker:
            continue

        body = marker.group(1).strip().strip("*").strip()
        parts = _NAME_REASON_SPLIT.split(body, maxsplit=1)
        name = parts[0].strip().strip("*").strip()
        reason = parts[1].strip() if len(parts) > 1 and parts[1].strip() else f"Prerequisite for {skill_name}"

        if not name or len(name) >= MAX_SCRAPED_NAME_LENGTH:
            continue
        if "prerequisite" in name.lower() or ":" in name:
            continue

        skills.append({
            "name": name,
            "reason": reason,
            "confidence": "medium",
            "category": "other",
        })

    return skills[:MAX_SUGGESTIONS]


def parse_suggestions(text: str, skill_name: str) -> List[Dict[str, str]]:
    try:
        suggestions = extract_json_array(text)
    except ValueError:
        suggestions = extract_skills_from_text(text, skill_name)
    return validate_suggestions(suggestions)


def _score(value: Any) -> int:
    number = _as_number(value)
    if number is None:
        return 0
    return int(max(0, min(EVALUATION_MAX_SCORE, number)))


def parse_evaluation(text: str) -> Dict[str, Any]:
    """Clamp each rubric score to 0..25 and recompute the total."""
    data = extract_json_object(text)
    scores = {
        key: _score(data.get(key))
        for key in ("clarity", "coverage", "depth", "misconceptions")
    }
    feedback = data.get("feedback")
    scores["feedback"] = feedback if isinstance(feedback, str) and feedback.strip() else "No feedback provided"
    scores["total_score"] = sum(
        scores[k] for k in ("clarity", "coverage", "depth", "misconceptions")
    )
    return scores
