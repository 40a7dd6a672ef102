"""
Validation for incoming score submissions and leaderboard queries.
"""

import math
import re
from typing import Any, Dict, Optional

USERNAME_MAX_LENGTH = 100
LEADERBOARD_LIMIT_DEFAULT = 10
LEADERBOARD_LIMIT_MAX = 25
GLOBAL_LEADERBOARD_LIMIT_MAX = 50

_LEADING_INT = re.compile(r"\s*[+-]?\d+")


class ScoreValidationError(ValueError):
    """Raised when a submission payload fails validation."""


def _to_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(numeric):
        return None
    return numeric


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def sanitize_username(value: Any, max_len: int = USERNAME_MAX_LENGTH) -> str:
    """Trim the alias, flatten newlines and cap its length. Non-strings become ''."""
    if not isinstance(value, str):
        return ""
    cleaned = value.replace("\r", " ").replace("\n", " ").strip()
    return cleaned[:max_len]


def sanitize_score(value: Any) -> Optional[int]:
    """Return the score rounded to an int, or None if it is not a non-negative number."""
    numeric = _to_number(value)
    if numeric is None or numeric < 0:
        return None
    return _round_half_up(numeric)


def sanitize_duration(value: Any) -> Optional[int]:
    """Like sanitize_score, but blank values are simply "not provided" (None)."""
    if value is None or value == "":
        return None
    return sanitize_score(value)


def clamp_limit(value: Any, default: int = LEADERBOARD_LIMIT_DEFAULT,
                maximum: int = LEADERBOARD_LIMIT_MAX) -> int:
    """
    Parse a ?limit= value and clamp it into [1, maximum].

    Only the leading integer counts ("2.5" -> 2, "5abc" -> 5);
    values without one fall back to `default`.
    """
    if value is None:
        return default
    match = _LEADING_INT.match(str(value))
    if match is None:
        return default
    return min(max(int(match.group(0)), 1), maximum)


def validate_submission(payload: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Validate a `{username, score, completion_time_seconds}` payload.

    Returns:
        Cleaned payload

    Raises:
        ScoreValidationError: with the user-facing error message
    """
    payload = payload if isinstance(payload, dict) else {}

    username = sanitize_username(payload.get('username'))
    if not username:
        raise ScoreValidationError("A username is required.")

    score = sanitize_score(payload.get('score'))
    if score is None:
        raise ScoreValidationError("Score must be a non-negative integer.")

    raw_time = payload.get('completion_time_seconds')
    completion_time = sanitize_duration(raw_time)
    if raw_time is not None and raw_time != "" and completion_time is None:
        raise ScoreValidationError("Completion time must be a non-negative number if provided.")

    return {
        'username': username,
        'score': score,
        'completion_time_seconds': completion_time,
    }
