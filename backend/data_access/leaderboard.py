"""
Leaderboard and arcade query functions used by the Flask API.

These functions delegate to the repository classes for actual database
operations.
"""

from typing import List, Dict, Any, Optional

from .repositories import ArcadeRepository, LeaderboardRepository

# Repository instances
_arcade_repo = ArcadeRepository()
_leaderboard_repo = LeaderboardRepository()


def ensure_arcade(
    slug: str,
    title: str,
    description: Optional[str] = None,
    category: Optional[str] = None,
    difficulty: Optional[str] = None,
    players_label: Optional[str] = None,
    streak_label: Optional[str] = None
) -> Dict[str, Any]:
    """
    Make sure an arcade row exists for `slug` and return it.
    """
    return _arcade_repo.upsert(
        slug=slug,
        title=title,
        description=description,
        category=category,
        difficulty=difficulty,
        players_label=players_label,
        streak_label=streak_label
    )


def list_arcades(category: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Retrieve the arcade catalogue, optionally filtered by category.
    """
    return _arcade_repo.list_arcades(category=category)


def record_score(
    arcade_id: int,
    username: str,
    score: int,
    completion_time_seconds: Optional[int] = None
) -> Dict[str, Any]:
    """
    Insert a leaderboard row for a finished run.

    Args:
        arcade_id: Arcade the run belongs to
        username: Sanitized player alias
        score: Non-negative final score
        completion_time_seconds: Run duration, if known

    Returns:
        The stored entry
    """
    return _leaderboard_repo.insert_entry(
        arcade_id=arcade_id,
        username=username,
        score=score,
        completion_time_seconds=completion_time_seconds
    )


def get_arcade_leaderboard(arcade_id: int, limit: int = 10) -> List[Dict[str, Any]]:
    """
    Retrieve the ranked leaderboard for one arcade.
    """
    return _leaderboard_repo.get_top_entries(arcade_id, limit=limit)


def get_global_leaderboard(limit: int = 10) -> List[Dict[str, Any]]:
    """
    Retrieve per-player totals across every arcade.
    """
    return _leaderboard_repo.get_global_leaderboard(limit=limit)
