"""
Data access layer for arcade leaderboards.

This module provides functions for registering arcades, recording finished
runs and reading ranked leaderboards.
"""

from .leaderboard import (
    ensure_arcade,
    list_arcades,
    record_score,
    get_arcade_leaderboard,
    get_global_leaderboard,
)

__all__ = [
    'ensure_arcade',
    'list_arcades',
    'record_score',
    'get_arcade_leaderboard',
    'get_global_leaderboard',
]
