"""
Repository pattern implementations for data access.

This module provides a clean abstraction over database operations
with proper connection management and error handling.
"""

from .base import BaseRepository
from .arcade_repository import ArcadeRepository
from .leaderboard_repository import LeaderboardRepository

__all__ = ['BaseRepository', 'ArcadeRepository', 'LeaderboardRepository']
