"""
Leaderboard repository for score rows and ranking queries.
"""

from datetime import datetime
from typing import Dict, Any, List, Optional

from .base import BaseRepository


def _serialize_timestamp(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


class LeaderboardRepository(BaseRepository):
    """
    Repository for leaderboard table operations.
    """

    def insert_entry(
        self,
        arcade_id: int,
        username: str,
        score: int,
        completion_time_seconds: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Store one finished run.

        Returns:
            The stored row (username, score, completion_time_seconds, created_at)
        """
        with self.connection() as (conn, cursor):
            cursor.execute("""
                INSERT INTO leaderboard (arcade_id, username, score, completion_time_seconds)
                VALUES (%s, %s, %s, %s)
                RETURNING username, score, completion_time_seconds, created_at
            """, (arcade_id, username, score, completion_time_seconds))
            row = dict(cursor.fetchone())
        row['created_at'] = _serialize_timestamp(row.get('created_at'))
        return row

    def get_top_entries(self, arcade_id: int, limit: int = 10) -> List[Dict[str, Any]]:
        """
        Best runs for one arcade: score desc, then fastest time, then newest.

        Returns:
            Rows with a 1-based `rank`
        """
        rows = self.fetch_all("""
            SELECT username, score, completion_time_seconds, created_at
            FROM leaderboard
            WHERE arcade_id = %s
              AND username IS NOT NULL AND username <> ''
            ORDER BY score DESC, completion_time_seconds ASC NULLS LAST, created_at DESC
            LIMIT %s
        """, (arcade_id, limit))

        entries = []
        for index, row in enumerate(rows, start=1):
            entries.append({
                'username': row['username'],
                'score': row['score'] or 0,
                'completion_time_seconds': row['completion_time_seconds'],
                'rank': index,
                'created_at': _serialize_timestamp(row.get('created_at')),
            })
        return entries

    def get_global_leaderboard(self, limit: int = 10) -> List[Dict[str, Any]]:
        """
        Aggregate every arcade's runs per username, with each player's most
        played game.
        """
        rows = self.fetch_all("""
            WITH aggregated AS (
                SELECT
                    username,
                    SUM(score) AS total_score,
                    COUNT(*) AS attempts,
                    MIN(completion_time_seconds) AS best_time_seconds,
                    MAX(created_at) AS last_played
                FROM leaderboard
                WHERE username IS NOT NULL AND username <> ''
                GROUP BY username
            ),
            game_base AS (
                SELECT
                    l.username,
                    a.slug,
                    COUNT(*) AS plays,
                    MAX(l.created_at) AS last_played_game
                FROM leaderboard l
                JOIN arcades a ON a.id = l.arcade_id
                WHERE l.username IS NOT NULL AND l.username <> ''
                GROUP BY l.username, a.slug
            ),
            game_ranked AS (
                SELECT
                    *,
                    ROW_NUMBER() OVER (PARTITION BY username ORDER BY plays DESC, last_played_game DESC) AS rn
                FROM game_base
            )
            SELECT
                ag.username,
                ag.total_score,
                ag.attempts,
                ag.best_time_seconds,
                ag.last_played,
                gr.slug AS top_game
            FROM aggregated ag
            LEFT JOIN game_ranked gr ON gr.username = ag.username AND gr.rn = 1
            ORDER BY ag.total_score DESC, ag.best_time_seconds ASC NULLS LAST
            LIMIT %s
        """, (limit,))

        return [
            {
                'username': row['username'],
                'total_score': int(row['total_score'] or 0),
                'attempts': int(row['attempts'] or 0),
                'best_time_seconds': row['best_time_seconds'],
                'last_played': _serialize_timestamp(row.get('last_played')),
                'top_game': row.get('top_game'),
            }
            for row in rows
        ]
