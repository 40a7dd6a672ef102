"""
Tests for data_access layer.

These tests mock the database connection to verify the logic
without requiring an actual database.
"""

import pytest
import sys
import os
from unittest.mock import MagicMock, patch
from datetime import datetime

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def _mock_connection(mock_get_conn, fetchall=None, fetchone=None):
    mock_cursor = MagicMock()
    mock_cursor.fetchall.return_value = fetchall or []
    mock_cursor.fetchone.return_value = fetchone
    mock_conn = MagicMock()
    mock_conn.cursor.return_value = mock_cursor
    mock_get_conn.return_value = mock_conn
    return mock_conn, mock_cursor


class TestArcadeQueries:
    """Tests for the arcade catalogue functions."""

    @patch('data_access.repositories.base.get_connection')
    def test_ensure_arcade_upserts_and_commits(self, mock_get_conn):
        from data_access import ensure_arcade

        mock_conn, mock_cursor = _mock_connection(
            mock_get_conn, fetchone={'id': 3, 'slug': 'snake-arcade', 'title': 'Snake Arcade Sprint'}
        )

        row = ensure_arcade('snake-arcade', 'Snake Arcade Sprint', category='Arcade')

        assert row['id'] == 3
        query = mock_cursor.execute.call_args[0][0]
        assert 'ON CONFLICT (slug)' in query
        mock_conn.commit.assert_called_once()
        mock_conn.close.assert_called_once()

    @patch('data_access.repositories.base.get_connection')
    def test_failed_write_rolls_back(self, mock_get_conn):
        from data_access import ensure_arcade

        mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.execute.side_effect = RuntimeError('boom')

        with pytest.raises(RuntimeError):
            ensure_arcade('chaos-drop', 'Chaos Drop Sabotage')

        mock_conn.rollback.assert_called_once()
        mock_conn.commit.assert_not_called()
        mock_conn.close.assert_called_once()

    @patch('data_access.repositories.base.get_connection')
    def test_list_arcades_category_filter(self, mock_get_conn):
        from data_access import list_arcades

        _, mock_cursor = _mock_connection(mock_get_conn, fetchall=[{'slug': 'chaos-drop'}])

        result = list_arcades(category='Arcade')

        assert result == [{'slug': 'chaos-drop'}]
        query, params = mock_cursor.execute.call_args[0]
        assert 'LOWER(category) = LOWER(%s)' in query
        assert params == ('Arcade',)

    @patch('data_access.repositories.base.get_connection')
    def test_list_arcades_uncategorized(self, mock_get_conn):
        from data_access import list_arcades

        _, mock_cursor = _mock_connection(mock_get_conn)

        list_arcades(category='uncategorized')

        query, params = mock_cursor.execute.call_args[0]
        assert 'category IS NULL' in query
        assert params == ()


class TestLeaderboardQueries:
    """Tests for score recording and leaderboard reads."""

    @patch('data_access.repositories.base.get_connection')
    def test_record_score(self, mock_get_conn):
        from data_access import record_score

        mock_conn, mock_cursor = _mock_connection(mock_get_conn, fetchone={
            'username': 'ada',
            'score': 12,
            'completion_time_seconds': 30,
            'created_at': datetime(2024, 5, 1, 12, 0, 0),
        })

        entry = record_score(1, 'ada', 12, 30)

        assert entry['created_at'] == '2024-05-01T12:00:00'
        params = mock_cursor.execute.call_args[0][1]
        assert params == (1, 'ada', 12, 30)
        mock_conn.commit.assert_called_once()

    @patch('data_access.repositories.base.get_connection')
    def test_arcade_leaderboard_adds_rank(self, mock_get_conn):
        from data_access import get_arcade_leaderboard

        _, mock_cursor = _mock_connection(mock_get_conn, fetchall=[
            {'username': 'ada', 'score': 30, 'completion_time_seconds': 10, 'created_at': None},
            {'username': 'bob', 'score': 30, 'completion_time_seconds': None, 'created_at': None},
        ])

        entries = get_arcade_leaderboard(2, limit=5)

        assert [e['rank'] for e in entries] == [1, 2]
        query, params = mock_cursor.execute.call_args[0]
        assert 'ORDER BY score DESC, completion_time_seconds ASC NULLS LAST, created_at DESC' in query
        assert params == (2, 5)

    @patch('data_access.repositories.base.get_connection')
    def test_global_leaderboard(self, mock_get_conn):
        from data_access import get_global_leaderboard

        _, mock_cursor = _mock_connection(mock_get_conn, fetchall=[{
            'username': 'ada',
            'total_score': 75,
            'attempts': 4,
            'best_time_seconds': 12,
            'last_played': datetime(2024, 6, 1),
            'top_game': 'chaos-drop',
        }])

        rows = get_global_leaderboard(limit=3)

        assert rows == [{
            'username': 'ada',
            'total_score': 75,
            'attempts': 4,
            'best_time_seconds': 12,
            'last_played': '2024-06-01T00:00:00',
            'top_game': 'chaos-drop',
        }]
        assert mock_cursor.execute.call_args[0][1] == (3,)


class TestArcadeCatalogue:
    """services/arcades.py on top of the data layer."""

    def test_get_arcade(self):
        from services.arcades import get_arcade

        assert get_arcade('Snake').slug == 'snake-arcade'
        assert get_arcade('chaos').slug == 'chaos-drop'
        assert get_arcade('pong') is None

    @patch('services.arcades.ensure_arcade')
    def test_ensure_arcade_row_passes_metadata(self, mock_ensure):
        from services.arcades import ensure_arcade_row, CHAOS_ARCADE

        mock_ensure.return_value = {'id': 9}

        assert ensure_arcade_row(CHAOS_ARCADE) == {'id': 9}
        kwargs = mock_ensure.call_args[1]
        assert kwargs['slug'] == 'chaos-drop'
        assert kwargs['streak_label'] == 'Holes planted'
        assert 'href' not in kwargs


class TestConnectionString:

    def test_database_url_wins(self, monkeypatch):
        from database_postgres import get_connection_string

        monkeypatch.setenv('DATABASE_URL', 'postgresql://u:p@h:5432/db')
        assert get_connection_string() == 'postgresql://u:p@h:5432/db'

    def test_missing_configuration_raises(self, monkeypatch):
        from database_postgres import get_connection_string

        for name in ('DATABASE_URL', 'PGHOST', 'PGUSER', 'PGPASSWORD', 'PGDATABASE'):
            monkeypatch.delenv(name, raising=False)
        with pytest.raises(ValueError):
            get_connection_string()

    @patch('database_postgres.get_connection')
    def test_init_database_runs_every_statement(self, mock_get_conn):
        from database_postgres import init_database, SCHEMA_STATEMENTS

        mock_conn, mock_cursor = _mock_connection(mock_get_conn)

        init_database()

        assert mock_cursor.execute.call_count == len(SCHEMA_STATEMENTS)
        mock_conn.commit.assert_called_once()
        mock_conn.close.assert_called_once()
