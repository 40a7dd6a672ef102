"""
Tests for services/score_client.py.

HTTP is mocked at requests.request so no server is needed.
"""

import pytest
import random
import sys
import os
from unittest.mock import MagicMock, patch

import requests

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.constants import LEFT
from domain.snake import Snake, SnakeGame
from services.score_client import (
    ArcadeApiClient,
    LeaderboardEntry,
    RunNotFinishedError,
    ScoreSubmissionError,
    DEFAULT_API_URL,
)


def _response(status_code=200, body=None):
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.json.return_value = body if body is not None else {}
    return response


def _finished_snake_run():
    game = SnakeGame(hunter_food=False, forced_growth=False, rng=random.Random(1))
    game.start()
    game.snake = Snake([(0, 5), (1, 5), (2, 5), (3, 5)])
    game.direction = game.heading = LEFT
    game.food = (10, 10)
    game.advance(1000)
    return game


class TestClientConfig:

    def test_default_base_url(self, monkeypatch):
        monkeypatch.delenv('ARCADE_API_URL', raising=False)
        assert ArcadeApiClient().base_url == DEFAULT_API_URL

    def test_base_url_from_env(self, monkeypatch):
        monkeypatch.setenv('ARCADE_API_URL', 'https://arcade.example/api/')
        assert ArcadeApiClient().base_url == 'https://arcade.example/api'

    def test_explicit_base_url_wins(self, monkeypatch):
        monkeypatch.setenv('ARCADE_API_URL', 'https://ignored.example/api')
        assert ArcadeApiClient(base_url='http://x/api').base_url == 'http://x/api'


class TestSubmitScore:
    """Tests for submit_score and submit_run."""

    @patch('services.score_client.requests.request')
    def test_submit_score_posts_payload(self, mock_request):
        mock_request.return_value = _response(201, {
            'message': 'Snake score recorded.',
            'entry': {'username': 'ada', 'score': 12},
        })
        client = ArcadeApiClient(base_url='http://api.test/api', timeout=5)

        result = client.submit_score('snake', 'ada', 12, 40)

        assert result['message'] == 'Snake score recorded.'
        mock_request.assert_called_once_with(
            'POST',
            'http://api.test/api/games/snake/score',
            timeout=5,
            json={'username': 'ada', 'score': 12, 'completion_time_seconds': 40},
        )

    @patch('services.score_client.requests.request')
    def test_api_error_message_is_raised(self, mock_request):
        mock_request.return_value = _response(400, {'error': 'A username is required.'})
        client = ArcadeApiClient(base_url='http://api.test/api')

        with pytest.raises(ScoreSubmissionError) as exc_info:
            client.submit_score('chaos', '', 3)

        assert str(exc_info.value) == 'A username is required.'
        assert exc_info.value.status_code == 400

    @patch('services.score_client.requests.request')
    def test_network_failure_is_wrapped(self, mock_request):
        mock_request.side_effect = requests.exceptions.ConnectionError('refused')
        client = ArcadeApiClient(base_url='http://api.test/api')

        with pytest.raises(ScoreSubmissionError):
            client.submit_score('chaos', 'ada', 3)

    @patch('services.score_client.requests.request')
    def test_submit_run_uses_snapshot(self, mock_request):
        mock_request.return_value = _response(201, {'message': 'Snake score recorded.', 'entry': {}})
        game = _finished_snake_run()
        client = ArcadeApiClient(base_url='http://api.test/api')

        client.submit_run(game, 'ada')

        _, kwargs = mock_request.call_args
        assert kwargs['json'] == {'username': 'ada', 'score': 4, 'completion_time_seconds': 0}

    def test_submit_run_refuses_live_run(self):
        game = SnakeGame(rng=random.Random(1))
        game.start()
        client = ArcadeApiClient(base_url='http://api.test/api')

        with pytest.raises(RunNotFinishedError):
            client.submit_run(game, 'ada')

    @patch('services.score_client.requests.request')
    def test_failed_submission_leaves_snapshot_for_retry(self, mock_request):
        mock_request.side_effect = requests.exceptions.Timeout('slow')
        game = _finished_snake_run()
        snapshot = game.final_snapshot
        client = ArcadeApiClient(base_url='http://api.test/api')

        with pytest.raises(ScoreSubmissionError):
            client.submit_run(game, 'ada')

        assert game.final_snapshot is snapshot


class TestFetchLeaderboard:

    @patch('services.score_client.requests.request')
    def test_entries_are_parsed(self, mock_request):
        mock_request.return_value = _response(200, {'entries': [
            {'username': 'ada', 'score': 30, 'completion_time_seconds': 12, 'rank': 1,
             'created_at': '2024-01-01T00:00:00'},
            {'username': 'bob', 'score': 20, 'completion_time_seconds': None, 'rank': 2,
             'created_at': None},
        ]})
        client = ArcadeApiClient(base_url='http://api.test/api')

        entries = client.fetch_leaderboard('chaos', limit=5)

        assert entries[0] == LeaderboardEntry('ada', 30, 12, 1, '2024-01-01T00:00:00')
        assert entries[1].rank == 2
        _, kwargs = mock_request.call_args
        assert kwargs['params'] == {'limit': 5}
