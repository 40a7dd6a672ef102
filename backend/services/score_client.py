"""
HTTP client for the arcade score API.

Used by whatever owns a run (the CLI, a bot, a game shell) to post a finished
run's snapshot and to read leaderboards back.
"""

import os
import logging
from dataclasses import dataclass
from typing import Dict, Any, List, Optional

import requests
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:5000/api"


class ScoreSubmissionError(Exception):
    """Raised when the score API cannot be reached or rejects a request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RunNotFinishedError(Exception):
    """Raised when submitting a run that has not ended yet."""


@dataclass
class LeaderboardEntry:
    username: str
    score: int
    completion_time_seconds: Optional[int]
    rank: Optional[int]
    created_at: Optional[str]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LeaderboardEntry":
        return cls(
            username=data.get('username', ''),
            score=int(data.get('score') or 0),
            completion_time_seconds=data.get('completion_time_seconds'),
            rank=data.get('rank'),
            created_at=data.get('created_at'),
        )


class ArcadeApiClient:
    """
    Thin wrapper around the /api/games endpoints.

    Args:
        base_url: API root, e.g. http://localhost:5000/api (defaults to ARCADE_API_URL)
        timeout: Request timeout in seconds
    """

    def __init__(self, base_url: Optional[str] = None, timeout: int = 10):
        self.base_url = (base_url or os.getenv('ARCADE_API_URL') or DEFAULT_API_URL).rstrip('/')
        self.timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        url = self._url(path)
        try:
            response = requests.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.error(f"Request to {url} failed: {e}")
            raise ScoreSubmissionError(f"Could not reach score API: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = {}

        if not response.ok:
            message = body.get('error') if isinstance(body, dict) else None
            message = message or f"Score API returned HTTP {response.status_code}"
            logger.warning(f"{method} {url} -> {response.status_code}: {message}")
            raise ScoreSubmissionError(message, status_code=response.status_code)

        return body

    def submit_score(
        self,
        game: str,
        username: str,
        score: int,
        completion_time_seconds: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Post a score for `game` ('snake' or 'chaos').

        Returns:
            The API response: {"message": ..., "entry": {...}}
        """
        payload = {
            'username': username,
            'score': score,
            'completion_time_seconds': completion_time_seconds,
        }
        result = self._request('POST', f"games/{game}/score", json=payload)
        logger.info(f"Submitted {game} score {score} for {username}")
        return result

    def submit_run(self, run, username: str) -> Dict[str, Any]:
        """
        Submit a finished run's frozen snapshot.

        Raises:
            RunNotFinishedError: if the run is still going (or never started)
            ScoreSubmissionError: on network or API failure; the run is untouched
        """
        snapshot = run.final_snapshot
        if not run.is_over or snapshot is None:
            raise RunNotFinishedError(f"{run.game_name} run has not ended yet")
        submission = snapshot.to_submission(username)
        return self.submit_score(snapshot.game, **submission)

    def fetch_leaderboard(self, game: str, limit: Optional[int] = None) -> List[LeaderboardEntry]:
        params = {'limit': limit} if limit is not None else None
        body = self._request('GET', f"games/{game}/leaderboard", params=params)
        return [LeaderboardEntry.from_dict(row) for row in body.get('entries', [])]
