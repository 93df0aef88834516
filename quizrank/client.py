"""
HTTP client for the score API, used by quiz front-ends and scripts.
Ranking is best-effort: submit_score raises ScoreApiError so the caller can log it and
carry on showing local results; read calls log failures and return an empty result.
"""
import logging
from typing import Any

import requests

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3001"
DEFAULT_TIMEOUT_SECONDS = 10


class ScoreApiError(Exception):
    """Submission did not reach the server or the server refused it."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ScoreApiClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    @property
    def scores_url(self) -> str:
        return f"{self._base_url}/scores"

    def submit_score(
        self,
        name: str,
        score: int,
        total_questions: int,
        time_used: int,
        chapter_id: str = "overall",
    ) -> dict[str, Any]:
        """POST one finished attempt. Returns the stored attempt with its `rank`."""
        payload = {
            "name": name,
            "score": score,
            "totalQuestions": total_questions,
            "timeUsed": time_used,
            "chapterId": chapter_id,
        }
        try:
            resp = self._session.post(self.scores_url, json=payload, timeout=self._timeout)
        except requests.RequestException as e:
            logger.error("Score submission failed: %s", e)
            raise ScoreApiError(f"Failed to submit score: {e}") from e
        if not resp.ok:
            message = _error_message(resp)
            logger.error("Score submission rejected (%s): %s", resp.status_code, message)
            raise ScoreApiError(f"Failed to submit score: {message}", status_code=resp.status_code)
        return resp.json()

    def get_leaderboard(self, limit: int = 10, chapter_id: str | None = None) -> list[dict[str, Any]]:
        params: dict[str, Any] = {"limit": limit}
        if chapter_id:
            params["chapterId"] = chapter_id
        try:
            resp = self._session.get(self.scores_url, params=params, timeout=self._timeout)
            resp.raise_for_status()
            return resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning("Failed to fetch leaderboard: %s", e)
            return []

    def get_stats(self) -> dict[str, Any] | None:
        try:
            resp = self._session.get(f"{self.scores_url}/stats", timeout=self._timeout)
            resp.raise_for_status()
            return resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning("Failed to fetch stats: %s", e)
            return None


def _error_message(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or resp.reason or ""
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return str(body)
