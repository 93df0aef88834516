from unittest.mock import MagicMock

import pytest
import requests

from quizrank.client import ScoreApiClient, ScoreApiError


def _response(status_code=200, json_body=None):
    resp = MagicMock(spec=requests.Response)
    resp.status_code = status_code
    resp.ok = status_code < 400
    resp.json.return_value = json_body
    resp.text = ""
    resp.reason = ""
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status_code} error")
    return resp


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


def test_submit_score_posts_camel_case_payload(session):
    session.post.return_value = _response(201, {"id": "x", "rank": 2})
    client = ScoreApiClient("http://scores.local/", session=session)
    result = client.submit_score("Ana", 8, 10, 120, chapter_id="c1")
    assert result["rank"] == 2
    url = session.post.call_args.args[0]
    assert url == "http://scores.local/scores"
    assert session.post.call_args.kwargs["json"] == {
        "name": "Ana",
        "score": 8,
        "totalQuestions": 10,
        "timeUsed": 120,
        "chapterId": "c1",
    }


def test_submit_score_raises_with_server_message(session):
    session.post.return_value = _response(400, {"error": "Missing required fields"})
    client = ScoreApiClient(session=session)
    with pytest.raises(ScoreApiError) as exc:
        client.submit_score("Ana", 8, 10, 120)
    assert exc.value.status_code == 400
    assert "Missing required fields" in str(exc.value)


def test_submit_score_raises_on_connection_error(session):
    session.post.side_effect = requests.ConnectionError("refused")
    with pytest.raises(ScoreApiError):
        ScoreApiClient(session=session).submit_score("Ana", 8, 10, 120)


def test_get_leaderboard_passes_params(session):
    session.get.return_value = _response(200, [{"name": "Bo"}])
    board = ScoreApiClient(session=session).get_leaderboard(limit=5, chapter_id="c1")
    assert board == [{"name": "Bo"}]
    assert session.get.call_args.kwargs["params"] == {"limit": 5, "chapterId": "c1"}


def test_get_leaderboard_returns_empty_on_failure(session):
    session.get.return_value = _response(500, {"error": "Failed to fetch scores"})
    assert ScoreApiClient(session=session).get_leaderboard() == []


def test_get_stats_returns_none_on_failure(session):
    session.get.side_effect = requests.Timeout("slow")
    assert ScoreApiClient(session=session).get_stats() is None


def test_get_stats(session):
    stats = {"totalAttempts": 1, "averagePercentage": 80, "averageTime": 120, "highestScore": None}
    session.get.return_value = _response(200, stats)
    assert ScoreApiClient(session=session).get_stats() == stats
    assert session.get.call_args.args[0] == "http://localhost:3001/scores/stats"
