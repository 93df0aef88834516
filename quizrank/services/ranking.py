"""
Ranking service: accepts finished attempts, assigns a per-category rank, and answers
leaderboard and statistics queries. Stateless; every call works against the session given.

Rank = 1 + number of other attempts in the same chapter strictly ahead by the ordering.
Ties share a rank number (not a dense rank). Concurrent submissions may briefly report
the same rank; the leaderboard read afterwards shows the final relative order.
"""
import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from quizrank.config import get_settings
from quizrank.exceptions import MISSING_FIELDS_MESSAGE, INVALID_REQUEST_MESSAGE, StorageError, ValidationError
from quizrank.models.score import MAX_INT, Score
from quizrank.repositories.score_repository import ScoreRepository
from quizrank.services.ordering import compute_percentage, round_half_up

logger = logging.getLogger(__name__)

SAVE_FAILED_MESSAGE = "Failed to save score"
FETCH_SCORES_FAILED_MESSAGE = "Failed to fetch scores"
FETCH_STATS_FAILED_MESSAGE = "Failed to fetch statistics"


@dataclass
class RankedScore:
    score: Score
    rank: int


@dataclass
class Stats:
    total_attempts: int
    average_percentage: int
    average_time: int
    highest_score: Score | None


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_submission(name, score, total_questions, time_used) -> None:
    """
    Raise ValidationError unless every required field is usable.
    score=0 and time_used=0 are valid; total_questions=0 counts as missing (it is the divisor).
    """
    if not name or score is None or not total_questions or time_used is None:
        raise ValidationError(MISSING_FIELDS_MESSAGE)
    if not isinstance(name, str):
        raise ValidationError(INVALID_REQUEST_MESSAGE)
    if not all(_is_int(v) for v in (score, total_questions, time_used)):
        raise ValidationError(INVALID_REQUEST_MESSAGE)
    if not all(0 <= v <= MAX_INT for v in (score, total_questions, time_used)):
        raise ValidationError(INVALID_REQUEST_MESSAGE)
    if score > total_questions:
        raise ValidationError("score cannot exceed totalQuestions")


class RankingService:
    def __init__(self, repository: ScoreRepository | None = None):
        self._repo = repository or ScoreRepository()
        self._settings = get_settings()

    def resolve_chapter(self, chapter_id: str | None) -> str:
        """Absent or empty chapterId falls back to the default category (both on submit and read)."""
        return chapter_id or self._settings.default_chapter_id

    def submit(
        self,
        db: Session,
        name,
        score,
        total_questions,
        time_used,
        chapter_id: str | None = None,
    ) -> RankedScore:
        """Validate, store and rank one attempt. Either a row is written and ranked, or nothing is written."""
        try:
            validate_submission(name, score, total_questions, time_used)
        except ValidationError as e:
            logger.info("Score submission rejected: %s", e.message)
            raise
        chapter = self.resolve_chapter(chapter_id)
        percentage = compute_percentage(score, total_questions)
        # Insert and count run in one transaction; commit only once a rank exists
        try:
            row = self._repo.insert_score(
                db,
                name=name,
                score=score,
                total_questions=total_questions,
                time_used=time_used,
                percentage=percentage,
                chapter_id=chapter,
            )
            better = self._repo.count_better(db, chapter, percentage, time_used, exclude_id=row.id)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Error saving score for chapter %s: %s", chapter, e, exc_info=True)
            raise StorageError(SAVE_FAILED_MESSAGE) from e

        rank = better + 1
        logger.info(
            "Score %s saved: chapter=%s percentage=%s time_used=%s rank=%s",
            row.id, chapter, percentage, time_used, rank,
        )
        return RankedScore(score=row, rank=rank)

    def leaderboard(self, db: Session, limit: int | None = None, chapter_id: str | None = None) -> list[Score]:
        if limit is None:
            limit = self._settings.leaderboard_default_limit
        if not 1 <= limit <= MAX_INT:
            raise ValidationError(INVALID_REQUEST_MESSAGE)
        chapter = self.resolve_chapter(chapter_id)
        try:
            return self._repo.find_top(db, chapter, limit)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Error fetching scores for chapter %s: %s", chapter, e, exc_info=True)
            raise StorageError(FETCH_SCORES_FAILED_MESSAGE) from e

    def stats(self, db: Session) -> Stats:
        """Whole-table statistics; not scoped by chapter."""
        try:
            total, avg_pct, avg_time = self._repo.aggregate(db)
            head = self._repo.find_head(db)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Error fetching stats: %s", e, exc_info=True)
            raise StorageError(FETCH_STATS_FAILED_MESSAGE) from e
        return Stats(
            total_attempts=total,
            average_percentage=round_half_up(avg_pct or 0),
            average_time=round_half_up(avg_time or 0),
            highest_score=head,
        )
