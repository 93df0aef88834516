"""
Score persistence: a single append-only table.
All operations are sync (used from sync endpoints). insert_score only flushes: the caller
commits once the attempt is ranked, so a failed submission leaves no row behind.
Nothing here updates or deletes a row. SQLAlchemy errors propagate to the caller.
"""
from sqlalchemy import func
from sqlalchemy.orm import Session

from quizrank.models.score import Score
from quizrank.services.ordering import better_than, leaderboard_order


def insert_score(
    db: Session,
    *,
    name: str,
    score: int,
    total_questions: int,
    time_used: int,
    percentage: int,
    chapter_id: str,
) -> Score:
    """Stage one attempt (flushed, not committed); id and created_at are assigned here."""
    row = Score(
        name=name,
        score=score,
        total_questions=total_questions,
        time_used=time_used,
        percentage=percentage,
        chapter_id=chapter_id,
    )
    db.add(row)
    db.flush()
    return row


def count_better(
    db: Session,
    chapter_id: str,
    percentage: int,
    time_used: int,
    exclude_id: str | None = None,
) -> int:
    """Count attempts in `chapter_id` strictly ahead of (percentage, time_used)."""
    query = db.query(func.count(Score.id)).filter(
        Score.chapter_id == chapter_id,
        better_than(percentage, time_used),
    )
    if exclude_id is not None:
        query = query.filter(Score.id != exclude_id)
    return query.scalar() or 0


def find_top(db: Session, chapter_id: str, limit: int) -> list[Score]:
    """First `limit` attempts of one category in leaderboard order."""
    return (
        db.query(Score)
        .filter(Score.chapter_id == chapter_id)
        .order_by(*leaderboard_order())
        .limit(limit)
        .all()
    )


def find_head(db: Session) -> Score | None:
    """Best attempt across the whole table."""
    return db.query(Score).order_by(*leaderboard_order()).first()


def aggregate(db: Session) -> tuple[int, float | None, float | None]:
    """(count, avg percentage, avg time_used) over the whole table. Averages are None when empty."""
    count, avg_pct, avg_time = db.query(
        func.count(Score.id),
        func.avg(Score.percentage),
        func.avg(Score.time_used),
    ).one()
    return (
        count or 0,
        float(avg_pct) if avg_pct is not None else None,
        float(avg_time) if avg_time is not None else None,
    )


class ScoreRepository:
    """Thin wrapper for dependency injection; delegates to module functions."""

    @staticmethod
    def insert_score(db: Session, **fields) -> Score:
        return insert_score(db, **fields)

    @staticmethod
    def count_better(
        db: Session,
        chapter_id: str,
        percentage: int,
        time_used: int,
        exclude_id: str | None = None,
    ) -> int:
        return count_better(db, chapter_id, percentage, time_used, exclude_id)

    @staticmethod
    def find_top(db: Session, chapter_id: str, limit: int) -> list[Score]:
        return find_top(db, chapter_id, limit)

    @staticmethod
    def find_head(db: Session) -> Score | None:
        return find_head(db)

    @staticmethod
    def aggregate(db: Session) -> tuple[int, float | None, float | None]:
        return aggregate(db)
