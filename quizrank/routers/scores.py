"""
Score submission, leaderboard and statistics.
POST returns the stored attempt plus its rank; list entries carry no rank.
"""
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from quizrank.database import get_db
from quizrank.models.score import MAX_INT, Score
from quizrank.schemas.score import ScoreCreate, ScoreResponse, ScoreStats, SubmittedScoreResponse
from quizrank.services.ranking import RankingService

router = APIRouter(prefix="/scores", tags=["scores"])


def get_ranking_service() -> RankingService:
    return RankingService()


def _utc_isoformat(value: datetime) -> str:
    # Stored as naive UTC; emit an explicit offset so clients do not read it as local time
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def _to_response(row: Score) -> ScoreResponse:
    return ScoreResponse(
        id=row.id,
        name=row.name,
        score=row.score,
        totalQuestions=row.total_questions,
        timeUsed=row.time_used,
        percentage=row.percentage,
        chapterId=row.chapter_id,
        createdAt=_utc_isoformat(row.created_at),
    )


@router.post("", response_model=SubmittedScoreResponse, status_code=status.HTTP_201_CREATED)
def submit_score(
    body: ScoreCreate,
    db: Session = Depends(get_db),
    service: RankingService = Depends(get_ranking_service),
):
    """Store a finished attempt and return it with its rank in its chapter."""
    ranked = service.submit(
        db,
        name=body.name,
        score=body.score,
        total_questions=body.totalQuestions,
        time_used=body.timeUsed,
        chapter_id=body.chapterId,
    )
    return SubmittedScoreResponse(**_to_response(ranked.score).model_dump(), rank=ranked.rank)


@router.get("", response_model=list[ScoreResponse])
def get_leaderboard(
    limit: int | None = Query(None, ge=1, le=MAX_INT),
    chapterId: str | None = Query(None),
    db: Session = Depends(get_db),
    service: RankingService = Depends(get_ranking_service),
):
    """
    Top attempts of one chapter: percentage DESC, then timeUsed ASC.
    No chapterId (or an empty one) means the default "overall" chapter.
    """
    return [_to_response(r) for r in service.leaderboard(db, limit=limit, chapter_id=chapterId)]


@router.get("/stats", response_model=ScoreStats)
def get_stats(
    db: Session = Depends(get_db),
    service: RankingService = Depends(get_ranking_service),
):
    """Totals and rounded averages over every stored attempt, plus the single best one."""
    stats = service.stats(db)
    return ScoreStats(
        totalAttempts=stats.total_attempts,
        averagePercentage=stats.average_percentage,
        averageTime=stats.average_time,
        highestScore=_to_response(stats.highest_score) if stats.highest_score else None,
    )
