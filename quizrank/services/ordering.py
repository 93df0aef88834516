"""
Leaderboard ordering: percentage DESC, then time_used ASC (faster is better).
Rank counting and leaderboard queries both go through this module.

Rounding is half away from zero (0.5 -> 1) for percentages and stats averages;
every value rounded here is non-negative.
"""
from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy import and_, or_

from quizrank.models.score import Score


def round_half_up(value: float) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compute_percentage(score: int, total_questions: int) -> int:
    # Exact rational before rounding: 1/8 -> 12.5 -> 13
    return int(
        (Decimal(score) * 100 / Decimal(total_questions)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    )


def leaderboard_order():
    return (Score.percentage.desc(), Score.time_used.asc())


def better_than(percentage: int, time_used: int):
    """SQL predicate: rows strictly ahead of an attempt with (percentage, time_used)."""
    return or_(
        Score.percentage > percentage,
        and_(Score.percentage == percentage, Score.time_used < time_used),
    )

