from quizrank.models.score import Score

__all__ = ["Score"]
