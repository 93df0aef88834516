from pydantic import BaseModel, Field, StrictInt, StrictStr
from quizrank.models.score import MAX_INT


class ScoreCreate(BaseModel):
    """
    POST /scores body. Required fields are Optional here so an absent field reaches
    the service and is reported as "Missing required fields"; a present but
    malformed value (negative, out of range, not a JSON integer) fails parsing instead.
    """
    name: StrictStr | None = Field(default=None, max_length=255)
    score: StrictInt | None = Field(default=None, ge=0, le=MAX_INT)
    totalQuestions: StrictInt | None = Field(default=None, ge=0, le=MAX_INT)
    timeUsed: StrictInt | None = Field(default=None, ge=0, le=MAX_INT)
    chapterId: StrictStr | None = Field(default=None, max_length=100)


class ScoreResponse(BaseModel):
    id: str
    name: str
    score: int
    totalQuestions: int
    timeUsed: int
    percentage: int
    chapterId: str
    createdAt: str

    class Config:
        from_attributes = True


class SubmittedScoreResponse(ScoreResponse):
    rank: int


class ScoreStats(BaseModel):
    totalAttempts: int
    averagePercentage: int
    averageTime: int
    highestScore: ScoreResponse | None = None
