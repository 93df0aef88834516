from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite:///./quizrank.db"
    # Create tables on startup (dev / SQLite). Production runs `alembic upgrade head`.
    auto_create_tables: bool = True

    # Frontend URL for CORS
    frontend_url: str = "http://localhost:5173"
    # Additional CORS origins, comma-separated
    extra_cors_origins: str = ""

    # Scoring category used when a submission or leaderboard query has no chapterId
    default_chapter_id: str = "overall"

    # Leaderboard size
    leaderboard_default_limit: int = 10

    # Logging
    log_level: str = "INFO"

    # Server (python -m quizrank)
    host: str = "0.0.0.0"
    port: int = 3001

    class Config:
        env_file = ".env"

    @property
    def cors_origins(self) -> list[str]:
        extra = [o.strip() for o in self.extra_cors_origins.split(",") if o.strip()]
        return [self.frontend_url, *extra]


@lru_cache
def get_settings() -> Settings:
    return Settings()
