import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from quizrank import __version__
from quizrank.config import get_settings
from quizrank.database import Base, engine
from quizrank.exceptions import register_exception_handlers
from quizrank.logging_config import configure_logging
from quizrank.routers import health, scores
import quizrank.models  # noqa: F401 - register models on Base.metadata

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.auto_create_tables:
        Base.metadata.create_all(bind=engine)
    logger.info("Quiz score API started (database: %s)", engine.url.render_as_string(hide_password=True))
    yield


app = FastAPI(title="Quiz Score API", version=__version__, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(scores.router)
app.include_router(health.router)


@app.get("/")
def root():
    return {"message": "Quiz Score API", "docs": "/docs"}
