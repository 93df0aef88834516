"""Logging configuration for the score service."""
import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Configure basic logging for the process and return the package logger."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
    # uvicorn access lines duplicate our own request logging
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    return logging.getLogger("quizrank")
