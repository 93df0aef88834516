"""
Domain errors raised by the ranking service and their HTTP mapping.
Every error response body has the shape {"error": "<message>"}.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Missing required fields"
INVALID_REQUEST_MESSAGE = "Invalid request"
UNEXPECTED_ERROR_MESSAGE = "Something went wrong!"


class QuizRankError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(QuizRankError):
    """A required field is missing or malformed. Nothing was written."""
    status_code = status.HTTP_400_BAD_REQUEST


class StorageError(QuizRankError):
    """The database rejected or could not serve the read/write. Safe to retry."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


async def quizrank_error_handler(request: Request, exc: QuizRankError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Body/query values that fail to parse are client errors like any other ValidationError
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": INVALID_REQUEST_MESSAGE},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Unknown routes (404), wrong methods (405) and the like
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": UNEXPECTED_ERROR_MESSAGE},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(QuizRankError, quizrank_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
