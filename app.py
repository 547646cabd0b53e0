"""
app.py
------
FastAPI application factory.

The review service (and through it, the store) is constructed by the
caller and injected here; the app holds no global state of its own.
Every failure is reported as the error envelope {"Error": "<message>"}
with HTTP 400.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from errors import ReviewError
from handlers import review_handler
from services.review_service import ReviewService
from utils.logger import get_logger

logger = get_logger(__name__)

ERROR_STATUS = 400


def error_envelope(message: str) -> JSONResponse:
    return JSONResponse(status_code=ERROR_STATUS, content={"Error": message})


async def handle_review_error(request: Request, exc: ReviewError) -> JSONResponse:
    logger.info(f"{request.method} {request.url.path} failed: {type(exc).__name__}: {exc}")
    return error_envelope(str(exc))


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed JSON or a body that does not fit the request shape."""
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        problems.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    message = "invalid request body: " + "; ".join(problems)
    logger.info(f"{request.method} {request.url.path} rejected: {message}")
    return error_envelope(message)


def create_app(service: ReviewService) -> FastAPI:
    """
    Build the API around an already constructed ReviewService.

    The service's store is closed when the application shuts down.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Review API starting up...")
        yield
        logger.info("Review API shutting down, closing review store...")
        service.close()
        logger.info("Shutdown complete")

    app = FastAPI(
        title="Movie Review API",
        description="CRUD service for movie reviews",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.review_service = service
    app.add_exception_handler(ReviewError, handle_review_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.include_router(review_handler.router)
    return app
