"""FastAPI application factory."""
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from studentix.config import CORS_ORIGINS, DATABASE_URL, LOG_LEVEL
from studentix.database import Database
from studentix.logging_setup import setup_console_logging
from studentix.routes import auth, content, courses, quizzes, reports, users
from studentix.services.quiz_codec import MalformedQuizData

logger = logging.getLogger(__name__)


def create_app(database_url: str | None = None) -> FastAPI:
    """Build the application around its own ``Database``."""
    setup_console_logging(LOG_LEVEL)

    database = Database(database_url or DATABASE_URL)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        database.create_all()
        logger.info("Database ready")
        yield
        database.dispose()

    app = FastAPI(title="Studentix Flow API", lifespan=lifespan)
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(MalformedQuizData)
    async def malformed_quiz_handler(request: Request, exc: MalformedQuizData) -> JSONResponse:
        logger.error(f"Malformed quiz data on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    @app.get("/")
    def index() -> dict[str, str]:
        return {"name": "Studentix Flow API", "status": "ok"}

    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(courses.router)
    app.include_router(content.router)
    app.include_router(quizzes.router)
    app.include_router(reports.router)

    return app


app = create_app()
