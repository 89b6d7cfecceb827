"""
Interview Questions API - FastAPI application entry point.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from interview_api.api.middleware.error_handler import (
    register_exception_handlers,
    register_timing_middleware,
)
from interview_api.api.routes import questions
from interview_api.config import get_settings
from interview_api.database.connection import close_engine, create_engine, create_session_factory
from interview_api.services.llm.base import OpenAIChatModel, get_openai_client
from interview_api.services.questions.orchestrator import GenerationOrchestrator
from interview_api.utils.logger import get_logger, setup_logging

# Import models so Base.metadata has all tables
import interview_api.models  # noqa: F401

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: build database and model clients once. Shutdown: close pool."""
    settings = get_settings()
    setup_logging(settings)
    engine = create_engine(settings)
    app.state.session_factory = create_session_factory(engine)
    client = get_openai_client(settings)
    app.state.orchestrator = GenerationOrchestrator.from_settings(
        OpenAIChatModel(client, settings), settings
    )
    logger.info("Application started")
    yield
    await client.close()
    await close_engine(engine)
    logger.info("Application shutdown")


def create_application() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title="Interview Questions API",
        description="AI-generated interview questions tailored to a talent's career path",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
    register_timing_middleware(app)
    register_exception_handlers(app)

    app.include_router(questions.router, prefix=settings.api_prefix + "/questions", tags=["questions"])

    @app.get("/health")
    async def health():
        """Health check for load balancers and monitoring."""
        return {"status": "ok"}

    return app


app = create_application()
