"""FastAPI application entry point."""

import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from learnpath.agent.llm import OpenAIGenerativeClient
from learnpath.api.routes import certifications, profile, progress, roadmaps
from learnpath.core.auth import build_token_resolver
from learnpath.core.config import Settings, get_settings
from learnpath.core.database import close_db, create_engine, create_session_factory, init_db
from learnpath.core.exceptions import (
    AuthenticationError,
    GenerationUnavailableError,
    LearnPathError,
    MalformedGenerationError,
    NotFoundError,
    ValidationError,
)
from learnpath.core.logging import bind_request_context, configure_logging, get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

_ERROR_STATUS: dict[type[LearnPathError], int] = {
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    MalformedGenerationError: status.HTTP_502_BAD_GATEWAY,
    GenerationUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


async def handle_domain_error(request: Request, exc: LearnPathError) -> JSONResponse:
    """Translate domain errors into status codes."""
    status_code = next(
        (code for error_type, code in _ERROR_STATUS.items() if isinstance(exc, error_type)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    detail = str(exc)
    if isinstance(exc, GenerationUnavailableError):
        detail = "Generation service unavailable. Please try again later."
    logger.info("Request failed", path=request.url.path, error=type(exc).__name__, status=status_code)
    return JSONResponse(status_code=status_code, content={"detail": detail})


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Build shared resources once and pass them to handlers via app.state."""
        configure_logging(debug=settings.DEBUG)
        logger.info(
            "Starting LearnPath",
            version=settings.APP_VERSION,
            env=settings.ENV,
            debug=settings.DEBUG,
        )
        engine = create_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
        await init_db(engine)

        app.state.session_factory = create_session_factory(engine)
        app.state.generative_client = OpenAIGenerativeClient.from_settings(settings)
        app.state.token_resolver = build_token_resolver(settings)
        yield
        logger.info("Shutting down LearnPath")
        await close_db(engine)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="AI-generated learning roadmaps and study progress tracking",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.is_development else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(LearnPathError, handle_domain_error)

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        """Tag every log event of a request with its id and echo the id back."""
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        bind_request_context(request_id=request_id, method=request.method, path=request.url.path)
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    app.include_router(profile.router, prefix="/api")
    app.include_router(roadmaps.router, prefix="/api")
    app.include_router(certifications.router, prefix="/api")
    app.include_router(progress.router, prefix="/api")

    @app.get("/health")
    async def health_check() -> dict:
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": settings.APP_VERSION,
            "env": settings.ENV,
        }

    return app


app = create_app()
