"""FastAPI application entry point."""

import uuid
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from recipebox.config import Settings, get_settings
from recipebox.database import Database
from recipebox.logging_config import LoggingContext, configure_logging, get_logger
from recipebox.repository import InMemoryRecipeRepository, SqlRecipeRepository
from recipebox.routers import ingredients_router, recipes_router

# Configure logging on module load
configure_logging(get_settings().log_level)
logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application; the repository is chosen from settings at startup."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Application lifespan handler for startup and shutdown events."""
        # Startup
        logger.info(f"Starting Recipebox API ({settings.repository_backend} backend)")

        database: Database | None = None
        if settings.repository_backend == "memory":
            app.state.recipe_repository = InMemoryRecipeRepository()
        else:
            database = Database(settings.database_url, echo=settings.sql_echo)
            await database.create_tables()
            logger.info("Database tables initialized")
            app.state.recipe_repository = SqlRecipeRepository(database.session_factory)

        yield

        # Shutdown
        logger.info("Shutting down Recipebox API")
        if database is not None:
            await database.dispose()

    app = FastAPI(
        title="Recipebox API",
        description="Recipe storage with ingredient parsing and shopping lists",
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Tag every log line of a request with its request id."""
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
        with LoggingContext(request_id=request_id):
            response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    # Include routers
    app.include_router(ingredients_router)
    app.include_router(recipes_router)

    @app.get("/health")
    async def health_check() -> dict:
        """Basic health check endpoint."""
        return {"status": "ok", "service": "recipebox-api"}

    @app.get("/")
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "name": "Recipebox API",
            "version": "0.1.0",
            "docs": "/docs",
            "health": "/health",
        }

    return app


app = create_app()
