"""
KStem-Service - Main Application Entry Point

- FastAPI app with lifespan handler
- uvicorn kstem.main:app starts the service

Patterns Applied:
- Lifespan context manager
- One-time configure_logging() at startup
- Lexicon built eagerly at startup so /ready reflects real state

Anti-Patterns Avoided:
- Deprecated @app.on_event - using modern lifespan pattern
- structlog.configure() per request - one-time at startup
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kstem.api.health import router as health_router
from kstem.api.stem import stem_router
from kstem.core.config import get_settings
from kstem.core.logging import configure_logging, get_logger
from kstem.core.tracing import configure_tracing
from kstem.lexicon.dictionary import get_dictionary
from kstem.nlp.stemmer import get_stemmer

settings = get_settings()

configure_logging(
    log_level=settings.log_level,
    json_output=settings.log_json,
)

logger = get_logger(__name__)


# =============================================================================
# Lifespan Context Manager
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Configure tracing, load the lexicon, then serve."""
    # =========================================================================
    # STARTUP
    # =========================================================================
    logger.info(
        "startup",
        service=settings.service_name,
        version=settings.version,
        environment=settings.environment,
    )

    if settings.tracing_enabled:
        configure_tracing(
            service_name=settings.service_name,
            console_export=settings.tracing_console_export,
        )
        logger.info("tracing_configured")

    # LexiconLoadError propagates: the service must not start without a lexicon
    dictionary = get_dictionary(settings.lexicon_dir)
    get_stemmer()
    logger.info("lexicon_ready", entries=len(dictionary))

    app.state.initialized = True
    app.state.environment = settings.environment

    yield

    # =========================================================================
    # SHUTDOWN
    # =========================================================================
    logger.info("shutdown", service=settings.service_name)
    app.state.initialized = False


# =============================================================================
# FastAPI Application
# =============================================================================


app = FastAPI(
    title="KStem-Service",
    description="Dictionary-validated English stemming",
    version=settings.version,
    docs_url="/docs" if settings.environment != "production" else None,
    redoc_url="/redoc" if settings.environment != "production" else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.environment == "development" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(stem_router)


@app.get("/", include_in_schema=False)
async def root() -> dict[str, str]:
    """Root endpoint pointing at the docs."""
    return {
        "service": settings.service_name,
        "version": settings.version,
        "docs": "/docs",
    }
