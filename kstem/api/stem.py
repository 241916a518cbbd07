"""
Stem API Endpoints

POST /v1/stem - Stem a batch of terms
GET /v1/stem/{term} - Stem a single term
GET /v1/lexicon - Lexicon build statistics and key collisions

Patterns Applied:
- FastAPI router pattern with /v1 prefix
- Pydantic request/response models with validation
- Processing time tracking in metadata

Anti-Patterns Avoided:
- S1192: Constants for duplicated strings
- Stemmer built per request: the shared KStemmer is reused
"""

from __future__ import annotations

import time

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from kstem.core.config import get_settings
from kstem.core.exceptions import KStemError
from kstem.core.logging import get_logger
from kstem.core.tracing import get_tracer
from kstem.lexicon.dictionary import get_build_report
from kstem.nlp.stemmer import get_stemmer

logger = get_logger(__name__)
tracer = get_tracer(__name__)

# =============================================================================
# Module Constants (S1192 compliance)
# =============================================================================

API_TAG: str = "stem"
MAX_TERM_LENGTH: int = 256


# =============================================================================
# Request/Response Models
# =============================================================================


class StemRequest(BaseModel):
    """Request body for batch stemming.

    Attributes:
        terms: Terms to stem, in order.
    """

    terms: list[str] = Field(
        ...,
        description="Terms to stem",
        min_length=1,
    )


class StemmedTerm(BaseModel):
    """A term and its root."""

    term: str
    stem: str


class StemResponse(BaseModel):
    """Response from batch stemming.

    Attributes:
        stems: One entry per requested term, in request order.
        processing_time_ms: Time taken to stem the batch in milliseconds.
    """

    stems: list[StemmedTerm]
    processing_time_ms: float = Field(
        ...,
        ge=0,
        description="Processing time in milliseconds",
    )


class CollisionModel(BaseModel):
    word: str
    source: str
    existing_source: str


class LexiconResponse(BaseModel):
    """Lexicon build statistics."""

    entry_count: int
    collision_count: int
    source_counts: dict[str, int]
    collisions: list[CollisionModel]


# =============================================================================
# Router
# =============================================================================

stem_router = APIRouter(prefix="/v1", tags=[API_TAG])


@stem_router.post("/stem", response_model=StemResponse)
async def stem_batch(request: StemRequest) -> StemResponse:
    """Stem every term in the request.

    Example:
        POST /v1/stem
        {"terms": ["running", "calories"]}

        Response:
        {
            "stems": [
                {"term": "running", "stem": "run"},
                {"term": "calories", "stem": "calorie"}
            ],
            "processing_time_ms": 0.4
        }
    """
    max_terms = get_settings().max_batch_terms
    if len(request.terms) > max_terms:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"At most {max_terms} terms per request",
        )

    start_time = time.perf_counter()

    try:
        with tracer.start_as_current_span("stem.batch") as span:
            span.set_attribute("stem.terms", len(request.terms))
            stemmer = get_stemmer()
            stems = [
                StemmedTerm(term=term, stem=stemmer.stem(term)) for term in request.terms
            ]
    except KStemError as e:
        logger.error("stem_failed", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Stemming failed: {e!s}",
        ) from e

    processing_time_ms = (time.perf_counter() - start_time) * 1000
    logger.debug("stem_batch", terms=len(stems), processing_time_ms=processing_time_ms)

    return StemResponse(stems=stems, processing_time_ms=processing_time_ms)


@stem_router.get("/stem/{term}", response_model=StemmedTerm)
async def stem_single(term: str) -> StemmedTerm:
    """Stem a single term."""
    if len(term) > MAX_TERM_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Term longer than {MAX_TERM_LENGTH} characters",
        )
    try:
        return StemmedTerm(term=term, stem=get_stemmer().stem(term))
    except KStemError as e:
        logger.error("stem_failed", term=term, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Stemming failed: {e!s}",
        ) from e


@stem_router.get("/lexicon", response_model=LexiconResponse)
async def lexicon_stats() -> LexiconResponse:
    """Report entry counts per source and every rejected duplicate key."""
    report = get_build_report()
    return LexiconResponse(
        entry_count=report.entry_count,
        collision_count=report.collision_count,
        source_counts=dict(report.source_counts),
        collisions=[
            CollisionModel(
                word=c.word,
                source=c.source,
                existing_source=c.existing_source,
            )
            for c in report.collisions
        ],
    )
