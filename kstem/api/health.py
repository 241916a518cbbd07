"""
KStem Service - Health API Routes

GET /health: liveness
GET /ready: readiness, 503 until the lexicon is loaded

Patterns Applied:
- Health Check Pattern with a HealthService class
- Pydantic response models

Anti-Patterns Avoided:
- Bare except clauses
- Missing response models
"""

from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from kstem import __version__
from kstem.core.logging import get_logger
from kstem.lexicon.dictionary import is_dictionary_loaded

# Initialize router
router = APIRouter(tags=["health"])

# Get logger
logger = get_logger(__name__)


# =============================================================================
# Response Models
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    service: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    checks: dict[str, bool]


# =============================================================================
# Health Service
# =============================================================================


class HealthService:
    """Service class for health check operations.

    Readiness follows the process-wide lexicon: the service is ready once
    the dictionary has been built.
    """

    def __init__(self, version: str = __version__, service: str = "kstem-service"):
        self._version = version
        self._service = service

    def check_health(self) -> dict[str, Any]:
        """Check basic service health.

        Returns:
            Health status dictionary with status, version, service
        """
        return {
            "status": "healthy",
            "version": self._version,
            "service": self._service,
        }

    def check_readiness(self) -> tuple[dict[str, Any], bool]:
        """Check if service is ready to accept requests.

        Returns:
            Tuple of (readiness dict, is_ready bool)
        """
        checks = {
            "lexicon_loaded": is_dictionary_loaded(),
        }

        is_ready = all(checks.values())
        result: dict[str, Any] = {
            "status": "ready" if is_ready else "not_ready",
            "checks": checks,
        }
        return result, is_ready


_health_service = HealthService()


def get_health_service() -> HealthService:
    """Get health service instance."""
    return _health_service


# =============================================================================
# Endpoints
# =============================================================================


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Basic health check endpoint for liveness probe",
)
async def health_check() -> HealthResponse:
    """Health check endpoint (liveness probe)."""
    service = get_health_service()
    data = service.check_health()
    logger.debug("health_check", status=data["status"])
    return HealthResponse(**data)


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={
        200: {"description": "Service is ready"},
        503: {"description": "Service is not ready"},
    },
    summary="Readiness Check",
    description="Readiness check endpoint; 503 until the lexicon is loaded",
)
async def readiness_check() -> JSONResponse:
    """Readiness check endpoint.

    Returns:
        200 if ready, 503 if not ready
    """
    service = get_health_service()
    data, is_ready = service.check_readiness()

    status_code = status.HTTP_200_OK if is_ready else status.HTTP_503_SERVICE_UNAVAILABLE

    logger.debug("readiness_check", status=data["status"], is_ready=is_ready)
    return JSONResponse(content=data, status_code=status_code)
