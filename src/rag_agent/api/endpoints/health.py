"""Health check endpoints."""

from fastapi import APIRouter

from rag_agent.core.config import get_settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict:
    """Basic health check endpoint."""
    return {"status": "healthy", "service": get_settings().service_name}


@router.get("/ready")
async def ready() -> dict:
    """
    Readiness check.

    The service answers even without its collaborators (fail-soft), so a
    missing key reports ``degraded`` rather than failing the probe.
    """
    settings = get_settings()
    checks = {
        "generation": "configured" if settings.generation_configured else "missing_api_key",
        "vector_index": "configured" if settings.vector_index_configured else "missing_api_key",
    }
    status = "ready" if all(v == "configured" for v in checks.values()) else "degraded"
    return {"status": status, "checks": checks}
