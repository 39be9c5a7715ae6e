"""
Food API — Health endpoint
"""
import asyncio

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from food_api.api.deps import get_store
from food_api.core.config import get_settings
from food_api.db.document_store import DocumentStore
from food_api.schemas.common import HealthResponse

settings = get_settings()
router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(store: DocumentStore = Depends(get_store)):
    """
    Deep health check — verifies Firestore connectivity.
    Returns 200 if all dependencies are healthy, 503 otherwise.
    """
    deps: dict[str, str] = {}
    healthy = True

    try:
        await asyncio.wait_for(store.ping(), timeout=settings.HEALTH_CHECK_TIMEOUT)
        deps["firestore"] = "ok"
    except Exception as e:
        deps["firestore"] = f"error: {str(e)[:100]}"
        healthy = False

    response = HealthResponse(
        status="healthy" if healthy else "degraded",
        service=settings.SERVICE_NAME,
        version=settings.SERVICE_VERSION,
        dependencies=deps,
    )

    return JSONResponse(
        content=response.model_dump(),
        status_code=200 if healthy else 503,
    )
