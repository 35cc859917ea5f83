from fastapi import APIRouter

from gleam_packages_mcp.api.schemas import HealthResponse

router = APIRouter()


@router.get("/healthz/live", response_model=HealthResponse)
async def liveness() -> HealthResponse:
    """Liveness probe."""
    return HealthResponse()
