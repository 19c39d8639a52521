"""GET /health: liveness plus the number of indexed chunks."""

from fastapi import APIRouter, Depends

from role_rag.api.deps import get_services
from role_rag.api.schemas import HealthResponse
from role_rag.services import ServiceContainer

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health_check(services: ServiceContainer = Depends(get_services)) -> HealthResponse:
    return HealthResponse(status="ok", chunks=services.index.count())
