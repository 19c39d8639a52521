"""
Report endpoints.

Routes:
- GET /api/briefings?role= - daily briefing for a role
- GET /api/alerts?role=    - predictive risk alerts seen through a role
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.concurrency import run_in_threadpool

from role_rag.api.deps import get_alerts, get_briefings
from role_rag.api.schemas import ErrorResponse
from role_rag.exceptions import ValidationError
from role_rag.models.result import AlertResult, BriefingResult
from role_rag.reports.alerts import AlertScanner
from role_rag.reports.briefing import BriefingGenerator
from role_rag.roles import normalize_role

router = APIRouter(
    prefix="/api",
    tags=["reports"],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


def _role_param(role: str) -> str:
    try:
        return normalize_role(role)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.get("/briefings", response_model=BriefingResult)
async def briefings(
    role: str = Query(..., description="Role to build the briefing for"),
    generator: BriefingGenerator = Depends(get_briefings),
) -> BriefingResult:
    return await run_in_threadpool(generator.make_briefing, _role_param(role))


@router.get("/alerts", response_model=AlertResult)
async def alerts(
    role: str = Query(..., description="Role to scan as"),
    scanner: AlertScanner = Depends(get_alerts),
) -> AlertResult:
    return await run_in_threadpool(scanner.scan, _role_param(role))
