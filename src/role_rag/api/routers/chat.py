"""
Question answering endpoints.

Routes:
- POST /api/chat - answer a question for a role
- POST /api/why  - explain previously returned documents

Both delegate to AnswerOrchestrator, which never raises; malformed
bodies are rejected with 400 before reaching it.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from role_rag.api.deps import get_orchestrator
from role_rag.api.schemas import ChatRequest, ErrorResponse, WhyRequest
from role_rag.models.result import AnswerResult, ExplanationResult
from role_rag.orchestrator import AnswerOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["chat"],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


@router.post("/chat", response_model=AnswerResult)
async def chat(
    request: ChatRequest,
    orchestrator: AnswerOrchestrator = Depends(get_orchestrator),
) -> AnswerResult:
    """
    Answer a question using only documents the role may read.

    The pipeline blocks on provider calls, so it runs in the threadpool
    and concurrent requests stay independent.
    """
    return await run_in_threadpool(
        orchestrator.ask,
        request.question,
        request.role,
        filter=request.filter,
        k=request.k,
    )


@router.post("/why", response_model=ExplanationResult)
async def why(
    request: WhyRequest,
    orchestrator: AnswerOrchestrator = Depends(get_orchestrator),
) -> ExplanationResult:
    """Explain how the supplied documents support an answer. Nothing is re-retrieved."""
    return await run_in_threadpool(
        orchestrator.why, request.question, request.role, request.docs
    )
