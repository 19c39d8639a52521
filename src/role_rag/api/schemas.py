"""
Request bodies for the HTTP surface.

Responses reuse the pipeline's own result models (AnswerResult,
ExplanationResult, BriefingResult, AlertResult); only requests need
their own shapes. Validation failures here become 400 {error} responses.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from role_rag.exceptions import ValidationError
from role_rag.models.document import RetrievedDocument
from role_rag.roles import normalize_role


def _checked_role(value: str) -> str:
    try:
        return normalize_role(value)
    except ValidationError as e:
        raise ValueError(e.message) from e


class ChatRequest(BaseModel):
    """POST /api/chat"""

    question: str = Field(description="The user's question, in any language")
    role: str = Field(description="Requester role")
    filter: Optional[dict[str, Any]] = Field(
        default=None,
        description="Equality filter on chunk metadata (department included)",
    )
    k: Optional[int] = Field(default=None, ge=1, le=20, description="Documents to retrieve")

    @field_validator("question")
    @classmethod
    def question_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("question must not be blank")
        return value

    @field_validator("role")
    @classmethod
    def role_well_formed(cls, value: str) -> str:
        return _checked_role(value)


class WhyRequest(BaseModel):
    """POST /api/why. docs are the documents a previous chat returned."""

    question: str
    role: str
    docs: list[RetrievedDocument]

    @field_validator("role")
    @classmethod
    def role_well_formed(cls, value: str) -> str:
        return _checked_role(value)


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx response."""

    error: str


class HealthResponse(BaseModel):
    status: str
    chunks: int
