"""
Result models for retrieval, answering, reports and ingestion.

These are the outputs of the pipeline: what callers and the HTTP layer
get back.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .document import RetrievedDocument, SourceRef


# ---------------------------------------------------------------------------
# Retrieval results
# ---------------------------------------------------------------------------

class RetrievalResult(BaseModel):
    """
    Output of the retrieval stage.

    An empty documents list means either "nothing relevant" or "nothing
    this role may see". Callers cannot tell the two apart.
    """

    documents: list[RetrievedDocument] = Field(default_factory=list)
    query_used: str = Field(description="The query that was embedded")
    role: str = Field(description="Role the search was scoped to")


# ---------------------------------------------------------------------------
# Generation results
# ---------------------------------------------------------------------------

class SynthesizedAnswer(BaseModel):
    """
    Structured shape the answer prompt asks the model for.

    sources is None when the model output did not parse; an empty list
    means the model parsed but named nothing.
    """

    answer: str = Field(description="The answer text, in the question's language")
    sources: Optional[list[SourceRef]] = Field(
        default=None,
        description="Documents the answer drew on, as named by the model",
    )


class AnswerResult(BaseModel):
    """The response to one question for one role."""

    answer: str
    sources: list[SourceRef] = Field(default_factory=list)
    retrieved: list[RetrievedDocument] = Field(default_factory=list)


class ExplanationResult(BaseModel):
    """The rationale ("why") for a set of previously retrieved documents."""

    why: str
    evidence: list[SourceRef] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------

class BriefingItem(BaseModel):
    question: str
    answer: str
    sources: list[SourceRef] = Field(default_factory=list)


class BriefingResult(BaseModel):
    """
    A role's daily briefing. Items follow the static question order.

    Serialised with the wire name generatedAt; either name is accepted
    on construction.
    """

    model_config = ConfigDict(populate_by_name=True)

    role: str
    items: list[BriefingItem] = Field(default_factory=list)
    generated_at: datetime = Field(alias="generatedAt")


class AlertItem(BaseModel):
    query: str
    answer: str
    sources: list[SourceRef] = Field(min_length=1)


class AlertResult(BaseModel):
    """Risk alerts: only queries that found supporting evidence appear."""

    role: str
    alerts: list[AlertItem] = Field(default_factory=list)
    timestamp: datetime


# ---------------------------------------------------------------------------
# Ingestion
# ---------------------------------------------------------------------------

class IngestResult(BaseModel):
    """Outcome of ingesting one file. Failures are reported, never raised."""

    success: bool
    message: str
    source: str = Field(default="")
    chunk_count: int = Field(default=0, ge=0)
