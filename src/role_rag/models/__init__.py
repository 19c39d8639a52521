"""
Pydantic models shared across role-rag.

Import from here rather than reaching into submodules:
    from role_rag.models import Chunk, AnswerResult, BriefingResult
"""

from .document import Chunk, ChunkMetadata, RetrievedDocument, SourceRef
from .result import (
    AlertItem,
    AlertResult,
    AnswerResult,
    BriefingItem,
    BriefingResult,
    ExplanationResult,
    IngestResult,
    RetrievalResult,
    SynthesizedAnswer,
)

__all__ = [
    # Document
    "Chunk",
    "ChunkMetadata",
    "RetrievedDocument",
    "SourceRef",
    # Result
    "RetrievalResult",
    "SynthesizedAnswer",
    "AnswerResult",
    "ExplanationResult",
    "BriefingItem",
    "BriefingResult",
    "AlertItem",
    "AlertResult",
    "IngestResult",
]
