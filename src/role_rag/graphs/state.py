"""
LangGraph state definition for the answer pipeline.

The graph passes one state dict between nodes. Each node reads what it
needs and returns updates. TypedDict because LangGraph requires it.

Usage:
    from role_rag.graphs.state import AnswerState
"""

from typing import Any, Optional

from typing_extensions import TypedDict

from role_rag.models.document import SourceRef
from role_rag.models.result import RetrievalResult, SynthesizedAnswer


class AnswerState(TypedDict, total=False):
    """
    State for one ask() call. Nothing survives between calls.

    Flow: normalize → retrieve → (no_documents | synthesize → attach_sources)

    Fields are populated by different nodes:
        - question … answer_prompt: set at start
        - standalone_question:      set by normalize
        - retrieval:                set by retrieve
        - synthesized:              set by synthesize
        - answer, sources:          set by no_documents or attach_sources
    """

    # Input
    question: str
    role: str
    filter: Optional[dict[str, Any]]
    k: int
    answer_prompt: str

    # After normalisation
    standalone_question: str

    # After retrieval
    retrieval: RetrievalResult

    # After synthesis
    synthesized: SynthesizedAnswer

    # Final
    answer: str
    sources: list[SourceRef]
