"""
LangGraph graphs.

Usage:
    from role_rag.graphs import build_answer_graph, AnswerState
"""

from .answer import build_answer_graph, select_sources
from .state import AnswerState

__all__ = ["build_answer_graph", "select_sources", "AnswerState"]
