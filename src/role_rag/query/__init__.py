"""
Query normalisation.

Usage:
    from role_rag.query import StandaloneQuestionRewriter
"""

from .translation import StandaloneQuestionRewriter

__all__ = ["StandaloneQuestionRewriter"]
