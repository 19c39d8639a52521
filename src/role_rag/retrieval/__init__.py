"""
Retrieval components.

Usage:
    from role_rag.retrieval import RoleScopedRetriever
"""

from .search import RoleScopedRetriever

__all__ = ["RoleScopedRetriever"]
