"""
Abstract base class for retrievers.

A retriever takes a query and a role and returns the documents that role
is allowed to see, ranked by relevance. "No access" and "nothing
relevant" both come back as an empty result, never as an error.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from role_rag.models.result import RetrievalResult


class BaseRetriever(ABC):
    """Contract for role-scoped retrievers."""

    @abstractmethod
    def retrieve(
        self,
        query: str,
        role: str,
        k: Optional[int] = None,
        filter: Optional[dict[str, Any]] = None,
    ) -> RetrievalResult:
        """
        Retrieve documents for a natural-language query.

        Args:
            query: The (standalone) question.
            role: Requesting role.
            k: Number of documents to return; falls back to the configured default.
            filter: Optional metadata predicate (key equals value).

        Returns:
            RetrievalResult with at most k documents, score descending.
        """
        ...
