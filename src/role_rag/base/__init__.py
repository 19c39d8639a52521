"""
Abstract base classes defining the contract for each pipeline stage.

Import from here:
    from role_rag.base import BaseRetriever, BaseVectorIndex, BaseTextGenerator
"""

from .generator import BaseTextGenerator
from .index import BaseVectorIndex
from .indexer import BaseChunker, BaseLoader
from .retriever import BaseRetriever

__all__ = [
    "BaseLoader",
    "BaseChunker",
    "BaseVectorIndex",
    "BaseRetriever",
    "BaseTextGenerator",
]
