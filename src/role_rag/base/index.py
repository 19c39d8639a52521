"""
Abstract base class for the vector index.

The index is the single shared store: the Ingestor writes to it, the
Retriever reads from it. Chunks are immutable once written, so the only
concurrency the index must handle is a batch insert racing a query.

Role scoping happens INSIDE the index. query_nearest() never returns a
chunk whose allowed_roles excludes the requested role, and the k limit
applies after that filter, so a role always gets its own top-k.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from role_rag.models.document import Chunk


class BaseVectorIndex(ABC):
    """Contract for vector indexes."""

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Embedding width every written vector must match."""
        ...

    @abstractmethod
    def insert_batch(self, chunks: list[Chunk]) -> int:
        """
        Write embedded chunks in one call.

        Either every chunk becomes visible to queries or the call raises.

        Args:
            chunks: Chunks with embedding populated.

        Returns:
            Number of chunks written.

        Raises:
            DimensionMismatchError: An embedding has the wrong width.
            IndexWriteError: The store rejected or only partly applied the batch.
        """
        ...

    @abstractmethod
    def query_nearest(
        self,
        embedding: list[float],
        k: int,
        role: str,
        metadata_filter: Optional[dict[str, Any]] = None,
    ) -> list[tuple[Chunk, float]]:
        """
        Return up to k chunks visible to role, most similar first.

        Args:
            embedding: Query vector.
            k: Maximum number of results.
            role: Requesting role; only chunks listing it are candidates.
            metadata_filter: Every key must equal the chunk's metadata value.

        Returns:
            (chunk, similarity) pairs, similarity descending.
        """
        ...

    @abstractmethod
    def count(self) -> int:
        """Number of chunks currently stored."""
        ...
