"""
Vector index backed by FAISS.

This is the store both halves of the service share:

    Ingestor  → insert_batch()   (writes, one batch per file)
    Retriever → query_nearest()  (reads, role-scoped)

FAISS keeps vectors in memory and uses exact inner-product search here.
Vectors are L2-normalised on the way in and on the way out, so the inner
product IS cosine similarity: higher = more relevant, 1.0 = identical.

Role scoping is evaluated inside the index over the whole candidate set
(fetch_k = everything stored), so the k results a role gets are its true
top-k, not whatever survived a post-filter of someone else's top-k.

Usage:
    from role_rag.indexing.vectorstore import create_vector_index
    from role_rag.config import VectorStoreConfig

    index = create_vector_index(VectorStoreConfig(dimension=768), embedder)
    index.insert_batch(chunks)
    hits = index.query_nearest(vector, k=4, role="HR")
"""

import logging
import os
import threading
from typing import Any, Callable, Optional

import numpy as np
from langchain_core.embeddings import Embeddings
from langchain_core.vectorstores import VectorStore

from role_rag.base.index import BaseVectorIndex
from role_rag.config import VectorStoreConfig, VectorStoreType
from role_rag.exceptions import DimensionMismatchError, IndexWriteError
from role_rag.models.document import Chunk, ChunkMetadata

logger = logging.getLogger(__name__)


class FAISSVectorIndex(BaseVectorIndex):
    """
    Role-aware vector index over a LangChain FAISS store.

    Each stored Document keeps the chunk's content as page_content and
    its access-control fields in metadata:
        {"metadata": {...}, "department": "...", "allowed_roles": [...]}

    A re-entrant lock serialises batch writes against queries; that is
    the only locking the service needs because chunks never change.
    """

    def __init__(
        self,
        embeddings: Embeddings,
        dimension: int,
        persist_directory: Optional[str] = None,
    ):
        self._dimension = dimension
        self._persist_directory = persist_directory
        self._lock = threading.RLock()

        if persist_directory and os.path.isfile(os.path.join(persist_directory, "index.faiss")):
            self._store = _load_faiss(embeddings, persist_directory)
            stored_dimension = self._store.index.d
            if stored_dimension != dimension:
                raise DimensionMismatchError(expected=dimension, actual=stored_dimension)
            logger.info(
                "Loaded FAISS index from %s (%d chunks)", persist_directory, self.count()
            )
        else:
            self._store = _create_faiss(embeddings, dimension)

    @property
    def dimension(self) -> int:
        return self._dimension

    def count(self) -> int:
        return self._store.index.ntotal

    def insert_batch(self, chunks: list[Chunk]) -> int:
        if not chunks:
            return 0

        # Validate everything before touching the store, so a bad vector
        # rejects the whole batch instead of leaving half of it behind.
        for chunk in chunks:
            if chunk.embedding is None:
                raise IndexWriteError(
                    "Chunk has no embedding", {"source": chunk.metadata.source}
                )
            if len(chunk.embedding) != self._dimension:
                raise DimensionMismatchError(expected=self._dimension, actual=len(chunk.embedding))

        text_embeddings = [
            (chunk.content, _normalize(chunk.embedding).tolist()) for chunk in chunks
        ]
        metadatas = [_to_stored_metadata(chunk) for chunk in chunks]

        with self._lock:
            before = self.count()
            try:
                ids = self._store.add_embeddings(text_embeddings=text_embeddings, metadatas=metadatas)
            except Exception as e:
                raise IndexWriteError(f"FAISS rejected batch: {e}") from e

            written = self.count() - before
            if written != len(chunks):
                logger.error(
                    "Inconsistent index write: expected %d chunks, index grew by %d",
                    len(chunks), written,
                )
                raise IndexWriteError(
                    "Batch only partly applied",
                    {"expected": len(chunks), "written": written},
                )

            if self._persist_directory:
                try:
                    self._store.save_local(self._persist_directory)
                except Exception as e:
                    # Withdraw the batch so a failed write is never queryable
                    self._store.delete(ids)
                    logger.error(
                        "Could not persist index to %s, batch of %d withdrawn: %s",
                        self._persist_directory, len(chunks), e,
                    )
                    raise IndexWriteError(
                        f"Could not persist index: {e}",
                        {"persist_directory": self._persist_directory},
                    ) from e

        return written

    def query_nearest(
        self,
        embedding: list[float],
        k: int,
        role: str,
        metadata_filter: Optional[dict[str, Any]] = None,
    ) -> list[tuple[Chunk, float]]:
        if len(embedding) != self._dimension:
            raise DimensionMismatchError(expected=self._dimension, actual=len(embedding))

        with self._lock:
            total = self.count()
            if total == 0 or k <= 0:
                return []

            docs_and_scores = self._store.similarity_search_with_score_by_vector(
                _normalize(embedding).tolist(),
                k=k,
                filter=_build_predicate(role, metadata_filter),
                fetch_k=total,
            )

        return [
            (_from_stored(doc.page_content, doc.metadata), float(score))
            for doc, score in docs_and_scores
        ]


# ---------------------------------------------------------------------------
# Stored-row mapping and filtering
# ---------------------------------------------------------------------------

def _to_stored_metadata(chunk: Chunk) -> dict[str, Any]:
    return {
        "metadata": chunk.metadata.model_dump(),
        "department": chunk.department,
        "allowed_roles": list(chunk.allowed_roles),
    }


def _from_stored(content: str, stored: dict[str, Any]) -> Chunk:
    return Chunk(
        content=content,
        metadata=ChunkMetadata(**stored["metadata"]),
        department=stored.get("department", ""),
        allowed_roles=stored["allowed_roles"],
    )


def _build_predicate(
    role: str,
    metadata_filter: Optional[dict[str, Any]],
) -> Callable[[dict[str, Any]], bool]:
    """
    Build the per-row predicate FAISS evaluates during search.

    The role check comes first and is not optional: a row whose
    allowed_roles does not list the role is never a candidate.
    """
    wanted = dict(metadata_filter or {})

    def predicate(stored: dict[str, Any]) -> bool:
        if role not in stored.get("allowed_roles", ()):
            return False
        if not wanted:
            return True
        fields = {**stored.get("metadata", {}), "department": stored.get("department")}
        return all(fields.get(key) == value for key, value in wanted.items())

    return predicate


def _normalize(vector: list[float]) -> np.ndarray:
    array = np.asarray(vector, dtype=np.float32)
    norm = np.linalg.norm(array)
    return array / norm if norm > 0 else array


# ---------------------------------------------------------------------------
# FAISS construction
# ---------------------------------------------------------------------------

def _create_faiss(embeddings: Embeddings, dimension: int) -> VectorStore:
    """
    Create an empty FAISS store with an exact inner-product index.

    The embedding function is only kept so save/load round-trips; all
    searches here go through precomputed vectors.
    """
    import faiss
    from langchain_community.docstore.in_memory import InMemoryDocstore
    from langchain_community.vectorstores import FAISS
    from langchain_community.vectorstores.utils import DistanceStrategy

    return FAISS(
        embedding_function=embeddings,
        index=faiss.IndexFlatIP(dimension),
        docstore=InMemoryDocstore(),
        index_to_docstore_id={},
        distance_strategy=DistanceStrategy.MAX_INNER_PRODUCT,
    )


def _load_faiss(embeddings: Embeddings, path: str) -> VectorStore:
    """Load a FAISS store from a previously saved directory."""
    from langchain_community.vectorstores import FAISS
    from langchain_community.vectorstores.utils import DistanceStrategy

    return FAISS.load_local(
        path,
        embeddings,
        allow_dangerous_deserialization=True,
        distance_strategy=DistanceStrategy.MAX_INNER_PRODUCT,
    )


def create_vector_index(config: VectorStoreConfig, embeddings: Embeddings) -> BaseVectorIndex:
    """
    Create (or load, if persist_directory holds one) the configured index.

    Args:
        config: Which backend, its dimension and where it persists.
        embeddings: The service's Embedder.

    Returns:
        A BaseVectorIndex ready for insert_batch() and query_nearest().
    """
    if config.store_type == VectorStoreType.FAISS:
        return FAISSVectorIndex(
            embeddings=embeddings,
            dimension=config.dimension,
            persist_directory=config.persist_directory,
        )

    raise ValueError(
        f"Unknown vector store type: '{config.store_type}'. Supported: 'faiss'."
    )
