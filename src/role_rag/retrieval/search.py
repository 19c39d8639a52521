"""
Role-scoped similarity retrieval.

Embeds the query once, asks the index for the k nearest chunks the role
may read, and wraps them as RetrievedDocuments ranked by score.

    retriever = RoleScopedRetriever(embedder, index, RetrieverConfig(k=4))
    result = retriever.retrieve("How do platform doors work?", role="StationController")
    # → RetrievalResult with up to 4 RetrievedDocuments, score descending

An unknown role, a role with no documents and a question with no
relevant documents all produce the same thing: an empty result.
"""

from typing import Any, Optional

from langchain_core.embeddings import Embeddings

from role_rag.base.index import BaseVectorIndex
from role_rag.base.retriever import BaseRetriever
from role_rag.config import RetrieverConfig
from role_rag.models.document import RetrievedDocument
from role_rag.models.result import RetrievalResult


class RoleScopedRetriever(BaseRetriever):
    """
    Cosine-similarity search constrained to one role.

    The role constraint and any metadata filter are applied inside the
    index, so k counts only documents the role is allowed to see.
    Embedder and index errors propagate; the orchestrator decides how to
    degrade.
    """

    def __init__(
        self,
        embedder: Embeddings,
        index: BaseVectorIndex,
        config: Optional[RetrieverConfig] = None,
    ):
        self._embedder = embedder
        self._index = index
        self._config = config or RetrieverConfig()

    def retrieve(
        self,
        query: str,
        role: str,
        k: Optional[int] = None,
        filter: Optional[dict[str, Any]] = None,
    ) -> RetrievalResult:
        if k is None:
            k = self._config.k
        if not role or not role.strip():
            return RetrievalResult(documents=[], query_used=query, role=role or "")

        embedding = self._embedder.embed_query(query)
        hits = self._index.query_nearest(embedding, k=k, role=role, metadata_filter=filter)

        # sorted() is stable: equal scores keep the index's own order
        hits = sorted(hits, key=lambda hit: hit[1], reverse=True)[:k]

        documents = []
        for rank, (chunk, score) in enumerate(hits):
            documents.append(RetrievedDocument(
                content=chunk.content,
                metadata=chunk.metadata,
                department=chunk.department,
                score=score,
                rank=rank,
            ))

        return RetrievalResult(documents=documents, query_used=query, role=role)
