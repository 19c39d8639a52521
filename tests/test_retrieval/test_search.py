"""Tests for role-scoped retrieval — real FAISS, deterministic embeddings."""

from unittest.mock import MagicMock

import pytest

from role_rag.config import RetrieverConfig
from role_rag.models.result import RetrievalResult
from role_rag.retrieval.search import RoleScopedRetriever


@pytest.fixture
def retriever(embedder, populated_index, retriever_config):
    return RoleScopedRetriever(embedder, populated_index, retriever_config)


class TestRoleScopedRetriever:

    def test_returns_retrieval_result(self, retriever):
        result = retriever.retrieve("How do platform doors work?", role="StationController")
        assert isinstance(result, RetrievalResult)
        assert result.role == "StationController"
        assert result.query_used == "How do platform doors work?"
        assert [d.metadata.source for d in result.documents] == ["ops.pdf"]

    def test_never_returns_other_roles_documents(self, retriever):
        for role, visible in [
            ("HR", {"hr_policy.pdf"}),
            ("Engineer", {"fleet.md"}),
            ("Procurement", {"contracts.pdf"}),
            ("Director", {"ops.pdf", "hr_policy.pdf", "contracts.pdf"}),
        ]:
            result = retriever.retrieve("What changed this week?", role=role, k=10)
            assert {d.metadata.source for d in result.documents} == visible

    def test_unknown_role_is_empty_not_error(self, retriever):
        result = retriever.retrieve("anything", role="Auditor")
        assert result.documents == []

    def test_blank_role_is_empty(self, retriever):
        assert retriever.retrieve("anything", role="  ").documents == []

    def test_default_k_from_config(self, embedder, populated_index):
        retriever = RoleScopedRetriever(embedder, populated_index, RetrieverConfig(k=2))
        assert len(retriever.retrieve("status", role="Director").documents) == 2

    def test_explicit_zero_k_not_replaced_by_default(self, embedder, populated_index):
        retriever = RoleScopedRetriever(embedder, populated_index, RetrieverConfig(k=2))
        assert retriever.retrieve("status", role="Director", k=0).documents == []

    def test_ranked_by_score(self, retriever):
        result = retriever.retrieve("status", role="Director", k=3)
        scores = [d.score for d in result.documents]
        assert scores == sorted(scores, reverse=True)
        assert [d.rank for d in result.documents] == [0, 1, 2]

    def test_deterministic(self, retriever):
        first = retriever.retrieve("door faults", role="Director", k=3)
        second = retriever.retrieve("door faults", role="Director", k=3)
        assert first.documents == second.documents

    def test_metadata_filter_passed_through(self, retriever):
        result = retriever.retrieve("status", role="Director", k=10, filter={"department": "HR"})
        assert [d.department for d in result.documents] == ["HR"]

    def test_ties_keep_index_order(self, retriever_config):
        embedder = MagicMock()
        embedder.embed_query.return_value = [1.0, 0.0]
        index = MagicMock()
        first, second = MagicMock(), MagicMock()
        for chunk, source in ((first, "a.pdf"), (second, "b.pdf")):
            chunk.content = source
            chunk.metadata = {"source": source, "page": 1}
            chunk.department = "HR"
        index.query_nearest.return_value = [(first, 0.5), (second, 0.5)]

        result = RoleScopedRetriever(embedder, index, retriever_config).retrieve("q", role="HR")

        assert [d.metadata.source for d in result.documents] == ["a.pdf", "b.pdf"]

    def test_embedder_failure_propagates(self, populated_index, retriever_config):
        embedder = MagicMock()
        embedder.embed_query.side_effect = ConnectionError("down")
        retriever = RoleScopedRetriever(embedder, populated_index, retriever_config)
        with pytest.raises(ConnectionError):
            retriever.retrieve("q", role="HR")
