"""Tests for the LangGraph answer pipeline and source selection."""

from unittest.mock import MagicMock

import pytest

from fakes import FakeTextGenerator
from role_rag.config import RetrieverConfig
from role_rag.graphs.answer import build_answer_graph, select_sources
from role_rag.messages import NO_ACCESS_ANSWER
from role_rag.models.document import SourceRef
from role_rag.models.result import RetrievalResult
from role_rag.query.translation import StandaloneQuestionRewriter


def _graph(retriever, generator, config=None):
    return build_answer_graph(
        rewriter=StandaloneQuestionRewriter(generator),
        retriever=retriever,
        generator=generator,
        retriever_config=config or RetrieverConfig(),
    )


def _retriever(documents):
    retriever = MagicMock()
    retriever.retrieve.side_effect = lambda query, role, k=None, filter=None: RetrievalResult(
        documents=documents[:k], query_used=query, role=role,
    )
    return retriever


class TestSelectSources:

    def test_declared_sources_win(self, retrieved_documents):
        declared = [SourceRef(source="sop.md", page=1)]
        assert select_sources(declared, retrieved_documents, k=4, max_sources=3) == declared

    def test_declared_sources_outside_retrieval_dropped(self, retrieved_documents):
        declared = [SourceRef(source="secret.pdf", page=9), SourceRef(source="ops.pdf", page=2)]
        assert select_sources(declared, retrieved_documents, k=4, max_sources=3) == [
            SourceRef(source="ops.pdf", page=2),
        ]

    def test_declared_page_must_match_retrieved_page(self, retrieved_documents):
        declared = [SourceRef(source="ops.pdf", page=99)]
        sources = select_sources(declared, retrieved_documents, k=4, max_sources=3)
        assert SourceRef(source="ops.pdf", page=99) not in sources
        assert sources == [
            SourceRef(source="ops.pdf", page=2),
            SourceRef(source="incidents.pdf", page=7),
            SourceRef(source="sop.md", page=1),
        ]

    def test_declared_duplicates_collapsed(self, retrieved_documents):
        ref = SourceRef(source="ops.pdf", page=2)
        assert select_sources([ref, ref], retrieved_documents, k=4, max_sources=3) == [ref]

    @pytest.mark.parametrize("declared", [None, []])
    def test_fallback_top_min_k_max_sources(self, retrieved_documents, declared):
        assert select_sources(declared, retrieved_documents, k=4, max_sources=3) == [
            SourceRef(source="ops.pdf", page=2),
            SourceRef(source="incidents.pdf", page=7),
            SourceRef(source="sop.md", page=1),
        ]

    def test_fallback_bounded_by_k(self, retrieved_documents):
        assert len(select_sources(None, retrieved_documents, k=2, max_sources=3)) == 2

    def test_only_unknown_declared_falls_back(self, retrieved_documents):
        declared = [SourceRef(source="secret.pdf", page=1)]
        sources = select_sources(declared, retrieved_documents, k=1, max_sources=3)
        assert sources == [SourceRef(source="ops.pdf", page=2)]


class TestAnswerGraph:

    def test_no_documents_short_circuits(self):
        generator = FakeTextGenerator({"answer": "should not be used"})
        state = _graph(_retriever([]), generator).invoke(
            {"question": "q", "role": "HR", "k": 4, "answer_prompt": "answer"}
        )
        assert state["answer"] == NO_ACCESS_ANSWER
        assert state["sources"] == []
        assert "answer" not in generator.prompts_called()

    def test_full_path(self, retrieved_documents):
        generator = FakeTextGenerator({
            "standalone_question": "How do platform doors work?",
            "answer": '{"answer": "They close automatically.", "sources": [{"source": "ops.pdf", "page": 2}]}',
        })
        retriever = _retriever(retrieved_documents)

        state = _graph(retriever, generator).invoke(
            {"question": "doors?", "role": "StationController", "k": 4, "answer_prompt": "answer"}
        )

        assert generator.prompts_called() == ["standalone_question", "answer"]
        retriever.retrieve.assert_called_once_with(
            "How do platform doors work?", role="StationController", k=4, filter=None,
        )
        # Synthesis sees the user's own question, retrieval the standalone one
        assert generator.calls[1][1]["question"] == "doors?"
        assert "[Source 1: ops.pdf p.2]" in generator.calls[1][1]["context"]
        assert state["answer"] == "They close automatically."
        assert state["sources"] == [SourceRef(source="ops.pdf", page=2)]

    def test_plain_text_prompt_uses_fallback_sources(self, retrieved_documents):
        generator = FakeTextGenerator({"briefing": '* **Doors**: {"answer": "x"}'})
        state = _graph(_retriever(retrieved_documents), generator).invoke(
            {"question": "q", "role": "HR", "k": 6, "answer_prompt": "briefing"}
        )
        assert state["answer"] == '* **Doors**: {"answer": "x"}'
        assert len(state["sources"]) == 3

    def test_k_defaults_from_config(self, retrieved_documents):
        retriever = _retriever(retrieved_documents)
        _graph(retriever, FakeTextGenerator(), RetrieverConfig(k=2)).invoke(
            {"question": "q", "role": "HR"}
        )
        assert retriever.retrieve.call_args.kwargs["k"] == 2

    def test_synthesis_failure_propagates(self, retrieved_documents):
        generator = FakeTextGenerator(fail_on={"answer"})
        with pytest.raises(RuntimeError):
            _graph(_retriever(retrieved_documents), generator).invoke(
                {"question": "q", "role": "HR", "k": 4, "answer_prompt": "answer"}
            )
