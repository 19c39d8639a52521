"""
AnswerOrchestrator: the question-answering entry point.

Wraps the answer graph (normalize → retrieve → synthesize → attach
sources) and the "why" explanation. This is the boundary where failures
stop: whatever goes wrong inside, the caller receives a well-formed
AnswerResult or ExplanationResult.

Usage:
    orchestrator = AnswerOrchestrator(retriever, generator, RetrieverConfig())

    result = orchestrator.ask("How do platform doors work?", role="StationController")
    print(result.answer)
    print(result.sources)      # [SourceRef(source="ops.pdf", page=2)]

    explanation = orchestrator.why(question, "StationController", result.retrieved)
    print(explanation.why)
"""

import logging
from typing import Any, Optional

from role_rag.base.generator import BaseTextGenerator
from role_rag.base.retriever import BaseRetriever
from role_rag.config import RetrieverConfig
from role_rag.generation.generate import format_snippets
from role_rag.graphs.answer import build_answer_graph
from role_rag.messages import (
    ANSWER_ERROR,
    EXPLANATION_ERROR,
    NO_DOCUMENTS_TO_EXPLAIN,
)
from role_rag.models.document import RetrievedDocument
from role_rag.models.result import AnswerResult, ExplanationResult
from role_rag.query.translation import StandaloneQuestionRewriter

logger = logging.getLogger(__name__)


class AnswerOrchestrator:
    """
    Answers questions for one role at a time.

    Holds no per-request state: the retriever, generator and compiled
    graph are shared, and every ask() call starts from a fresh state dict,
    so concurrent calls are independent.
    """

    def __init__(
        self,
        retriever: BaseRetriever,
        generator: BaseTextGenerator,
        config: Optional[RetrieverConfig] = None,
        rewriter: Optional[StandaloneQuestionRewriter] = None,
    ):
        self._retriever = retriever
        self._generator = generator
        self._config = config or RetrieverConfig()
        self._rewriter = rewriter or StandaloneQuestionRewriter(generator)
        self._graph = build_answer_graph(
            rewriter=self._rewriter,
            retriever=self._retriever,
            generator=self._generator,
            retriever_config=self._config,
        )

    def ask(
        self,
        question: str,
        role: str,
        filter: Optional[dict[str, Any]] = None,
        k: Optional[int] = None,
        answer_prompt: str = "answer",
    ) -> AnswerResult:
        """
        Answer a question using only documents the role may read.

        Args:
            question: The user's question, in any language.
            role: Requester role. Only chunks listing it are retrieved.
            filter: Optional equality filter on chunk metadata.
            k: Documents to retrieve (defaults to RetrieverConfig.k).
            answer_prompt: Prompt used for synthesis. "answer" is parsed
                for model-declared sources; other prompts are plain text.

        Returns:
            AnswerResult. Never raises: no documents gives the no-access
            answer, any failure gives an apology with empty sources.
        """
        try:
            return self.run(question, role, filter=filter, k=k, answer_prompt=answer_prompt)
        except Exception:
            logger.exception("Answer pipeline failed for role %s", role)
            return AnswerResult(answer=ANSWER_ERROR, sources=[], retrieved=[])

    def run(
        self,
        question: str,
        role: str,
        filter: Optional[dict[str, Any]] = None,
        k: Optional[int] = None,
        answer_prompt: str = "answer",
    ) -> AnswerResult:
        """
        Same pipeline as ask(), but failures propagate.

        Batch callers use this so they can tell a failed question apart
        from an answered one.
        """
        state = self._graph.invoke({
            "question": question,
            "role": role,
            "filter": filter,
            "k": k or self._config.k,
            "answer_prompt": answer_prompt,
        })

        retrieval = state.get("retrieval")
        return AnswerResult(
            answer=state["answer"],
            sources=state.get("sources", []),
            retrieved=retrieval.documents if retrieval else [],
        )

    def why(
        self,
        question: str,
        role: str,
        docs: list[RetrievedDocument],
    ) -> ExplanationResult:
        """
        Explain how the given documents support an answer.

        The documents are the ones the caller was already shown; nothing
        is retrieved again. Evidence lists every supplied document.
        """
        if not docs:
            return ExplanationResult(why=NO_DOCUMENTS_TO_EXPLAIN, evidence=[])

        evidence = [doc.source_ref for doc in docs]
        try:
            why = self._generator.complete("why", {
                "question": question,
                "role": role,
                "snippets": format_snippets(docs),
            })
        except Exception:
            logger.exception("Explanation failed for role %s", role)
            return ExplanationResult(why=EXPLANATION_ERROR, evidence=[])

        return ExplanationResult(why=why, evidence=evidence)

