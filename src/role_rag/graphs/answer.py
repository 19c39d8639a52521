"""
Answer pipeline as a LangGraph graph.

    START → normalize → retrieve ─┬─ (no documents) → no_documents → END
                                  └─ (documents)    → synthesize → attach_sources → END

    normalize       rewrite to a standalone question (raw question on failure)
    retrieve        role-scoped top-k for the standalone question
    no_documents    fixed "no access" answer, no synthesis call at all
    synthesize      cited context + original question → answer prompt
    attach_sources  model-declared sources if usable, else top min(k, max_sources)

Retriever and generator errors are NOT caught here; they propagate out of
invoke() and AnswerOrchestrator turns them into the apologetic answer.

Usage:
    from role_rag.graphs.answer import build_answer_graph

    graph = build_answer_graph(rewriter, retriever, generator)
    state = graph.invoke({"question": "...", "role": "HR", "k": 4, "answer_prompt": "answer"})
    print(state["answer"], state["sources"])
"""

from typing import Optional

from langgraph.graph import END, START, StateGraph

from role_rag.base.generator import BaseTextGenerator
from role_rag.base.retriever import BaseRetriever
from role_rag.config import RetrieverConfig
from role_rag.generation.generate import combine_documents, parse_synthesized_answer
from role_rag.generation.prompts import STRUCTURED_PROMPTS
from role_rag.graphs.state import AnswerState
from role_rag.messages import NO_ACCESS_ANSWER
from role_rag.models.document import RetrievedDocument, SourceRef
from role_rag.models.result import SynthesizedAnswer
from role_rag.query.translation import StandaloneQuestionRewriter


def select_sources(
    declared: Optional[list[SourceRef]],
    documents: list[RetrievedDocument],
    k: int,
    max_sources: int,
) -> list[SourceRef]:
    """
    Decide which citations an answer carries.

    Model-declared sources win when the model named any that were
    actually retrieved, matched on file and page; citations outside the
    retrieved set are dropped, so an answer can only cite documents the
    requester was shown. Otherwise the first min(k, max_sources)
    retrieved documents are cited.
    """
    if declared:
        retrieved_refs = {(doc.source_ref.source, doc.source_ref.page) for doc in documents}
        kept: list[SourceRef] = []
        for ref in declared:
            if (ref.source, ref.page) in retrieved_refs and ref not in kept:
                kept.append(ref)
        if kept:
            return kept

    return [doc.source_ref for doc in documents[: min(k, max_sources)]]


def build_answer_graph(
    rewriter: StandaloneQuestionRewriter,
    retriever: BaseRetriever,
    generator: BaseTextGenerator,
    retriever_config: Optional[RetrieverConfig] = None,
):
    """
    Build and compile the answer graph.

    Args:
        rewriter: Standalone-question rewriter.
        retriever: Role-scoped retriever.
        generator: TextGenerator used for synthesis.
        retriever_config: Default k and the fallback citation cap.

    Returns:
        A compiled LangGraph that accepts AnswerState input and returns
        the final AnswerState.
    """
    retriever_config = retriever_config or RetrieverConfig()

    def requested_k(state: AnswerState) -> int:
        k = state.get("k")
        return retriever_config.k if k is None else k

    # --- Node functions ---

    def normalize_node(state: AnswerState) -> dict:
        return {"standalone_question": rewriter.translate(state["question"])}

    def retrieve_node(state: AnswerState) -> dict:
        retrieval = retriever.retrieve(
            state["standalone_question"],
            role=state["role"],
            k=requested_k(state),
            filter=state.get("filter"),
        )
        return {"retrieval": retrieval}

    def no_documents_node(state: AnswerState) -> dict:
        return {"answer": NO_ACCESS_ANSWER, "sources": []}

    def synthesize_node(state: AnswerState) -> dict:
        prompt_name = state.get("answer_prompt") or "answer"
        text = generator.complete(prompt_name, {
            "context": combine_documents(state["retrieval"].documents),
            "question": state["question"],
        })

        if prompt_name in STRUCTURED_PROMPTS:
            synthesized = parse_synthesized_answer(text)
        else:
            synthesized = SynthesizedAnswer(answer=text, sources=None)
        return {"synthesized": synthesized}

    def attach_sources_node(state: AnswerState) -> dict:
        synthesized = state["synthesized"]
        sources = select_sources(
            synthesized.sources,
            state["retrieval"].documents,
            k=requested_k(state),
            max_sources=retriever_config.max_sources,
        )
        return {"answer": synthesized.answer, "sources": sources}

    # --- Routing ---

    def route_after_retrieve(state: AnswerState) -> str:
        if state["retrieval"].documents:
            return "synthesize"
        return "no_documents"

    # --- Build the graph ---
    graph = StateGraph(AnswerState)

    graph.add_node("normalize", normalize_node)
    graph.add_node("retrieve", retrieve_node)
    graph.add_node("no_documents", no_documents_node)
    graph.add_node("synthesize", synthesize_node)
    graph.add_node("attach_sources", attach_sources_node)

    graph.add_edge(START, "normalize")
    graph.add_edge("normalize", "retrieve")
    graph.add_conditional_edges(
        "retrieve",
        route_after_retrieve,
        {
            "synthesize": "synthesize",
            "no_documents": "no_documents",
        },
    )
    graph.add_edge("synthesize", "attach_sources")
    graph.add_edge("attach_sources", END)
    graph.add_edge("no_documents", END)

    return graph.compile()
