"""
Service container: every long-lived handle the serving boundary needs.

build_services() creates the Embedder, VectorIndex, TextGenerator and
everything layered on them exactly once. The API and the CLI receive the
container; nothing below it reaches for globals.

Usage:
    services = build_services(ServiceConfig.from_env())
    services.orchestrator.ask("How do platform doors work?", role="StationController")
    services.ingestor.ingest("ops.pdf", "Operations", ["StationController"])
"""

import logging
from dataclasses import dataclass
from typing import Optional

from langchain_core.embeddings import Embeddings

from role_rag.base.generator import BaseTextGenerator
from role_rag.base.index import BaseVectorIndex
from role_rag.base.retriever import BaseRetriever
from role_rag.config import ServiceConfig
from role_rag.generation.generate import LLMTextGenerator
from role_rag.indexing.embeddings import get_embedding_model
from role_rag.indexing.ingestion import Ingestor
from role_rag.indexing.vectorstore import create_vector_index
from role_rag.orchestrator import AnswerOrchestrator
from role_rag.query.translation import StandaloneQuestionRewriter
from role_rag.reports.alerts import AlertScanner
from role_rag.reports.briefing import BriefingGenerator
from role_rag.retrieval.search import RoleScopedRetriever

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    config: ServiceConfig
    embedder: Embeddings
    index: BaseVectorIndex
    generator: BaseTextGenerator
    retriever: BaseRetriever
    orchestrator: AnswerOrchestrator
    briefings: BriefingGenerator
    alerts: AlertScanner
    ingestor: Ingestor


def assemble_services(
    config: ServiceConfig,
    embedder: Embeddings,
    index: BaseVectorIndex,
    generator: BaseTextGenerator,
) -> ServiceContainer:
    """
    Wire the pipeline on top of the three external capabilities.

    Tests call this directly with fakes; build_services() calls it with
    the configured providers.
    """
    retriever = RoleScopedRetriever(embedder, index, config.retriever)
    orchestrator = AnswerOrchestrator(
        retriever,
        generator,
        config.retriever,
        rewriter=StandaloneQuestionRewriter(generator),
    )
    return ServiceContainer(
        config=config,
        embedder=embedder,
        index=index,
        generator=generator,
        retriever=retriever,
        orchestrator=orchestrator,
        briefings=BriefingGenerator(orchestrator, config.reports),
        alerts=AlertScanner(orchestrator, config.reports),
        ingestor=Ingestor(embedder, index, config.chunking),
    )


def build_services(config: Optional[ServiceConfig] = None) -> ServiceContainer:
    """Create the configured providers and wire them together."""
    config = config or ServiceConfig()

    embedder = get_embedding_model(config.embedding, dimension=config.vector_store.dimension)
    index = create_vector_index(config.vector_store, embedder)
    generator = LLMTextGenerator(config.llm)

    logger.info(
        "Services ready: llm=%s embeddings=%s/%s index=%s (%d chunks)",
        generator.model_name,
        config.embedding.provider,
        config.embedding.model_name,
        config.vector_store.store_type.value,
        index.count(),
    )
    return assemble_services(config, embedder, index, generator)
