"""
role-rag: role-aware retrieval-augmented question answering.

Every document chunk carries the roles allowed to read it; every question
is answered from that role's documents only.

Quick start:
    from role_rag import ServiceConfig, build_services

    services = build_services(ServiceConfig.from_env())
    services.ingestor.ingest("ops.pdf", "Operations", ["StationController"])

    result = services.orchestrator.ask("How do platform doors work?", role="StationController")
    print(result.answer, result.sources)

Serve over HTTP with `role-rag serve`.
"""

from role_rag.config import (
    ChunkingConfig,
    EmbeddingConfig,
    LLMConfig,
    ReportConfig,
    RetrieverConfig,
    ServerConfig,
    ServiceConfig,
    VectorStoreConfig,
)
from role_rag.orchestrator import AnswerOrchestrator
from role_rag.roles import Department, Role
from role_rag.services import ServiceContainer, build_services

__all__ = [
    # Services (public API)
    "build_services",
    "ServiceContainer",
    "AnswerOrchestrator",
    # Labels
    "Role",
    "Department",
    # Config
    "ServiceConfig",
    "LLMConfig",
    "EmbeddingConfig",
    "ChunkingConfig",
    "RetrieverConfig",
    "VectorStoreConfig",
    "ReportConfig",
    "ServerConfig",
]

__version__ = "0.1.0"
