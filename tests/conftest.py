"""
Shared test fixtures for the role-rag test suite.

Provides reusable fixtures: configs, a deterministic embedder, an
in-process FAISS index, a recording text generator and sample chunks.
No fixture talks to a network service.
"""

import pytest
from fastapi.testclient import TestClient
from langchain_core.embeddings import DeterministicFakeEmbedding

from fakes import DIMENSION, FakeTextGenerator, make_chunk
from role_rag.api.app import create_app
from role_rag.config import (
    ChunkingConfig,
    EmbeddingConfig,
    LLMConfig,
    ReportConfig,
    RetrieverConfig,
    ServiceConfig,
    VectorStoreConfig,
)
from role_rag.indexing.vectorstore import FAISSVectorIndex
from role_rag.models.document import ChunkMetadata, RetrievedDocument
from role_rag.services import assemble_services


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def llm_config():
    return LLMConfig(provider="openai", model_name="gpt-4o-mini", temperature=0.0)


@pytest.fixture
def chunking_config():
    return ChunkingConfig()


@pytest.fixture
def retriever_config():
    return RetrieverConfig(k=4, max_sources=3)


@pytest.fixture
def report_config():
    return ReportConfig(briefing_k=6, alert_k=8, max_concurrency=2)


@pytest.fixture
def service_config():
    return ServiceConfig(
        embedding=EmbeddingConfig(provider="fake"),
        vector_store=VectorStoreConfig(dimension=DIMENSION),
        reports=ReportConfig(max_concurrency=2),
    )


# ---------------------------------------------------------------------------
# Capability fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def embedder():
    """Deterministic embedder: identical text → identical vector."""
    return DeterministicFakeEmbedding(size=DIMENSION)


@pytest.fixture
def index(embedder):
    """Empty in-memory FAISS index."""
    return FAISSVectorIndex(embedder, dimension=DIMENSION)


@pytest.fixture
def generator():
    return FakeTextGenerator()


# ---------------------------------------------------------------------------
# Sample data fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_chunks(embedder):
    """One chunk per department, each readable by a different role set."""
    return [
        make_chunk(
            "Platform doors close automatically 30 seconds before departure.",
            "ops.pdf", ["StationController", "Director"], page=2,
            department="Operations", embedder=embedder,
        ),
        make_chunk(
            "The annual leave policy grants 24 days per calendar year.",
            "hr_policy.pdf", ["HR", "Director"], page=1,
            department="HR", embedder=embedder,
        ),
        make_chunk(
            "Rolling stock unit 14 is out of service pending bogie inspection.",
            "fleet.md", ["Engineer"], page=1,
            department="Engineering", embedder=embedder,
        ),
        make_chunk(
            "Contract 2291 for escalator maintenance expires in 45 days.",
            "contracts.pdf", ["Procurement", "Director"], page=3,
            department="Procurement", embedder=embedder,
        ),
    ]


@pytest.fixture
def populated_index(index, sample_chunks):
    index.insert_batch(sample_chunks)
    return index


@pytest.fixture
def platform_doors_index(index, embedder):
    """A store holding a single StationController-only chunk."""
    index.insert_batch([
        make_chunk(
            "Platform doors close automatically",
            "ops.pdf", ["StationController"], page=2, embedder=embedder,
        ),
    ])
    return index


@pytest.fixture
def retrieved_documents():
    return [
        RetrievedDocument(
            content="Platform doors close automatically 30 seconds before departure.",
            metadata=ChunkMetadata(source="ops.pdf", page=2),
            department="Operations",
            score=0.91,
            rank=0,
        ),
        RetrievedDocument(
            content="Door faults are logged in the station incident register.",
            metadata=ChunkMetadata(source="incidents.pdf", page=7),
            department="Operations",
            score=0.74,
            rank=1,
        ),
        RetrievedDocument(
            content="Staff must report door faults within 10 minutes.",
            metadata=ChunkMetadata(source="sop.md", page=1),
            department="Operations",
            score=0.62,
            rank=2,
        ),
        RetrievedDocument(
            content="Door maintenance happens every Sunday night.",
            metadata=ChunkMetadata(source="maintenance.pdf", page=4),
            department="Engineering",
            score=0.55,
            rank=3,
        ),
    ]


# ---------------------------------------------------------------------------
# HTTP fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def api_generator():
    return FakeTextGenerator({
        "answer": '{"answer": "Platform doors close automatically.", '
                  '"sources": [{"source": "ops.pdf", "page": 2}]}',
        "why": "The operations manual says so.",
        "briefing": "* **Doors**: closing automatically.",
    })


@pytest.fixture
def services(service_config, embedder, platform_doors_index, api_generator):
    """Service container over the platform-doors store and a canned generator."""
    return assemble_services(service_config, embedder, platform_doors_index, api_generator)


@pytest.fixture
def client(services):
    return TestClient(create_app(services=services), raise_server_exceptions=False)
