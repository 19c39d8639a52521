"""
Configuration for role-rag.

Split into one config per concern so each stage module only receives
what it needs. ServiceConfig bundles them all for convenience.

Usage:
    # Full config — pass to build_services()
    config = ServiceConfig()

    # Override specific parts
    config = ServiceConfig(
        llm=LLMConfig(provider="anthropic", model_name="claude-sonnet-4-5-20250929"),
        retriever=RetrieverConfig(k=6),
    )

    # From the environment (ROLE_RAG_* variables, .env is loaded at import)
    config = ServiceConfig.from_env()
"""

import os
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

# Load .env from the project root (walks up from this file to find it).
_env_path = Path(__file__).resolve().parent.parent.parent / ".env"
load_dotenv(_env_path)


# ---------------------------------------------------------------------------
# Enums — for things with a genuinely fixed set of choices
# ---------------------------------------------------------------------------

class LLMProvider(str, Enum):
    """
    Supported LLM providers.

    Each provider needs a different LangChain chat model class, so the
    set we can instantiate is closed.
    """

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"


class VectorStoreType(str, Enum):
    """Supported vector index backends."""

    FAISS = "faiss"


# ---------------------------------------------------------------------------
# Per-concern configs
# ---------------------------------------------------------------------------

class LLMConfig(BaseModel):
    """
    LLM configuration.

    Used by: generation/generate.py (the TextGenerator behind every prompt).

    request_timeout and max_retries are handed straight to the provider
    client; a timeout surfaces as an exception at the call site and takes
    that call site's failure path.
    """

    provider: LLMProvider = Field(
        default=LLMProvider.OPENAI,
        description="Which LLM provider to use",
    )
    model_name: str = Field(
        default="gpt-4o-mini",
        description="Model identifier (e.g. 'gpt-4o-mini', 'claude-sonnet-4-5-20250929')",
    )
    temperature: float = Field(
        default=0.0,
        ge=0.0,
        le=2.0,
        description="Sampling temperature. 0 = deterministic, higher = more creative",
    )
    max_tokens: int = Field(
        default=2000,
        gt=0,
        description="Maximum tokens in the LLM response",
    )
    request_timeout: float = Field(
        default=60.0,
        gt=0,
        description="Seconds before a single LLM call is abandoned",
    )
    max_retries: int = Field(
        default=2,
        ge=0,
        description="Client-side retries for a failed LLM call",
    )


class EmbeddingConfig(BaseModel):
    """
    Embedding model configuration.

    Used by: indexing/embeddings.py

    Provider is an open string because the embedding landscape keeps
    growing. The factory maps known provider strings to LangChain classes
    and raises a clear error for unknown ones.

    Examples:
        EmbeddingConfig(provider="openai")
        EmbeddingConfig(provider="huggingface", model_name="all-MiniLM-L6-v2")
        EmbeddingConfig(provider="fake")   # offline, deterministic vectors
    """

    provider: str = Field(
        default="openai",
        description="Embedding provider: 'openai', 'huggingface', 'cohere', 'google', 'fake'",
    )
    model_name: str = Field(
        default="text-embedding-3-small",
        description="Embedding model identifier",
    )
    model_kwargs: dict[str, Any] = Field(
        default_factory=dict,
        description="Extra kwargs passed to the embedding model constructor",
    )
    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Seconds before a single embedding call is abandoned",
    )


class ChunkingConfig(BaseModel):
    """
    Document chunking configuration.

    Used by: indexing/chunking.py, indexing/ingestion.py

    Pages longer than split_threshold characters are split into windows of
    up to chunk_size characters, chunk_overlap of which are shared between
    neighbours. Shorter pages are stored as a single chunk.
    """

    chunk_size: int = Field(
        default=1000,
        gt=0,
        description="Target chunk size in characters",
    )
    chunk_overlap: int = Field(
        default=200,
        ge=0,
        description="Overlap between consecutive chunks",
    )
    split_threshold: int = Field(
        default=1500,
        gt=0,
        description="Pages longer than this many characters get split",
    )

    @model_validator(mode="after")
    def validate_sizes(self) -> "ChunkingConfig":
        """Overlap must be smaller than chunk size, otherwise chunks would never advance."""
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError(
                f"chunk_overlap ({self.chunk_overlap}) must be less than "
                f"chunk_size ({self.chunk_size})"
            )
        if self.split_threshold < self.chunk_size:
            raise ValueError(
                f"split_threshold ({self.split_threshold}) must be at least "
                f"chunk_size ({self.chunk_size})"
            )
        return self


class RetrieverConfig(BaseModel):
    """
    Retrieval configuration.

    Used by: retrieval/search.py, orchestrator.py

    k is the default number of chunks retrieved per question; max_sources
    caps the fallback citation list attached to an answer.
    """

    k: int = Field(
        default=4,
        gt=0,
        description="Number of documents to return",
    )
    max_sources: int = Field(
        default=3,
        gt=0,
        description="Citations attached to an answer when the model names none",
    )


class VectorStoreConfig(BaseModel):
    """
    Vector index configuration.

    Used by: indexing/vectorstore.py

    dimension is the index's column width: every embedding written must
    have exactly this many components.
    """

    store_type: VectorStoreType = Field(
        default=VectorStoreType.FAISS,
        description="Vector index backend",
    )
    dimension: int = Field(
        default=1536,
        gt=0,
        description="Embedding dimension the index accepts",
    )
    persist_directory: Optional[str] = Field(
        default=None,
        description="Directory the index is loaded from and saved to after each write",
    )


class ReportConfig(BaseModel):
    """
    Briefing and alert replay configuration.

    Used by: reports/briefing.py, reports/alerts.py
    """

    briefing_k: int = Field(default=6, gt=0, description="k used per briefing question")
    alert_k: int = Field(default=8, gt=0, description="k used per risk query")
    max_concurrency: int = Field(
        default=4,
        gt=0,
        description="Questions replayed in parallel within one report",
    )
    default_alert_role: str = Field(
        default="Director",
        description="Role used for alert scans when none is given",
    )


class ServerConfig(BaseModel):
    """HTTP serving configuration. Used by: api/app.py, cli.py"""

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3001, gt=0, lt=65536)
    log_level: str = Field(default="INFO")
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


# ---------------------------------------------------------------------------
# Top-level config — bundles everything
# ---------------------------------------------------------------------------

class ServiceConfig(BaseModel):
    """
    Complete service configuration.

    build_services() receives this and passes slices to each stage:
        embedder  = get_embedding_model(config.embedding)
        index     = create_vector_index(config.vector_store, embedder)
        generator = LLMTextGenerator(config.llm)

    All sub-configs have sensible defaults, so ServiceConfig() with
    no arguments gives a working setup once provider keys are present.
    """

    llm: LLMConfig = Field(default_factory=LLMConfig)
    embedding: EmbeddingConfig = Field(default_factory=EmbeddingConfig)
    chunking: ChunkingConfig = Field(default_factory=ChunkingConfig)
    retriever: RetrieverConfig = Field(default_factory=RetrieverConfig)
    vector_store: VectorStoreConfig = Field(default_factory=VectorStoreConfig)
    reports: ReportConfig = Field(default_factory=ReportConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    @classmethod
    def from_env(cls, environ: Optional[dict[str, str]] = None) -> "ServiceConfig":
        """
        Build a config from ROLE_RAG_* environment variables.

        Only the knobs an operator typically changes are read; anything
        unset keeps its default. Values are validated by the sub-models.
        """
        env = os.environ if environ is None else environ

        def pick(**mapping: str) -> dict[str, str]:
            return {field: env[var] for field, var in mapping.items() if env.get(var)}

        return cls(
            llm=LLMConfig(**pick(
                provider="ROLE_RAG_LLM_PROVIDER",
                model_name="ROLE_RAG_LLM_MODEL",
                request_timeout="ROLE_RAG_LLM_TIMEOUT",
            )),
            embedding=EmbeddingConfig(**pick(
                provider="ROLE_RAG_EMBEDDING_PROVIDER",
                model_name="ROLE_RAG_EMBEDDING_MODEL",
            )),
            vector_store=VectorStoreConfig(**pick(
                dimension="ROLE_RAG_EMBEDDING_DIMENSION",
                persist_directory="ROLE_RAG_INDEX_DIR",
            )),
            server=ServerConfig(**pick(
                host="ROLE_RAG_HOST",
                port="ROLE_RAG_PORT",
                log_level="ROLE_RAG_LOG_LEVEL",
            )),
        )
