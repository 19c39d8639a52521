"""Tests for config models — pure Pydantic validation, no API calls."""

import pytest

from role_rag.config import (
    ChunkingConfig,
    EmbeddingConfig,
    LLMConfig,
    LLMProvider,
    ReportConfig,
    RetrieverConfig,
    ServerConfig,
    ServiceConfig,
    VectorStoreConfig,
    VectorStoreType,
)


class TestLLMConfig:

    def test_defaults(self):
        config = LLMConfig()
        assert config.provider == LLMProvider.OPENAI
        assert config.model_name == "gpt-4o-mini"
        assert config.temperature == 0.0
        assert config.max_tokens == 2000
        assert config.request_timeout == 60.0
        assert config.max_retries == 2

    def test_anthropic_provider(self):
        config = LLMConfig(provider="anthropic", model_name="claude-sonnet-4-5-20250929")
        assert config.provider == LLMProvider.ANTHROPIC

    def test_unknown_provider_rejected(self):
        with pytest.raises(Exception):
            LLMConfig(provider="llamacpp")

    def test_temperature_bounds(self):
        LLMConfig(temperature=0.0)
        LLMConfig(temperature=2.0)
        with pytest.raises(Exception):
            LLMConfig(temperature=-0.1)
        with pytest.raises(Exception):
            LLMConfig(temperature=2.1)

    def test_timeout_positive(self):
        with pytest.raises(Exception):
            LLMConfig(request_timeout=0)


class TestEmbeddingConfig:

    def test_defaults(self):
        config = EmbeddingConfig()
        assert config.provider == "openai"
        assert config.model_name == "text-embedding-3-small"
        assert config.model_kwargs == {}

    def test_custom_provider(self):
        config = EmbeddingConfig(provider="huggingface", model_name="all-MiniLM-L6-v2")
        assert config.provider == "huggingface"


class TestChunkingConfig:

    def test_defaults(self):
        config = ChunkingConfig()
        assert config.chunk_size == 1000
        assert config.chunk_overlap == 200
        assert config.split_threshold == 1500

    def test_overlap_must_be_less_than_size(self):
        with pytest.raises(ValueError, match="chunk_overlap"):
            ChunkingConfig(chunk_size=100, chunk_overlap=100)

    def test_threshold_must_cover_chunk_size(self):
        with pytest.raises(ValueError, match="split_threshold"):
            ChunkingConfig(chunk_size=1000, chunk_overlap=200, split_threshold=800)


class TestOtherConfigs:

    def test_retriever_defaults(self):
        config = RetrieverConfig()
        assert config.k == 4
        assert config.max_sources == 3

    def test_retriever_k_positive(self):
        with pytest.raises(Exception):
            RetrieverConfig(k=0)

    def test_vector_store_defaults(self):
        config = VectorStoreConfig()
        assert config.store_type == VectorStoreType.FAISS
        assert config.dimension == 1536
        assert config.persist_directory is None

    def test_report_defaults(self):
        config = ReportConfig()
        assert config.briefing_k == 6
        assert config.alert_k == 8
        assert config.default_alert_role == "Director"

    def test_server_defaults(self):
        config = ServerConfig()
        assert config.port == 3001
        assert config.cors_origins == ["*"]


class TestServiceConfig:

    def test_all_defaults(self):
        config = ServiceConfig()
        assert config.llm.provider == LLMProvider.OPENAI
        assert config.retriever.k == 4
        assert config.chunking.split_threshold == 1500

    def test_override_one_part(self):
        config = ServiceConfig(retriever=RetrieverConfig(k=6))
        assert config.retriever.k == 6
        assert config.reports.briefing_k == 6

    def test_from_env_overlays_variables(self):
        config = ServiceConfig.from_env({
            "ROLE_RAG_LLM_PROVIDER": "anthropic",
            "ROLE_RAG_LLM_MODEL": "claude-sonnet-4-5-20250929",
            "ROLE_RAG_EMBEDDING_PROVIDER": "fake",
            "ROLE_RAG_EMBEDDING_DIMENSION": "64",
            "ROLE_RAG_PORT": "8080",
        })
        assert config.llm.provider == LLMProvider.ANTHROPIC
        assert config.llm.model_name == "claude-sonnet-4-5-20250929"
        assert config.embedding.provider == "fake"
        assert config.vector_store.dimension == 64
        assert config.server.port == 8080

    def test_from_env_empty_keeps_defaults(self):
        config = ServiceConfig.from_env({})
        assert config == ServiceConfig()

    def test_from_env_invalid_value_rejected(self):
        with pytest.raises(Exception):
            ServiceConfig.from_env({"ROLE_RAG_PORT": "not-a-port"})
