"""
Embedding model factory.

Returns the right LangChain embedding model based on EmbeddingConfig.
The returned object is the service's Embedder: embed_query() for
questions, embed_documents() for chunk batches, fixed output width.

Supported providers:
    "openai"      → OpenAIEmbeddings (API-based, default)
    "huggingface" → HuggingFaceEmbeddings (local sentence-transformers)
    "cohere"      → CohereEmbeddings (API-based)
    "google"      → GoogleGenerativeAIEmbeddings (API-based)
    "fake"        → DeterministicFakeEmbedding (offline, hash-seeded vectors)

Usage:
    from role_rag.indexing.embeddings import get_embedding_model
    from role_rag.config import EmbeddingConfig

    model = get_embedding_model(EmbeddingConfig())
"""

from typing import Optional

from langchain_core.embeddings import Embeddings

from role_rag.config import EmbeddingConfig


def get_embedding_model(config: EmbeddingConfig, dimension: Optional[int] = None) -> Embeddings:
    """
    Factory that returns a LangChain embedding model based on config.

    Args:
        config: EmbeddingConfig with provider, model_name, and optional model_kwargs.
        dimension: Index width. Used by providers whose output size is
            configurable (openai v3 models, fake); others ignore it and the
            index rejects a mismatching vector at write time.

    Returns:
        A LangChain Embeddings instance.

    Raises:
        ValueError: If the provider is not recognized.
        ImportError: If the required package for the provider is not installed.
    """
    provider = config.provider.lower()

    if provider == "openai":
        from langchain_openai import OpenAIEmbeddings

        kwargs = dict(config.model_kwargs)
        if dimension and config.model_name.startswith("text-embedding-3"):
            kwargs.setdefault("dimensions", dimension)

        return OpenAIEmbeddings(
            model=config.model_name,
            request_timeout=config.request_timeout,
            **kwargs,
        )

    elif provider == "huggingface":
        try:
            from langchain_huggingface import HuggingFaceEmbeddings
        except ImportError:
            raise ImportError(
                "HuggingFace embeddings require langchain-huggingface. "
                "Install with: pip install role-rag[huggingface]"
            )

        return HuggingFaceEmbeddings(
            model_name=config.model_name,
            model_kwargs=config.model_kwargs,
        )

    elif provider == "cohere":
        try:
            from langchain_cohere import CohereEmbeddings
        except ImportError:
            raise ImportError(
                "Cohere embeddings require langchain-cohere. "
                "Install with: pip install role-rag[cohere]"
            )

        return CohereEmbeddings(
            model=config.model_name,
            **config.model_kwargs,
        )

    elif provider == "google":
        try:
            from langchain_google_genai import GoogleGenerativeAIEmbeddings
        except ImportError:
            raise ImportError(
                "Google embeddings require langchain-google-genai. "
                "Install with: pip install role-rag[google]"
            )

        return GoogleGenerativeAIEmbeddings(
            model=config.model_name,
            **config.model_kwargs,
        )

    elif provider == "fake":
        from langchain_core.embeddings import DeterministicFakeEmbedding

        return DeterministicFakeEmbedding(size=dimension or config.model_kwargs.get("size", 768))

    else:
        raise ValueError(
            f"Unknown embedding provider: '{config.provider}'. "
            f"Supported: 'openai', 'huggingface', 'cohere', 'google', 'fake'. "
            f"For other providers, pass a LangChain Embeddings instance directly."
        )
