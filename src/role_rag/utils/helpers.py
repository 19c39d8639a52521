"""
Shared utility functions.

Helpers used across role-rag — LLM factory, text cleaning.
"""

from langchain_core.language_models.chat_models import BaseChatModel

from role_rag.config import LLMConfig, LLMProvider


def get_llm(config: LLMConfig) -> BaseChatModel:
    """
    Factory that returns a LangChain chat model based on config.

    Lazy imports so you only need the package for the provider you
    actually use. Timeout and retry settings are passed to the client so
    a hung provider call fails instead of blocking a request forever.

    Args:
        config: LLMConfig with provider, model_name, temperature, max_tokens, timeouts.

    Returns:
        A LangChain BaseChatModel instance.
    """
    if config.provider == LLMProvider.OPENAI:
        from langchain_openai import ChatOpenAI

        return ChatOpenAI(
            model=config.model_name,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            timeout=config.request_timeout,
            max_retries=config.max_retries,
        )

    elif config.provider == LLMProvider.ANTHROPIC:
        from langchain_anthropic import ChatAnthropic

        return ChatAnthropic(
            model=config.model_name,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            timeout=config.request_timeout,
            max_retries=config.max_retries,
        )

    elif config.provider == LLMProvider.GOOGLE:
        try:
            from langchain_google_genai import ChatGoogleGenerativeAI
        except ImportError:
            raise ImportError(
                "Google models require langchain-google-genai. "
                "Install with: pip install role-rag[google]"
            )

        return ChatGoogleGenerativeAI(
            model=config.model_name,
            temperature=config.temperature,
            max_output_tokens=config.max_tokens,
            timeout=config.request_timeout,
            max_retries=config.max_retries,
        )

    else:
        raise ValueError(
            f"Unknown LLM provider: '{config.provider}'. "
            f"Supported: 'openai', 'anthropic', 'google'."
        )


def replace_t_with_space(documents: list) -> list:
    """
    Replace tab characters with spaces in document content.

    PDF-extracted text often has stray tabs between words.
    """
    for doc in documents:
        doc.page_content = doc.page_content.replace("\t", " ")
    return documents
