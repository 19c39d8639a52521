"""
Text generation and answer synthesis helpers.

LLMTextGenerator is the service's TextGenerator: one chat model, a
registry of named prompts, and a single complete(prompt_name, variables)
entry point. Everything the orchestrator needs around it (formatting
retrieved chunks as cited context, formatting rationale snippets, and
parsing the structured answer) lives here as plain functions.

Usage:
    from role_rag.generation.generate import LLMTextGenerator, combine_documents

    generator = LLMTextGenerator(LLMConfig())
    text = generator.complete("answer", {"context": combine_documents(docs), "question": q})
    parsed = parse_synthesized_answer(text)
"""

from typing import Any, Optional

from langchain_core.exceptions import OutputParserException
from langchain_core.output_parsers import PydanticOutputParser, StrOutputParser
from langchain_core.prompts import PromptTemplate

from role_rag.base.generator import BaseTextGenerator
from role_rag.config import LLMConfig
from role_rag.exceptions import UnknownPromptError
from role_rag.generation.prompts import PROMPTS
from role_rag.models.document import RetrievedDocument
from role_rag.models.result import SynthesizedAnswer
from role_rag.utils.helpers import get_llm


class LLMTextGenerator(BaseTextGenerator):
    """
    TextGenerator backed by a LangChain chat model.

    Each call builds prompt | llm | StrOutputParser and invokes it.
    The chat model is created once and shared by every prompt; it carries
    the configured timeout, so a slow provider raises instead of hanging.
    """

    def __init__(
        self,
        llm_config: Optional[LLMConfig] = None,
        prompts: Optional[dict[str, PromptTemplate]] = None,
    ):
        config = llm_config or LLMConfig()
        self._llm = get_llm(config)
        self._model_name = f"{config.provider.value}/{config.model_name}"
        self._prompts = dict(prompts or PROMPTS)

    @property
    def model_name(self) -> str:
        return self._model_name

    def complete(self, prompt_name: str, variables: dict[str, Any]) -> str:
        prompt = self._prompts.get(prompt_name)
        if prompt is None:
            raise UnknownPromptError(prompt_name)

        chain = prompt | self._llm | StrOutputParser()
        return chain.invoke(variables).strip()


# ---------------------------------------------------------------------------
# Context formatting
# ---------------------------------------------------------------------------

def combine_documents(documents: list[RetrievedDocument]) -> str:
    """
    Format retrieved chunks as one context block with inline citations.

    Each chunk is headed "[Source N: file p.page]" so the model can name
    which file and page a fact came from.
    """
    parts = []
    for i, doc in enumerate(documents, 1):
        source = doc.metadata.source or "Unknown"
        page = doc.metadata.page if doc.metadata.page is not None else "N/A"
        parts.append(f"[Source {i}: {source} p.{page}]\n{doc.content}")
    return "\n\n---\n\n".join(parts)


def format_snippets(documents: list[RetrievedDocument], max_chars: int = 300) -> str:
    """Format documents as short "(file p.page) :: text..." snippets for the why prompt."""
    snippets = []
    for doc in documents:
        source = doc.metadata.source or "unknown"
        page = doc.metadata.page if doc.metadata.page is not None else "N/A"
        snippets.append(f"({source} p.{page}) :: {doc.content[:max_chars]}...")
    return "\n---\n".join(snippets)


# ---------------------------------------------------------------------------
# Structured answer parsing
# ---------------------------------------------------------------------------

_answer_parser = PydanticOutputParser(pydantic_object=SynthesizedAnswer)


def parse_synthesized_answer(text: str) -> SynthesizedAnswer:
    """
    Parse the answer prompt's output into SynthesizedAnswer.

    The prompt asks for JSON {answer, sources}. Anything that does not
    parse into that shape becomes the plain-text fallback: the whole
    output is the answer and sources is None. The mapping is the same
    every time for the same text.
    """
    try:
        parsed = _answer_parser.parse(text)
    except OutputParserException:
        return SynthesizedAnswer(answer=text.strip(), sources=None)

    if not parsed.answer.strip():
        return SynthesizedAnswer(answer=text.strip(), sources=None)
    return parsed
