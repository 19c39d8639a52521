"""
Generation components: prompts, the text generator, synthesis parsing.

Usage:
    from role_rag.generation import LLMTextGenerator, PROMPTS
"""

from .generate import (
    LLMTextGenerator,
    combine_documents,
    format_snippets,
    parse_synthesized_answer,
)
from .prompts import PROMPTS, STRUCTURED_PROMPTS

__all__ = [
    "LLMTextGenerator",
    "combine_documents",
    "format_snippets",
    "parse_synthesized_answer",
    "PROMPTS",
    "STRUCTURED_PROMPTS",
]
