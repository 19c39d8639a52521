"""
Abstract base class for text generators.

Every LLM call in role-rag goes through one method: complete(prompt_name,
variables). Each call site owns a named prompt with fixed inputs and a
fixed output format, so a generator can be swapped for a test double
that just records which prompts were asked for.
"""

from abc import ABC, abstractmethod
from typing import Any


class BaseTextGenerator(ABC):
    """Contract for text generators."""

    @abstractmethod
    def complete(self, prompt_name: str, variables: dict[str, Any]) -> str:
        """
        Render a named prompt with variables and return the model's text.

        Args:
            prompt_name: Key of a registered prompt ("standalone_question", "answer", ...).
            variables: Values for the prompt's input variables.

        Returns:
            The raw completion text.

        Raises:
            UnknownPromptError: prompt_name is not registered.
        """
        ...
