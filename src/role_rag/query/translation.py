"""
Question normalisation.

Rewrites the user's raw question into a standalone question before it is
embedded. Follow-up phrasing ("and what about last week?") retrieves
poorly; a self-contained question in the user's own language retrieves
the same documents a fresh question would.

    rewriter = StandaloneQuestionRewriter(generator)
    rewriter.translate("and the doors?")
    # → "How do the platform doors work?"

Failure is never fatal: if the generator raises or returns nothing,
the raw question is used as-is.
"""

import logging

from role_rag.base.generator import BaseTextGenerator

logger = logging.getLogger(__name__)


class StandaloneQuestionRewriter:
    """Rewrites a question to be context-independent, keeping its language."""

    prompt_name = "standalone_question"

    def __init__(self, generator: BaseTextGenerator):
        self._generator = generator

    def translate(self, question: str) -> str:
        try:
            rewritten = self._generator.complete(self.prompt_name, {"question": question})
        except Exception:
            logger.warning("Standalone question rewrite failed; using raw question", exc_info=True)
            return question

        rewritten = (rewritten or "").strip()
        return rewritten or question
