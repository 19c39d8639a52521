"""
Daily briefing: replay a role's fixed topics through the orchestrator.

Questions run concurrently (RunnableLambda.batch, bounded by
ReportConfig.max_concurrency) and come back in list order. A question
that fails turns into a placeholder item; it never sinks the briefing.

Usage:
    briefings = BriefingGenerator(orchestrator, ReportConfig())
    result = briefings.make_briefing("HR")
    for item in result.items:
        print(item.question, item.answer)
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from langchain_core.runnables import RunnableLambda

from role_rag.config import ReportConfig
from role_rag.messages import BRIEFING_ITEM_ERROR
from role_rag.models.result import AnswerResult, BriefingItem, BriefingResult
from role_rag.orchestrator import AnswerOrchestrator
from role_rag.reports.questions import questions_for

logger = logging.getLogger(__name__)


class BriefingGenerator:
    """Builds BriefingResults from the static per-role topic lists."""

    prompt_name = "briefing"

    def __init__(self, orchestrator: AnswerOrchestrator, config: Optional[ReportConfig] = None):
        self._orchestrator = orchestrator
        self._config = config or ReportConfig()

    def make_briefing(self, role: str) -> BriefingResult:
        questions = list(questions_for(role))
        if not questions:
            logger.info("No briefing topics for role %s", role)
            return BriefingResult(role=role, items=[], generated_at=_now())

        def answer(question: str) -> AnswerResult:
            return self._orchestrator.run(
                question,
                role,
                k=self._config.briefing_k,
                answer_prompt=self.prompt_name,
            )

        outcomes = RunnableLambda(answer).batch(
            questions,
            config={"max_concurrency": self._config.max_concurrency},
            return_exceptions=True,
        )

        items = []
        for question, outcome in zip(questions, outcomes):
            if isinstance(outcome, Exception):
                logger.error(
                    "Briefing question failed for %s: %r", role, question,
                    exc_info=outcome,
                )
                items.append(BriefingItem(question=question, answer=BRIEFING_ITEM_ERROR, sources=[]))
                continue
            items.append(BriefingItem(
                question=question,
                answer=outcome.answer,
                sources=outcome.sources,
            ))

        logger.info("Briefing for %s: %d items", role, len(items))
        return BriefingResult(role=role, items=items, generated_at=_now())


def _now() -> datetime:
    return datetime.now(timezone.utc)
