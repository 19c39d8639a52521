"""
Predictive risk alerts: replay the fixed risk queries for one role.

A query becomes an alert only when its answer cites at least one source.
No evidence means no alert; a failed query is logged and skipped.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from langchain_core.runnables import RunnableLambda

from role_rag.config import ReportConfig
from role_rag.models.result import AlertItem, AlertResult, AnswerResult
from role_rag.orchestrator import AnswerOrchestrator
from role_rag.reports.questions import RISK_QUERIES

logger = logging.getLogger(__name__)


class AlertScanner:
    def __init__(self, orchestrator: AnswerOrchestrator, config: Optional[ReportConfig] = None):
        self._orchestrator = orchestrator
        self._config = config or ReportConfig()

    def scan(self, role: Optional[str] = None) -> AlertResult:
        """Run every risk query as `role` (default ReportConfig.default_alert_role)."""
        role = role or self._config.default_alert_role
        queries = list(RISK_QUERIES)

        def answer(query: str) -> AnswerResult:
            return self._orchestrator.run(query, role, k=self._config.alert_k)

        outcomes = RunnableLambda(answer).batch(
            queries,
            config={"max_concurrency": self._config.max_concurrency},
            return_exceptions=True,
        )

        alerts = []
        for query, outcome in zip(queries, outcomes):
            if isinstance(outcome, Exception):
                logger.error("Risk query failed for %s: %r", role, query, exc_info=outcome)
                continue
            if not outcome.sources:
                continue
            alerts.append(AlertItem(query=query, answer=outcome.answer, sources=outcome.sources))

        logger.info("Risk scan for %s: %d/%d queries raised alerts", role, len(alerts), len(queries))
        return AlertResult(role=role, alerts=alerts, timestamp=datetime.now(timezone.utc))
