"""
Batch reports built by replaying fixed questions.

Usage:
    from role_rag.reports import BriefingGenerator, AlertScanner
"""

from .alerts import AlertScanner
from .briefing import BriefingGenerator
from .questions import RISK_QUERIES, ROLE_QUESTIONS, questions_for

__all__ = [
    "BriefingGenerator",
    "AlertScanner",
    "ROLE_QUESTIONS",
    "RISK_QUERIES",
    "questions_for",
]
