"""
FastAPI dependencies.

The service container lives on app.state and is handed to routes via
Depends, so tests can install their own container.
"""

from fastapi import Request

from role_rag.orchestrator import AnswerOrchestrator
from role_rag.reports.alerts import AlertScanner
from role_rag.reports.briefing import BriefingGenerator
from role_rag.services import ServiceContainer


def get_services(request: Request) -> ServiceContainer:
    return request.app.state.services


def get_orchestrator(request: Request) -> AnswerOrchestrator:
    return get_services(request).orchestrator


def get_briefings(request: Request) -> BriefingGenerator:
    return get_services(request).briefings


def get_alerts(request: Request) -> AlertScanner:
    return get_services(request).alerts
