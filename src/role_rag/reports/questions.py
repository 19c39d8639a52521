"""
Static question lists replayed by the report generators.

ROLE_QUESTIONS drives the daily briefing: each role gets its own ordered
topics, and the briefing items come back in this order. RISK_QUERIES
drives the alert scan and is the same for every role.
"""

from role_rag.roles import Role

ROLE_QUESTIONS: dict[str, tuple[str, ...]] = {
    Role.STATION_CONTROLLER.value: (
        "List incidents, maintenance blocks, or speed restrictions in last 24h",
        "Any staffing or roster changes affecting today?",
        "Current operational status and alerts",
    ),
    Role.ENGINEER.value: (
        "Open issues affecting rolling stock availability",
        "Vendor bulletins or technical circulars added in last 7 days",
        "Maintenance schedules and equipment status",
    ),
    Role.PROCUREMENT.value: (
        "Contracts expiring in 60 days; pending POs; compliance notes",
        "Vendor performance issues or updates",
        "Budget allocations and expenditure tracking",
    ),
    Role.HR.value: (
        "New policies, training schedules, or safety circulars in last 7 days",
        "Staff attendance and leave management updates",
        "Recruitment and onboarding activities",
    ),
    Role.DIRECTOR.value: (
        "High-level KPIs & risks this week across departments",
        "Strategic initiatives and project updates",
        "Compliance and regulatory updates",
    ),
}

RISK_QUERIES: tuple[str, ...] = (
    "Find any regulatory circulars or directives mentioning deadlines, penalties, "
    "or compliance requirements",
    "Flag incidents mentioning 'safety', 'near-miss', 'fire', 'derail', 'overspeed', "
    "'intrusion'",
    "Identify contracts or agreements with upcoming renewal dates or penalty clauses",
    "Locate maintenance schedules showing overdue or critical items",
)


def questions_for(role: str) -> tuple[str, ...]:
    """Briefing topics for a role; unknown roles have none."""
    return ROLE_QUESTIONS.get(role, ())
