"""
Role and department labels.

The known labels are closed enums so the rest of the code can refer to
them by name, but storage and requests carry plain strings: a role that
is added by configuration later keeps working, it just isn't listed here.

Roles are flat. A chunk lists every role allowed to read it; nothing is
inherited from a role hierarchy.
"""

import logging
import re
from enum import Enum
from typing import Iterable

from role_rag.exceptions import EmptyRolesError, ValidationError

logger = logging.getLogger(__name__)

_LABEL_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_-]{0,63}$")


class Role(str, Enum):
    """Roles the service ships question lists for."""

    DIRECTOR = "Director"
    HR = "HR"
    ENGINEER = "Engineer"
    PROCUREMENT = "Procurement"
    STATION_CONTROLLER = "StationController"


class Department(str, Enum):
    """Descriptive classification of a document. Not an access gate."""

    DIRECTOR = "Director"
    HR = "HR"
    PROCUREMENT = "Procurement"
    ENGINEERING = "Engineering"
    OPERATIONS = "Operations"


KNOWN_ROLES = frozenset(r.value for r in Role)
KNOWN_DEPARTMENTS = frozenset(d.value for d in Department)


def normalize_role(value: str) -> str:
    """
    Validate a role label at the system boundary.

    Well-formed but unknown roles pass through unchanged; they simply
    have no documents. Malformed values (blank, punctuation, too long)
    raise ValidationError.
    """
    if not isinstance(value, str):
        raise ValidationError("role must be a string", field="role")

    role = value.strip()
    if not _LABEL_PATTERN.match(role):
        raise ValidationError(f"Malformed role: '{value}'", field="role")
    return role


def normalize_roles(values: Iterable[str], source: str = "") -> list[str]:
    """
    Validate and de-duplicate an allowed-roles list, keeping first-seen order.

    Raises EmptyRolesError when nothing is left, since a chunk no role
    can read is dead data.
    """
    roles: list[str] = []
    for value in values or []:
        role = normalize_role(value)
        if role not in roles:
            roles.append(role)

    if not roles:
        raise EmptyRolesError(source)

    unknown = [r for r in roles if r not in KNOWN_ROLES]
    if unknown:
        logger.warning("Unknown roles passed through for %s: %s", source or "input", unknown)
    return roles


def normalize_department(value: str) -> str:
    """Strip a department label; unknown labels are logged, never rejected."""
    department = (value or "").strip()
    if not department:
        raise ValidationError("department must not be blank", field="department")
    if department not in KNOWN_DEPARTMENTS:
        logger.info("Unknown department label passed through: %s", department)
    return department
