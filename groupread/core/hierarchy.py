"""
Hierarchy scoping helpers.

A caller may see their own office and every office below it. Offices carry a
materialized path (``.1.2.``), so "this office or any descendant" is a prefix
match on that path.
"""

from dataclasses import dataclass
from typing import Optional

# Escape character passed as ``escape=`` alongside every pattern built here
LIKE_ESCAPE = "\\"


@dataclass(frozen=True)
class CallerContext:
    """The authenticated caller as seen by the read services."""
    office_id: int
    office_hierarchy: str
    user_id: Optional[int] = None


def escape_like(value: str) -> str:
    """Make ``%`` and ``_`` in ``value`` match literally in a LIKE pattern."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def contains_pattern(value: str) -> str:
    """LIKE pattern matching any text that contains ``value``."""
    return f"%{escape_like(value)}%"


def hierarchy_search_pattern(hierarchy: str) -> str:
    """Return the LIKE pattern matching ``hierarchy`` and everything beneath it."""
    return f"{escape_like(hierarchy)}%"


def default_office_id(office_id: Optional[int], caller: CallerContext) -> int:
    """Fall back to the caller's own office when no office was supplied."""
    if office_id is None:
        return caller.office_id
    return office_id
