"""
Query construction for the group read paths.

All group queries join the same aliased tables:

    g   m_group   the group itself
    o   m_office  the group's office (authorisation is checked on o.hierarchy)
    s   m_staff   the assigned staff member, if any
    pg  m_group   the parent center, if any

Columns are always taken from these aliases, so a column name shared by two
tables (``external_id``, ``hierarchy``...) can never be ambiguous.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from sqlalchemy import and_
from sqlalchemy.dialects import sqlite
from sqlalchemy.orm import Query, Session, aliased
from sqlalchemy.sql.elements import ColumnElement

from groupread.models import Group, GroupLevel, Office, Staff
from groupread.schemas.groups import SearchParameters
from groupread.services.base import ValidationError
from groupread.core.hierarchy import LIKE_ESCAPE, contains_pattern, hierarchy_search_pattern
from groupread.services.domain.search_parser import SQL_INTEGER_RANGE, SearchExpressionParser

logger = logging.getLogger(__name__)

g = aliased(Group, name="g")
o = aliased(Office, name="o")
s = aliased(Staff, name="s")
pg = aliased(Group, name="pg")

# Columns usable inside a free-text search; always resolved on the group alias
SEARCH_COLUMNS: Dict[str, ColumnElement] = {
    "id": g.id,
    "display_name": g.display_name,
    "external_id": g.external_id,
    "office_id": g.office_id,
    "staff_id": g.staff_id,
    "status_enum": g.status_enum,
    "activation_date": g.activation_date,
    "hierarchy": g.hierarchy,
}

# Public sort keys; these names are part of the reporting surface
ORDER_BY_COLUMNS: Dict[str, ColumnElement] = {
    "id": g.id,
    "name": g.display_name,
    "display_name": g.display_name,
    "external_id": g.external_id,
    "office_id": g.office_id,
    "office_name": o.name,
    "center_name": pg.display_name,
    "staff_name": s.display_name,
    "status_enum": g.status_enum,
    "activation_date": g.activation_date,
    "hierarchy": g.hierarchy,
}

SORT_ORDERS = ("ASC", "DESC")


def all_group_types_query(db: Session) -> Query:
    """Base query for full group records, without any filtering."""
    return (
        db.query(
            g.id.label("id"),
            g.external_id.label("external_id"),
            g.display_name.label("name"),
            g.office_id.label("office_id"),
            o.name.label("office_name"),
            o.hierarchy.label("office_hierarchy"),
            g.parent_id.label("center_id"),
            pg.display_name.label("center_name"),
            g.staff_id.label("staff_id"),
            s.display_name.label("staff_name"),
            g.hierarchy.label("hierarchy"),
            g.status_enum.label("status_enum"),
            g.activation_date.label("activation_date"),
            g.level_id.label("group_level"),
        )
        .select_from(g)
        .join(o, o.id == g.office_id)
        .outerjoin(s, s.id == g.staff_id)
        .outerjoin(pg, pg.id == g.parent_id)
    )


def group_lookup_query(db: Session) -> Query:
    """Base query for the (id, name) lookup projection of group-level rows."""
    return (
        db.query(g.id.label("id"), g.display_name.label("name"))
        .select_from(g)
        .filter(g.level_id == GroupLevel.GROUP.value)
    )


def hierarchy_scope_predicate(hierarchy: str) -> ColumnElement:
    """Restrict to groups whose office is ``hierarchy`` or below it."""
    return o.hierarchy.like(hierarchy_search_pattern(hierarchy), escape=LIKE_ESCAPE)


def require_sql_integer(value: int, field: str) -> int:
    """Reject integers the database cannot bind; ``None`` passes through."""
    low, high = SQL_INTEGER_RANGE
    if value is not None and not low <= value <= high:
        raise ValidationError(f"{field} is out of range", field=field, value=value)
    return value


def _compile(clause: ColumnElement):
    return clause.compile(dialect=sqlite.dialect())


def _positional_params(compiled) -> List[Any]:
    return [compiled.params[name] for name in compiled.positiontup]


def _fingerprint(predicate: ColumnElement):
    """SQL text with placeholders plus bound values; equal for identical filters."""
    compiled = _compile(predicate)
    return str(compiled), tuple(repr(value) for value in _positional_params(compiled))


@dataclass
class GroupPredicates:
    """Filters, ordering and window derived from one set of search parameters."""
    criteria: List[ColumnElement] = field(default_factory=list)
    order_by: List[ColumnElement] = field(default_factory=list)
    limit: Optional[int] = None
    offset: Optional[int] = None

    def add(self, predicate: ColumnElement) -> None:
        """Append ``predicate`` unless an identical one is already present."""
        fingerprint = _fingerprint(predicate)
        if all(_fingerprint(existing) != fingerprint for existing in self.criteria):
            self.criteria.append(predicate)

    def compiled(self):
        """Compile the conjunction with a positional dialect."""
        return _compile(and_(*self.criteria))

    def bound_parameters(self) -> List[Any]:
        """Bound values in the order they appear in the SQL text."""
        return _positional_params(self.compiled())

    def sql(self) -> str:
        return str(self.compiled())


class GroupPredicateBuilder:
    """
    Turns ``SearchParameters`` into group query predicates.

    The level filter is always first. The remaining filters follow in a fixed
    order, each only when its parameter is given: free-text search, office,
    external id, name contains, hierarchy override. Every value is bound as a
    parameter.
    """

    def __init__(self, search_parser: SearchExpressionParser = None):
        self.search_parser = search_parser or SearchExpressionParser(SEARCH_COLUMNS, qualifier="g")

    def build(self, params: SearchParameters) -> GroupPredicates:
        predicates = GroupPredicates()
        for predicate in self.criteria(params):
            predicates.add(predicate)
        predicates.order_by = self.ordering(params)
        predicates.limit, predicates.offset = self.window(params)
        return predicates

    def criteria(self, params: SearchParameters) -> List[ColumnElement]:
        criteria = [g.level_id == GroupLevel.GROUP.value]

        search = self.search_parser.parse(params.sql_search)
        if search is not None:
            criteria.append(search)

        if require_sql_integer(params.office_id, "office_id") is not None:
            criteria.append(g.office_id == params.office_id)

        if params.external_id is not None:
            criteria.append(g.external_id == params.external_id)

        if params.name is not None:
            criteria.append(g.display_name.like(contains_pattern(params.name), escape=LIKE_ESCAPE))

        if params.hierarchy is not None:
            criteria.append(hierarchy_scope_predicate(params.hierarchy))

        return criteria

    def ordering(self, params: SearchParameters) -> List[ColumnElement]:
        """Requested ordering plus ``g.id`` so paged windows are stable."""
        order_by = []
        if params.is_order_by_requested():
            key = params.order_by.strip()
            column = ORDER_BY_COLUMNS.get(key)
            if column is None:
                raise ValidationError(
                    f"Unsupported order by column: {params.order_by}",
                    field="order_by", value=params.order_by
                )
            direction = (params.sort_order or "ASC").strip().upper()
            if direction not in SORT_ORDERS:
                raise ValidationError(
                    f"Sort order must be one of {', '.join(SORT_ORDERS)}",
                    field="sort_order", value=params.sort_order
                )
            order_by.append(column.desc() if direction == "DESC" else column.asc())
            if key == "id":
                return order_by

        order_by.append(g.id.asc())
        return order_by

    def window(self, params: SearchParameters):
        """Validated ``(limit, offset)``; an offset without a limit is dropped."""
        if params.limit is not None and params.limit < 0:
            raise ValidationError("Limit must not be negative", field="limit", value=params.limit)
        if params.offset is not None and params.offset < 0:
            raise ValidationError("Offset must not be negative", field="offset", value=params.offset)

        require_sql_integer(params.limit, "limit")
        require_sql_integer(params.offset, "offset")

        if not params.is_limited():
            if params.offset is not None:
                logger.debug(f"Ignoring offset {params.offset} supplied without a limit")
            return None, None
        return params.limit, params.offset if params.is_offset() else None
