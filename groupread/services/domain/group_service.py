"""
Group Domain Service

This service answers read queries about groups: the template for a new
group, hierarchy-scoped listing and retrieval, and the lookup list used by
other subsystems.

Authorisation is part of every query: a caller only ever sees groups whose
office is the caller's own office or one of its descendants. Groups outside
that scope are indistinguishable from groups that do not exist.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from groupread.config.settings import settings
from groupread.core.hierarchy import CallerContext
from groupread.core.pagination import PaginationHelper
from groupread.schemas.common import Page
from groupread.schemas.groups import GroupLookup, GroupRecord, GroupTemplate, SearchParameters
from groupread.services.base import BaseService, NotFoundError, service_method
from groupread.services.domain.group_queries import (
    GroupPredicateBuilder,
    all_group_types_query,
    group_lookup_query,
    hierarchy_scope_predicate,
    require_sql_integer,
    g,
    o,
)
from groupread.services.domain.row_mappers import map_group_row, map_lookup_row
from groupread.services.domain.template_assembler import GroupTemplateAssembler

logger = logging.getLogger(__name__)


class GroupNotFoundError(NotFoundError):
    """No group with this id is visible to the caller."""

    def __init__(self, group_id):
        super().__init__("Group", group_id)
        self.group_id = group_id


class GroupReadService(BaseService):
    """Service for hierarchy-scoped group reads."""

    def __init__(
        self,
        db: Session,
        template_assembler: GroupTemplateAssembler,
        predicate_builder: GroupPredicateBuilder = None,
        config: dict = None,
    ):
        super().__init__("GroupReadService")
        self.db = db
        self.predicate_builder = predicate_builder or GroupPredicateBuilder()
        self.pagination_helper = PaginationHelper[GroupRecord]()
        self.add_dependency("template_assembler", template_assembler)
        self.initialize(config if config is not None else {
            "max_page_limit": settings.max_page_limit,
            "scope_lookup_to_hierarchy": settings.scope_lookup_to_hierarchy,
        })

    @service_method
    def retrieve_template(
        self,
        caller: CallerContext,
        office_id: Optional[int] = None,
        is_center_group: bool = False,
        staff_in_selected_office_only: bool = False,
    ) -> GroupTemplate:
        """Option lists and defaults for creating a group in ``office_id``."""
        assembler: GroupTemplateAssembler = self.get_dependency("template_assembler")
        return assembler.assemble(
            caller,
            office_id=office_id,
            is_center_group=is_center_group,
            staff_in_selected_office_only=staff_in_selected_office_only,
        )

    @service_method
    def retrieve_all(self, caller: CallerContext, params: SearchParameters) -> Page[GroupRecord]:
        """
        List groups visible to the caller that match ``params``.

        Raises:
            ValidationError: if the sort, window or search criteria are invalid
        """
        params = self._enforce_max_limit(params)
        predicates = self.predicate_builder.build(params)

        query = (
            all_group_types_query(self.db)
            .filter(hierarchy_scope_predicate(caller.office_hierarchy))
            .filter(*predicates.criteria)
            .order_by(*predicates.order_by)
        )

        self.logger.debug(f"Listing groups for hierarchy {caller.office_hierarchy}: {predicates.sql()}")
        return self.pagination_helper.fetch_page(
            query, map_group_row, limit=predicates.limit, offset=predicates.offset
        )

    @service_method
    def retrieve_one(self, caller: CallerContext, group_id: int) -> GroupRecord:
        """
        Fetch one group within the caller's hierarchy.

        Raises:
            GroupNotFoundError: if the group does not exist or is out of scope
            ValidationError: if ``group_id`` cannot be a stored id
        """
        require_sql_integer(group_id, "group_id")
        row = (
            all_group_types_query(self.db)
            .filter(g.id == group_id)
            .filter(hierarchy_scope_predicate(caller.office_hierarchy))
            .one_or_none()
        )
        if row is None:
            raise GroupNotFoundError(group_id)
        return map_group_row(row)

    @service_method
    def retrieve_groups_for_lookup(self, caller: CallerContext, office_id: int) -> List[GroupLookup]:
        """Group-level (id, name) pairs of one office, for reference lookups."""
        require_sql_integer(office_id, "office_id")
        query = group_lookup_query(self.db).filter(g.office_id == office_id)

        # Lookups have historically been unscoped; scoping is opt-in
        if self.get_config("scope_lookup_to_hierarchy", False):
            query = query.join(o, o.id == g.office_id).filter(hierarchy_scope_predicate(caller.office_hierarchy))
        return [map_lookup_row(row) for row in query.order_by(g.display_name, g.id).all()]

    def _enforce_max_limit(self, params: SearchParameters) -> SearchParameters:
        max_limit = self.get_config("max_page_limit")
        if max_limit and params.limit is not None and params.limit > max_limit:
            self.logger.debug(f"Clamping limit {params.limit} to {max_limit}")
            return params.model_copy(update={"limit": max_limit})
        return params
