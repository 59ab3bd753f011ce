"""
Template assembly for new groups.

Gathers every option list a "create group" form needs. The template always
describes a group that does not exist yet, so it never carries a current
center or staff selection.
"""

import logging
from typing import Optional

from groupread.core.hierarchy import CallerContext, default_office_id
from groupread.schemas.groups import GroupTemplate
from groupread.services.integration.option_providers import (
    OfficeOptionProvider,
    StaffOptionProvider,
    ClientOptionProvider,
    CenterOptionProvider,
    CodeValueProvider
)

logger = logging.getLogger(__name__)


class GroupTemplateAssembler:
    """Builds ``GroupTemplate`` values from the option providers."""

    def __init__(
        self,
        office_options: OfficeOptionProvider,
        staff_options: StaffOptionProvider,
        client_options: ClientOptionProvider,
        center_options: CenterOptionProvider,
        code_values: CodeValueProvider,
        role_code_name: str = "GROUPROLE",
    ):
        self.office_options = office_options
        self.staff_options = staff_options
        self.client_options = client_options
        self.center_options = center_options
        self.code_values = code_values
        self.role_code_name = role_code_name

    def assemble(
        self,
        caller: CallerContext,
        office_id: Optional[int] = None,
        is_center_group: bool = False,
        staff_in_selected_office_only: bool = False,
    ) -> GroupTemplate:
        """
        Assemble the template for a new group.

        Args:
            caller: Caller whose office is used when ``office_id`` is missing
            office_id: Office the group will belong to
            is_center_group: Whether the group will sit under a center
            staff_in_selected_office_only: Offer staff of the office only,
                instead of the office and all of its parent offices

        Returns:
            GroupTemplate with empty option lists collapsed to ``None``
        """
        office_id = default_office_id(office_id, caller)

        centers = None
        if is_center_group:
            centers = self.center_options.retrieve_all_for_dropdown(office_id)

        offices = self.office_options.retrieve_all_offices_for_dropdown(caller)

        if staff_in_selected_office_only:
            staff = self.staff_options.retrieve_all_staff_for_dropdown(office_id)
        else:
            staff = self.staff_options.retrieve_all_staff_in_office_and_its_parent_office_hierarchy(
                office_id, loan_officers_only=False
            )

        clients = self.client_options.retrieve_all_for_lookup_by_office_id(office_id)
        roles = self.code_values.retrieve_code_values_by_code(self.role_code_name)

        logger.debug(
            f"Template for office {office_id}: {len(staff or [])} staff, "
            f"{len(clients or [])} clients, {len(roles or [])} roles"
        )

        return GroupTemplate(
            office_id=office_id,
            center_id=None,
            center_name=None,
            staff_id=None,
            staff_name=None,
            center_options=centers,
            office_options=offices,
            staff_options=staff,
            client_options=clients,
            role_options=roles,
        )
