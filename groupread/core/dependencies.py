"""
Dependency wiring helpers.

This module provides the functions that assemble services around a database
session and resolve the caller context for them.
"""

from typing import Optional
from sqlalchemy.orm import Session

from groupread.config.settings import settings
from groupread.core.hierarchy import CallerContext
from groupread.models import Office
from groupread.services.base import NotFoundError
from groupread.services.domain.group_service import GroupReadService
from groupread.services.domain.template_assembler import GroupTemplateAssembler
from groupread.services.integration import (
    SqlOfficeOptionService,
    SqlStaffOptionService,
    SqlClientOptionService,
    SqlCenterOptionService,
    SqlCodeValueService
)


def resolve_caller_context(db: Session, office_id: int, user_id: Optional[int] = None) -> CallerContext:
    """
    Build the caller context for a user working out of ``office_id``.

    Raises:
        NotFoundError: if the office does not exist
    """
    office = db.query(Office).filter(Office.id == office_id).one_or_none()
    if office is None:
        raise NotFoundError("Office", office_id)
    return CallerContext(office_id=office.id, office_hierarchy=office.hierarchy, user_id=user_id)


def build_group_read_service(db: Session) -> GroupReadService:
    """
    Wire a GroupReadService with the SQL-backed option providers.

    Returns:
        GroupReadService: service bound to ``db``
    """
    assembler = GroupTemplateAssembler(
        office_options=SqlOfficeOptionService(db),
        staff_options=SqlStaffOptionService(db),
        client_options=SqlClientOptionService(db),
        center_options=SqlCenterOptionService(db),
        code_values=SqlCodeValueService(db),
        role_code_name=settings.group_role_code_name,
    )
    return GroupReadService(db, assembler)
