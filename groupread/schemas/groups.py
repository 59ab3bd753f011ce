"""
Pydantic schemas for group read operations.

This module defines the search criteria accepted by the group listing and
the shapes returned by the group read service.
"""

from pydantic import BaseModel, validator
from typing import Optional, List
from datetime import date

from groupread.schemas.common import StatusOption
from groupread.schemas.options import (
    OfficeOption, StaffOption, ClientOption, CenterOption, CodeValueOption
)


class SearchParameters(BaseModel):
    """
    Search, sort and paging criteria for listing groups.

    Every field is optional and ``None`` means "do not filter on this".
    ``offset`` only takes effect together with ``limit``.
    """
    office_id: Optional[int] = None
    external_id: Optional[str] = None
    name: Optional[str] = None
    hierarchy: Optional[str] = None
    sql_search: Optional[str] = None
    order_by: Optional[str] = None
    sort_order: Optional[str] = None
    limit: Optional[int] = None
    offset: Optional[int] = None

    @validator('order_by', 'sort_order')
    def blank_to_none(cls, v):
        """Treat blank sort fields as not supplied."""
        if v is not None and not v.strip():
            return None
        return v

    def is_order_by_requested(self) -> bool:
        return self.order_by is not None

    def is_limited(self) -> bool:
        return self.limit is not None

    def is_offset(self) -> bool:
        return self.is_limited() and self.offset is not None


class GroupRecord(BaseModel):
    """Group as returned by listing and single-record retrieval."""
    id: int
    name: str
    external_id: Optional[str] = None
    office_id: int
    office_name: str
    office_hierarchy: str
    center_id: Optional[int] = None
    center_name: Optional[str] = None
    staff_id: Optional[int] = None
    staff_name: Optional[str] = None
    hierarchy: Optional[str] = None
    status: StatusOption
    activation_date: Optional[date] = None
    group_level: int


class GroupLookup(BaseModel):
    """Minimal projection used by other subsystems for reference selection."""
    id: int
    name: str


class GroupTemplate(BaseModel):
    """
    Defaults and option lists for creating a new group.

    Option collections are ``None`` when nothing was found, never an empty
    list. The selection fields are always ``None`` for a new group.
    """
    office_id: int
    center_id: Optional[int] = None
    center_name: Optional[str] = None
    staff_id: Optional[int] = None
    staff_name: Optional[str] = None

    center_options: Optional[List[CenterOption]] = None
    office_options: Optional[List[OfficeOption]] = None
    staff_options: Optional[List[StaffOption]] = None
    client_options: Optional[List[ClientOption]] = None
    role_options: Optional[List[CodeValueOption]] = None

    @validator(
        'center_options', 'office_options', 'staff_options', 'client_options', 'role_options',
        pre=True
    )
    def empty_to_none(cls, v):
        """Collapse empty collections so consumers only ever check for ``None``."""
        if v is not None and len(v) == 0:
            return None
        return v
