"""
Pydantic schemas package.

This module imports all Pydantic schemas used by the read service
and provides a centralized place to access all schema definitions.
"""

# Shared schemas
from groupread.schemas.common import Page, StatusOption

# Option schemas
from groupread.schemas.options import (
    OfficeOption, StaffOption, ClientOption, CenterOption, CodeValueOption
)

# Group schemas
from groupread.schemas.groups import (
    SearchParameters, GroupRecord, GroupLookup, GroupTemplate
)

# Export all schemas
__all__ = [
    # Shared schemas
    "Page", "StatusOption",

    # Option schemas
    "OfficeOption", "StaffOption", "ClientOption", "CenterOption", "CodeValueOption",

    # Group schemas
    "SearchParameters", "GroupRecord", "GroupLookup", "GroupTemplate"
]
