"""
Database models package.

This module imports all SQLAlchemy models to ensure they are
registered with the database metadata for table creation.
"""

# Import all models to register them with SQLAlchemy
from groupread.models.offices import Office, Staff
from groupread.models.groups import Group, Client, GroupLevel, GroupStatus, ClientStatus
from groupread.models.codes import Code, CodeValue

# Export all models for easy importing
__all__ = [
    # Organisation models
    "Office",
    "Staff",

    # Grouping models
    "Group",
    "Client",

    # Code models
    "Code",
    "CodeValue",

    # Enums
    "GroupLevel",
    "GroupStatus",
    "ClientStatus"
]
