"""
Shared Pydantic schemas: paging envelope and enum projections.
"""

from pydantic import BaseModel
from typing import Generic, List, TypeVar

from groupread.models.groups import GroupStatus

T = TypeVar('T')


class Page(BaseModel, Generic[T]):
    """
    A bounded window of results plus the total number of matching rows.

    ``total_count`` ignores limit and offset, so it stays the same for every
    window taken over the same filters.
    """
    total_count: int
    items: List[T] = []


class StatusOption(BaseModel):
    """Enum projection of a status column as ``{id, code, value}``."""
    id: int
    code: str
    value: str

    @classmethod
    def from_status(cls, status_enum) -> 'StatusOption':
        """Build the projection for a raw ``status_enum``; unknown values map to invalid."""
        try:
            status = GroupStatus(status_enum)
        except (TypeError, ValueError):
            status = GroupStatus.INVALID
        return cls(id=status.value, code=status.code, value=status.label)
