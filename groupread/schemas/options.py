"""
Pydantic schemas for dropdown options.

These are the shapes returned by the option providers and embedded in a
group template.
"""

from pydantic import BaseModel
from typing import Optional


class OfficeOption(BaseModel):
    """Office entry; ``name_decorated`` is indented by hierarchy depth."""
    id: int
    name: str
    name_decorated: Optional[str] = None

    class Config:
        from_attributes = True


class StaffOption(BaseModel):
    id: int
    display_name: str
    office_id: Optional[int] = None
    is_loan_officer: bool = False

    class Config:
        from_attributes = True


class ClientOption(BaseModel):
    id: int
    display_name: str
    office_id: Optional[int] = None

    class Config:
        from_attributes = True


class CenterOption(BaseModel):
    id: int
    name: str
    office_id: Optional[int] = None

    class Config:
        from_attributes = True


class CodeValueOption(BaseModel):
    id: int
    name: str
    position: int = 0

    class Config:
        from_attributes = True
