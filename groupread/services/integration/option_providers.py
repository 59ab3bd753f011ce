"""
Read contracts for the dropdown option providers.

The group service only depends on these protocols. Default SQL-backed
implementations live in ``sql_option_providers``; any object with matching
methods can be wired in instead.
"""

from typing import List, Protocol

from groupread.schemas.options import (
    OfficeOption, StaffOption, ClientOption, CenterOption, CodeValueOption
)
from groupread.core.hierarchy import CallerContext


class OfficeOptionProvider(Protocol):
    def retrieve_all_offices_for_dropdown(self, caller: CallerContext) -> List[OfficeOption]:
        ...


class StaffOptionProvider(Protocol):
    def retrieve_all_staff_for_dropdown(self, office_id: int) -> List[StaffOption]:
        ...

    def retrieve_all_staff_in_office_and_its_parent_office_hierarchy(
        self, office_id: int, loan_officers_only: bool
    ) -> List[StaffOption]:
        ...


class ClientOptionProvider(Protocol):
    def retrieve_all_for_lookup_by_office_id(self, office_id: int) -> List[ClientOption]:
        ...


class CenterOptionProvider(Protocol):
    def retrieve_all_for_dropdown(self, office_id: int) -> List[CenterOption]:
        ...


class CodeValueProvider(Protocol):
    def retrieve_code_values_by_code(self, code_name: str) -> List[CodeValueOption]:
        ...
