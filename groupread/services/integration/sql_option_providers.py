"""
SQL-backed option providers.

Default implementations of the provider contracts, reading straight from the
organisation tables. They return plain lists (possibly empty); deciding what
an empty list means is left to the caller.
"""

import logging
from typing import List

from sqlalchemy import literal
from sqlalchemy.orm import Session

from groupread.models import (
    Office, Staff, Client, Group, Code, CodeValue, GroupLevel, ClientStatus
)
from groupread.schemas.options import (
    OfficeOption, StaffOption, ClientOption, CenterOption, CodeValueOption
)
from groupread.services.base import BaseService, service_method
from groupread.core.hierarchy import LIKE_ESCAPE, CallerContext, hierarchy_search_pattern

logger = logging.getLogger(__name__)


class SqlOptionService(BaseService):
    """Base for providers reading from a SQLAlchemy session."""

    def __init__(self, db: Session, name: str = None):
        super().__init__(name)
        self.db = db
        self.initialize()


class SqlOfficeOptionService(SqlOptionService):
    """Offices visible to the caller, head office first."""

    def __init__(self, db: Session):
        super().__init__(db, "OfficeOptionService")

    @service_method
    def retrieve_all_offices_for_dropdown(self, caller: CallerContext) -> List[OfficeOption]:
        offices = (
            self.db.query(Office)
            .filter(Office.hierarchy.like(hierarchy_search_pattern(caller.office_hierarchy), escape=LIKE_ESCAPE))
            .order_by(Office.hierarchy)
            .all()
        )
        return [
            OfficeOption(id=office.id, name=office.name, name_decorated=decorate_office_name(office))
            for office in offices
        ]


class SqlStaffOptionService(SqlOptionService):
    """Active staff, either of one office or of an office and its ancestors."""

    def __init__(self, db: Session):
        super().__init__(db, "StaffOptionService")

    @service_method
    def retrieve_all_staff_for_dropdown(self, office_id: int) -> List[StaffOption]:
        staff = (
            self.db.query(Staff)
            .filter(Staff.office_id == office_id, Staff.is_active.is_(True))
            .order_by(Staff.display_name)
            .all()
        )
        return [StaffOption.model_validate(member) for member in staff]

    @service_method
    def retrieve_all_staff_in_office_and_its_parent_office_hierarchy(
        self, office_id: int, loan_officers_only: bool
    ) -> List[StaffOption]:
        hierarchy = self.db.query(Office.hierarchy).filter(Office.id == office_id).scalar()
        if hierarchy is None:
            self.logger.debug(f"Office {office_id} has no hierarchy; no staff options")
            return []

        # An ancestor's hierarchy is a prefix of the selected office's hierarchy
        query = (
            self.db.query(Staff)
            .join(Office, Office.id == Staff.office_id)
            .filter(literal(hierarchy).like(Office.hierarchy + "%"))
            .filter(Staff.is_active.is_(True))
        )
        if loan_officers_only:
            query = query.filter(Staff.is_loan_officer.is_(True))

        staff = query.order_by(Staff.display_name).all()
        return [StaffOption.model_validate(member) for member in staff]


class SqlClientOptionService(SqlOptionService):
    """Clients of an office that are not closed."""

    def __init__(self, db: Session):
        super().__init__(db, "ClientOptionService")

    @service_method
    def retrieve_all_for_lookup_by_office_id(self, office_id: int) -> List[ClientOption]:
        clients = (
            self.db.query(Client)
            .filter(Client.office_id == office_id)
            .filter(Client.status_enum != ClientStatus.CLOSED.value)
            .order_by(Client.display_name)
            .all()
        )
        return [ClientOption.model_validate(client) for client in clients]


class SqlCenterOptionService(SqlOptionService):
    """Centers of an office."""

    def __init__(self, db: Session):
        super().__init__(db, "CenterOptionService")

    @service_method
    def retrieve_all_for_dropdown(self, office_id: int) -> List[CenterOption]:
        centers = (
            self.db.query(Group)
            .filter(Group.office_id == office_id, Group.level_id == GroupLevel.CENTER.value)
            .order_by(Group.display_name)
            .all()
        )
        return [CenterOption(id=center.id, name=center.display_name, office_id=center.office_id) for center in centers]


class SqlCodeValueService(SqlOptionService):
    """Values of a named code, in their configured order."""

    def __init__(self, db: Session):
        super().__init__(db, "CodeValueService")

    @service_method
    def retrieve_code_values_by_code(self, code_name: str) -> List[CodeValueOption]:
        values = (
            self.db.query(CodeValue)
            .join(Code, Code.id == CodeValue.code_id)
            .filter(Code.code_name == code_name)
            .order_by(CodeValue.order_position, CodeValue.id)
            .all()
        )
        return [
            CodeValueOption(id=value.id, name=value.code_value, position=value.order_position)
            for value in values
        ]


def decorate_office_name(office: Office) -> str:
    """Prefix the office name with four dots per level below the head office."""
    return f"{'....' * office.depth}{office.name}"
