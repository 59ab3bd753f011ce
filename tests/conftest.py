"""Pytest configuration and fixtures."""

import os

# Point the module-level engine at a throwaway database before anything imports it
os.environ.setdefault("GROUPREAD_DATABASE_URL", "sqlite:///:memory:")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from groupread.core.database import create_tables
from groupread.core.hierarchy import CallerContext
from groupread.models import (
    Office, Staff, Client, Group, Code, CodeValue, GroupLevel, GroupStatus, ClientStatus
)


@pytest.fixture
def session():
    """Create a temporary in-memory database session for testing."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    create_tables(engine)

    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()
        engine.dispose()


class OrgBuilder:
    """Adds organisation rows with explicit ids so tests can refer to them."""

    def __init__(self, session):
        self.session = session

    def _add(self, row):
        self.session.add(row)
        self.session.flush()
        return row

    def office(self, id, hierarchy, name=None, parent_id=None):
        return self._add(Office(id=id, hierarchy=hierarchy, name=name or f"Office {id}", parent_id=parent_id))

    def staff(self, id, office_id, display_name, is_loan_officer=False, is_active=True):
        return self._add(Staff(
            id=id, office_id=office_id, display_name=display_name,
            is_loan_officer=is_loan_officer, is_active=is_active,
        ))

    def client(self, id, office_id, display_name, status=ClientStatus.ACTIVE):
        return self._add(Client(id=id, office_id=office_id, display_name=display_name, status_enum=status.value))

    def center(self, id, office_id, name, staff_id=None):
        return self._add(Group(
            id=id, office_id=office_id, display_name=name, staff_id=staff_id,
            level_id=GroupLevel.CENTER.value, hierarchy=f".{id}.",
        ))

    def group(self, id, office_id, name, staff_id=None, center_id=None, external_id=None,
              status=GroupStatus.ACTIVE, activation_date=None):
        hierarchy = f".{center_id}.{id}." if center_id else f".{id}."
        return self._add(Group(
            id=id, office_id=office_id, display_name=name, staff_id=staff_id, parent_id=center_id,
            external_id=external_id, level_id=GroupLevel.GROUP.value, hierarchy=hierarchy,
            status_enum=status.value, activation_date=activation_date,
        ))

    def code(self, code_name, values):
        code = self._add(Code(code_name=code_name))
        for position, value in enumerate(values):
            self._add(CodeValue(code_id=code.id, code_value=value, order_position=position))
        return code


@pytest.fixture
def org(session):
    return OrgBuilder(session)


@pytest.fixture
def standard_org(session, org):
    """
    A small office tree with staff, clients, a center and groups.

        1  .      Head Office
        2  .2.    East          group 40 (Westbrook)
        5  .2.5.  East Branch   center 30, groups 41 (Wesley, under 30) and 44 (closed)
        3  .3.    West          group 43 (pending)
        9  .9.    Remote        group 42
    """
    org.office(1, ".", "Head Office")
    org.office(2, ".2.", "East", parent_id=1)
    org.office(5, ".2.5.", "East Branch", parent_id=2)
    org.office(3, ".3.", "West", parent_id=1)
    org.office(9, ".9.", "Remote", parent_id=1)

    org.staff(10, 1, "Admin, Ada", is_loan_officer=True)
    org.staff(11, 2, "Okafor, Ben")
    org.staff(12, 5, "Silva, Cara", is_loan_officer=True)
    org.staff(13, 5, "Inactive, Dan", is_active=False)

    org.client(20, 5, "Client A")
    org.client(21, 5, "Client B", status=ClientStatus.CLOSED)
    org.client(22, 2, "Client C")

    org.center(30, 5, "Market Center", staff_id=12)

    org.group(40, 2, "Westbrook Group", staff_id=11, external_id="G-40")
    org.group(41, 5, "Wesley Group", staff_id=12, center_id=30)
    org.group(42, 9, "Remote Group")
    org.group(43, 3, "Hilltop Group", status=GroupStatus.PENDING)
    org.group(44, 5, "Closed Group", status=GroupStatus.CLOSED)

    org.code("GROUPROLE", ["Leader", "Secretary"])
    session.commit()
    return org


@pytest.fixture
def head_caller():
    return CallerContext(office_id=1, office_hierarchy=".", user_id=100)


@pytest.fixture
def east_caller():
    return CallerContext(office_id=2, office_hierarchy=".2.", user_id=101)


@pytest.fixture
def west_caller():
    return CallerContext(office_id=3, office_hierarchy=".3.", user_id=102)
