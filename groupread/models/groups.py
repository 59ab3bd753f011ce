"""
Group, Center and Client SQLAlchemy models.

Centers and groups share the ``m_group`` table and are told apart by
``level_id``. A group may hang off a center through ``parent_id``.
"""

from sqlalchemy import Column, Integer, String, Date, ForeignKey
from sqlalchemy.orm import relationship
import enum

from groupread.core.database import Base


class GroupLevel(enum.IntEnum):
    """Structural level of a row in ``m_group``."""
    CENTER = 1
    GROUP = 2


class GroupStatus(enum.IntEnum):
    """Lifecycle status stored in ``status_enum``."""
    INVALID = 0
    PENDING = 100
    ACTIVE = 300
    CLOSED = 600

    @property
    def code(self) -> str:
        return f"groupingStatusType.{self.name.lower()}"

    @property
    def label(self) -> str:
        return self.name.capitalize()


class ClientStatus(enum.IntEnum):
    """Lifecycle status of a client."""
    INVALID = 0
    PENDING = 100
    ACTIVE = 300
    TRANSFER_IN_PROGRESS = 303
    TRANSFER_ON_HOLD = 304
    CLOSED = 600
    REJECTED = 700
    WITHDRAWN = 800


class Group(Base):
    """
    Grouping entity: either a center or a group of clients.

    ``hierarchy`` is the group's own structural path (``.3.`` for a top
    level group, ``.1.3.`` for a group under center 1); authorisation uses
    the owning office's hierarchy instead.
    """
    __tablename__ = "m_group"

    id = Column(Integer, primary_key=True, index=True)
    external_id = Column(String(100), unique=True, nullable=True)
    display_name = Column(String(100), nullable=False, index=True)

    # Placement
    office_id = Column(Integer, ForeignKey('m_office.id'), nullable=False)
    staff_id = Column(Integer, ForeignKey('m_staff.id'), nullable=True)
    parent_id = Column(Integer, ForeignKey('m_group.id'), nullable=True)
    level_id = Column(Integer, nullable=False, default=GroupLevel.GROUP.value)
    hierarchy = Column(String(100), nullable=True)

    # Lifecycle
    status_enum = Column(Integer, nullable=False, default=GroupStatus.ACTIVE.value)
    activation_date = Column(Date, nullable=True)

    office = relationship("Office")
    staff = relationship("Staff")
    center = relationship("Group", remote_side=[id], backref="child_groups")

    def __repr__(self):
        return f"<Group(display_name='{self.display_name}', level_id={self.level_id})>"


class Client(Base):
    """Client belonging to an office; the options list for new groups."""
    __tablename__ = "m_client"

    id = Column(Integer, primary_key=True, index=True)
    office_id = Column(Integer, ForeignKey('m_office.id'), nullable=False)
    display_name = Column(String(100), nullable=False)
    external_id = Column(String(100), unique=True, nullable=True)
    status_enum = Column(Integer, nullable=False, default=ClientStatus.ACTIVE.value)

    office = relationship("Office")

    def __repr__(self):
        return f"<Client(display_name='{self.display_name}', office_id={self.office_id})>"
