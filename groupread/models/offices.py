"""
Office and Staff SQLAlchemy models.

Offices form a tree encoded as a materialized path in ``hierarchy``
(``.`` for the head office, ``.2.`` for its child with id 2, ``.2.5.`` for a
grandchild and so on). Prefix matching on that path is how the read side
decides which part of the organisation a caller may see.
"""

from datetime import date

from sqlalchemy import Column, Integer, String, Boolean, Date, ForeignKey
from sqlalchemy.orm import relationship

from groupread.core.database import Base


class Office(Base):
    """Branch office in the organisational hierarchy."""
    __tablename__ = "m_office"

    id = Column(Integer, primary_key=True, index=True)
    parent_id = Column(Integer, ForeignKey('m_office.id'), nullable=True)
    hierarchy = Column(String(100), nullable=True, index=True)
    external_id = Column(String(100), unique=True, nullable=True)
    name = Column(String(50), unique=True, nullable=False)
    opening_date = Column(Date, nullable=False, default=date.today)

    parent = relationship("Office", remote_side=[id], backref="children")
    staff = relationship("Staff", back_populates="office", lazy="dynamic")

    def __repr__(self):
        return f"<Office(name='{self.name}', hierarchy='{self.hierarchy}')>"

    @property
    def depth(self):
        """Number of levels below the head office."""
        if not self.hierarchy:
            return 0
        return self.hierarchy.count('.') - 1


class Staff(Base):
    """Staff member attached to an office; may act as a loan officer."""
    __tablename__ = "m_staff"

    id = Column(Integer, primary_key=True, index=True)
    office_id = Column(Integer, ForeignKey('m_office.id'), nullable=False)
    firstname = Column(String(50), nullable=True)
    lastname = Column(String(50), nullable=True)
    display_name = Column(String(102), nullable=False)
    is_loan_officer = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    office = relationship("Office", back_populates="staff")

    def __repr__(self):
        return f"<Staff(display_name='{self.display_name}', office_id={self.office_id})>"
