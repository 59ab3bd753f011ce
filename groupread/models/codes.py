"""
Code and CodeValue SQLAlchemy models.

Codes are named categories (e.g. ``GROUPROLE``) holding ordered values that
feed dropdowns.
"""

from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from groupread.core.database import Base


class Code(Base):
    __tablename__ = "m_code"

    id = Column(Integer, primary_key=True, index=True)
    code_name = Column(String(100), unique=True, nullable=False)
    is_system_defined = Column(Boolean, default=False, nullable=False)

    values = relationship("CodeValue", back_populates="code", order_by="CodeValue.order_position")

    def __repr__(self):
        return f"<Code(code_name='{self.code_name}')>"


class CodeValue(Base):
    __tablename__ = "m_code_value"

    id = Column(Integer, primary_key=True, index=True)
    code_id = Column(Integer, ForeignKey('m_code.id'), nullable=False)
    code_value = Column(String(100), nullable=False)
    order_position = Column(Integer, default=0, nullable=False)

    code = relationship("Code", back_populates="values")

    def __repr__(self):
        return f"<CodeValue(code_value='{self.code_value}')>"
