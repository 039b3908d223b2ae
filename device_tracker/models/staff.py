from __future__ import annotations

from sqlalchemy import Column, Text

from ..db.session import Base


class StaffMember(Base):
    __tablename__ = "staff"

    id = Column(Text, primary_key=True)
    name = Column(Text, nullable=False)
    role = Column(Text, nullable=False)
