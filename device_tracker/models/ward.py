from __future__ import annotations

from sqlalchemy import Column, Text

from ..db.session import Base


class Ward(Base):
    __tablename__ = "wards"

    id = Column(Text, primary_key=True)
    name = Column(Text, nullable=False)
