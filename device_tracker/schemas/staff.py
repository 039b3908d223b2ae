from __future__ import annotations

from typing import Optional

from .common import CamelModel, CamelRequest


class StaffCreate(CamelRequest):
    name: Optional[str] = None
    role: Optional[str] = None


class StaffOut(CamelModel):
    id: str
    name: str
    role: str
