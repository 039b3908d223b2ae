from __future__ import annotations

from typing import Optional

from .common import CamelModel, CamelRequest


class WardCreate(CamelRequest):
    name: Optional[str] = None


class WardOut(CamelModel):
    id: str
    name: str
