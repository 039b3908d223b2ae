"""Request/response models for devices and their history.

Request bodies are deliberately loose: every field is optional and unknown
keys (a client-supplied ``status`` on create, for instance) are ignored. The
storage layer decides what is actually required.
"""


from __future__ import annotations

from typing import Optional

from .common import CamelModel, CamelRequest


class DeviceCreate(CamelRequest):
    name: Optional[str] = None
    serial_number: Optional[str] = None
    asset_id: Optional[str] = None


class DeviceUpdate(CamelRequest):
    status: Optional[str] = None
    assigned_to: Optional[str] = None
    staff_member: Optional[str] = None
    ward: Optional[str] = None
    checkout_notes: Optional[str] = None


class DeviceOut(CamelModel):
    id: str
    name: str
    serial_number: str
    asset_id: str
    status: str
    assigned_to: Optional[str] = None
    staff_member: Optional[str] = None
    ward: Optional[str] = None
    checkout_time: Optional[str] = None
    checkout_notes: Optional[str] = None
    date_added: str


class DeviceHistoryOut(CamelModel):
    id: int
    device_id: str
    type: str
    timestamp: str
    pupil: Optional[str] = None
    staff: Optional[str] = None
    ward: Optional[str] = None
    notes: Optional[str] = None
