"""Device and device-history tables.

WHAT: The ``devices`` table holds one row per trackable asset and the
``device_history`` table holds the audit trail of checkouts and check-ins.
WHEN: Imported by the CRUD layer, the seeder and the test fixtures.
HOW: Column names on disk keep the camelCase spelling the API speaks
(``serialNumber``, ``deviceId``...), Python attributes stay snake_case.
"""


from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Index, Integer, Text

from ..db.session import Base

STATUS_AVAILABLE = "available"

HISTORY_CHECKOUT = "checkout"
HISTORY_CHECKIN = "checkin"


class Device(Base):
    __tablename__ = "devices"

    id = Column(Text, primary_key=True)
    name = Column(Text, nullable=False)
    serial_number = Column("serialNumber", Text, nullable=False)
    asset_id = Column("assetId", Text, nullable=False)
    status = Column(Text, nullable=False)
    assigned_to = Column("assignedTo", Text, nullable=True)
    staff_member = Column("staffMember", Text, nullable=True)
    ward = Column(Text, nullable=True)
    checkout_time = Column("checkoutTime", Text, nullable=True)
    checkout_notes = Column("checkoutNotes", Text, nullable=True)
    date_added = Column("dateAdded", Text, nullable=False)


class DeviceHistory(Base):
    """One checkout or check-in event.

    ``device_id`` declares the relation to ``devices.id`` but SQLite does not
    enforce it (foreign keys stay off), so history outlives deleted devices.
    """

    __tablename__ = "device_history"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    device_id = Column("deviceId", Text, ForeignKey("devices.id"), nullable=False)
    type = Column(Text, nullable=False)
    timestamp = Column(Text, nullable=False)
    pupil = Column(Text, nullable=True)
    staff = Column(Text, nullable=True)
    ward = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)


Index("ix_device_history_device_timestamp", DeviceHistory.device_id, DeviceHistory.timestamp)
