# device_tracker/crud/devices.py
from __future__ import annotations

import logging

from sqlalchemy import delete, desc, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.clock import utc_timestamp
from ..core.ids import new_id
from ..models.device import (
    HISTORY_CHECKIN,
    HISTORY_CHECKOUT,
    STATUS_AVAILABLE,
    Device,
    DeviceHistory,
)

logger = logging.getLogger(__name__)


def history_type_for(status: str | None) -> str:
    """Map the new device status to the kind of history entry it produces."""
    return HISTORY_CHECKIN if status == STATUS_AVAILABLE else HISTORY_CHECKOUT


def list_devices(db: Session) -> list[Device]:
    return list(db.execute(select(Device)).scalars().all())


def list_device_history(db: Session, device_id: str) -> list[DeviceHistory]:
    """
    Return the history of one device, newest first.
    Entries sharing a timestamp fall back to insertion order (latest first).
    """
    stmt = (
        select(DeviceHistory)
        .where(DeviceHistory.device_id == device_id)
        .order_by(desc(DeviceHistory.timestamp), desc(DeviceHistory.id))
    )
    return list(db.execute(stmt).scalars().all())


def create_device(db: Session, payload: dict) -> Device:
    """
    Create and persist a device. Any status in the payload is ignored:
    new devices always start out available.
    """
    obj = Device(
        id=new_id(),
        name=payload.get("name"),
        serial_number=payload.get("serial_number"),
        asset_id=payload.get("asset_id"),
        status=STATUS_AVAILABLE,
        date_added=utc_timestamp(),
    )
    db.add(obj)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(obj)
    logger.info("device.created", extra={"extra_data": {"device_id": obj.id, "asset_id": obj.asset_id}})
    return obj


def update_device(db: Session, device_id: str, payload: dict) -> DeviceHistory:
    """
    Check a device out or in.

    The five checkout fields are overwritten unconditionally and checkout_time
    is stamped with the current time. One history entry is appended in the
    same transaction, so either both writes land or neither does. There is
    no existence check: an unknown id updates nothing but still records the
    history entry.
    """
    status = payload.get("status")
    timestamp = utc_timestamp()
    stmt = (
        update(Device)
        .where(Device.id == device_id)
        .values(
            {
                Device.status: status,
                Device.assigned_to: payload.get("assigned_to"),
                Device.staff_member: payload.get("staff_member"),
                Device.ward: payload.get("ward"),
                Device.checkout_time: timestamp,
                Device.checkout_notes: payload.get("checkout_notes"),
            }
        )
    )
    entry = DeviceHistory(
        device_id=device_id,
        type=history_type_for(status),
        timestamp=timestamp,
        pupil=payload.get("assigned_to"),
        staff=payload.get("staff_member"),
        ward=payload.get("ward"),
        notes=payload.get("checkout_notes"),
    )
    try:
        result = db.execute(stmt)
        db.add(entry)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(entry)
    logger.info(
        "device.updated",
        extra={
            "extra_data": {
                "device_id": device_id,
                "status": status,
                "history_type": entry.type,
                "rows_matched": result.rowcount,
            }
        },
    )
    return entry


def delete_device(db: Session, device_id: str) -> int:
    """
    Delete a device row. History entries are kept. Returns the number of rows removed.
    """
    try:
        result = db.execute(delete(Device).where(Device.id == device_id))
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    logger.info("device.deleted", extra={"extra_data": {"device_id": device_id, "rows": result.rowcount}})
    return result.rowcount
