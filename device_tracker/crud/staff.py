# device_tracker/crud/staff.py
from __future__ import annotations

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.ids import new_id
from ..models.staff import StaffMember

logger = logging.getLogger(__name__)


def list_staff(db: Session) -> list[StaffMember]:
    return list(db.execute(select(StaffMember)).scalars().all())


def create_staff_member(db: Session, payload: dict) -> StaffMember:
    obj = StaffMember(id=new_id(), name=payload.get("name"), role=payload.get("role"))
    db.add(obj)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(obj)
    logger.info("staff.created", extra={"extra_data": {"staff_id": obj.id}})
    return obj


def delete_staff_member(db: Session, staff_id: str) -> int:
    """
    Remove a staff member. Devices or history rows naming them are left alone.
    """
    try:
        result = db.execute(delete(StaffMember).where(StaffMember.id == staff_id))
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    logger.info("staff.deleted", extra={"extra_data": {"staff_id": staff_id, "rows": result.rowcount}})
    return result.rowcount
