# device_tracker/crud/wards.py
from __future__ import annotations

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.ids import new_id
from ..models.ward import Ward

logger = logging.getLogger(__name__)


def list_wards(db: Session) -> list[Ward]:
    return list(db.execute(select(Ward)).scalars().all())


def create_ward(db: Session, payload: dict) -> Ward:
    obj = Ward(id=new_id(), name=payload.get("name"))
    db.add(obj)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(obj)
    logger.info("ward.created", extra={"extra_data": {"ward_id": obj.id}})
    return obj


def delete_ward(db: Session, ward_id: str) -> int:
    try:
        result = db.execute(delete(Ward).where(Ward.id == ward_id))
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    logger.info("ward.deleted", extra={"extra_data": {"ward_id": ward_id, "rows": result.rowcount}})
    return result.rowcount
