"""Sample records for a fresh, empty store."""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..core.clock import utc_timestamp
from ..core.ids import new_id
from ..models.device import STATUS_AVAILABLE, Device
from ..models.staff import StaffMember
from ..models.ward import Ward

logger = logging.getLogger(__name__)

SAMPLE_DEVICES = (
    {"name": 'MacBook Pro 16"', "serial_number": "FVFXC123456", "asset_id": "IT-1001"},
)
SAMPLE_STAFF = (
    {"name": "John Smith", "role": "Teacher"},
    {"name": "Jane Doe", "role": "Nurse"},
)
SAMPLE_WARDS = (
    {"name": "Ward A"},
    {"name": "Ward B"},
)


def seed_sample_data(db: Session) -> bool:
    """Insert the sample device, staff and wards when no device exists yet.

    Returns ``True`` when rows were written. Everything goes in one commit so a
    half-seeded store is never left behind.
    """

    existing = db.execute(select(func.count()).select_from(Device)).scalar_one()
    if existing:
        logger.info("db.seed_skipped", extra={"extra_data": {"devices": existing}})
        return False

    date_added = utc_timestamp()
    for sample in SAMPLE_DEVICES:
        db.add(Device(id=new_id(), status=STATUS_AVAILABLE, date_added=date_added, **sample))
    db.add_all(StaffMember(id=new_id(), **sample) for sample in SAMPLE_STAFF)
    db.add_all(Ward(id=new_id(), **sample) for sample in SAMPLE_WARDS)
    db.commit()
    logger.info(
        "db.seeded",
        extra={
            "extra_data": {
                "devices": len(SAMPLE_DEVICES),
                "staff": len(SAMPLE_STAFF),
                "wards": len(SAMPLE_WARDS),
            }
        },
    )
    return True
