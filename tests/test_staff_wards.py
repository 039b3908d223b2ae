"""Tests for the staff and ward registries."""

import os
import sys
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("DATA_DIR", str(ROOT / "data"))

from device_tracker.db.session import Base
from device_tracker.crud.devices import create_device, list_devices, update_device
from device_tracker.crud.staff import create_staff_member, delete_staff_member, list_staff
from device_tracker.crud.wards import create_ward, delete_ward, list_wards

# Ensure models are registered so metadata tables are created
from device_tracker.models import device as device_model  # noqa: F401
from device_tracker.models import staff as staff_model  # noqa: F401
from device_tracker.models import ward as ward_model  # noqa: F401


@pytest.fixture()
def db_session():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False})
    TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


def test_create_and_list_staff(db_session):
    nurse = create_staff_member(db_session, {"name": "Jane Doe", "role": "Nurse"})
    teacher = create_staff_member(db_session, {"name": "John Smith", "role": "Teacher"})

    assert nurse.id != teacher.id
    rows = {(s.id, s.name, s.role) for s in list_staff(db_session)}
    assert rows == {(nurse.id, "Jane Doe", "Nurse"), (teacher.id, "John Smith", "Teacher")}


def test_staff_requires_role_at_storage_level(db_session):
    with pytest.raises(IntegrityError):
        create_staff_member(db_session, {"name": "Nameless role"})
    assert list_staff(db_session) == []


def test_delete_staff_twice(db_session):
    member = create_staff_member(db_session, {"name": "Jane Doe", "role": "Nurse"})

    assert delete_staff_member(db_session, member.id) == 1
    assert delete_staff_member(db_session, member.id) == 0
    assert list_staff(db_session) == []


def test_delete_staff_leaves_device_assignment(db_session):
    member = create_staff_member(db_session, {"name": "Jane Doe", "role": "Nurse"})
    device = create_device(db_session, {"name": "iPad", "serial_number": "S-9", "asset_id": "A-9"})
    update_device(db_session, device.id, {"status": "checked-out", "staff_member": member.name})

    delete_staff_member(db_session, member.id)

    assert list_devices(db_session)[0].staff_member == "Jane Doe"


def test_create_list_delete_wards(db_session):
    ward_a = create_ward(db_session, {"name": "Ward A"})
    ward_b = create_ward(db_session, {"name": "Ward B"})

    assert sorted(w.name for w in list_wards(db_session)) == ["Ward A", "Ward B"]

    assert delete_ward(db_session, ward_a.id) == 1
    assert delete_ward(db_session, "missing") == 0
    assert [w.id for w in list_wards(db_session)] == [ward_b.id]


def test_ward_requires_name_at_storage_level(db_session):
    with pytest.raises(IntegrityError):
        create_ward(db_session, {})
