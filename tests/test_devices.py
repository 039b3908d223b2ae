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
from device_tracker.crud import devices as devices_crud
from device_tracker.crud.devices import (
    create_device,
    delete_device,
    list_device_history,
    list_devices,
    update_device,
)
from device_tracker.models.device import Device, DeviceHistory

# Ensure models are imported so metadata is populated
from device_tracker.models import device as device_model  # noqa: F401


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


def _laptop(db, **overrides):
    payload = {"name": "ThinkPad X1", "serial_number": "PF-123", "asset_id": "IT-2001"}
    payload.update(overrides)
    return create_device(db, payload)


def test_create_device_forces_available_status(db_session):
    device = _laptop(db_session, status="checked-out")

    assert device.status == "available"
    assert device.id
    assert device.date_added.endswith("Z")
    assert device.assigned_to is None
    assert device.checkout_time is None


def test_create_device_generates_unique_ids(db_session):
    ids = {_laptop(db_session, asset_id=f"IT-{n}").id for n in range(20)}
    assert len(ids) == 20


def test_create_device_missing_required_field_is_storage_error(db_session):
    with pytest.raises(IntegrityError):
        create_device(db_session, {"name": "No serial"})

    # The failed insert was rolled back and the session is usable again.
    assert list_devices(db_session) == []
    assert _laptop(db_session).status == "available"


def test_checkout_updates_device_and_records_history(db_session):
    device = _laptop(db_session)

    entry = update_device(
        db_session,
        device.id,
        {
            "status": "checked-out",
            "assigned_to": "Pupil 7",
            "staff_member": "Jane Doe",
            "ward": "Ward A",
            "checkout_notes": "Charger included",
        },
    )

    assert entry.type == "checkout"
    assert entry.pupil == "Pupil 7"
    assert entry.staff == "Jane Doe"
    assert entry.ward == "Ward A"
    assert entry.notes == "Charger included"

    refreshed = db_session.get(Device, device.id)
    assert refreshed.status == "checked-out"
    assert refreshed.assigned_to == "Pupil 7"
    assert refreshed.staff_member == "Jane Doe"
    assert refreshed.checkout_notes == "Charger included"
    assert refreshed.checkout_time == entry.timestamp


def test_checkin_records_checkin_entry(db_session):
    device = _laptop(db_session)
    update_device(db_session, device.id, {"status": "checked-out", "assigned_to": "Pupil 1"})

    entry = update_device(db_session, device.id, {"status": "available"})

    assert entry.type == "checkin"
    refreshed = db_session.get(Device, device.id)
    assert refreshed.status == "available"
    assert refreshed.assigned_to is None


def test_any_non_available_status_counts_as_checkout(db_session):
    device = _laptop(db_session)
    entry = update_device(db_session, device.id, {"status": "in-repair"})
    assert entry.type == "checkout"


def test_double_checkout_is_allowed(db_session):
    device = _laptop(db_session)
    update_device(db_session, device.id, {"status": "checked-out", "assigned_to": "Pupil 1"})
    update_device(db_session, device.id, {"status": "checked-out", "assigned_to": "Pupil 2"})

    assert db_session.get(Device, device.id).assigned_to == "Pupil 2"
    assert [e.type for e in list_device_history(db_session, device.id)] == ["checkout", "checkout"]


def test_update_unknown_device_still_records_history(db_session):
    entry = update_device(db_session, "does-not-exist", {"status": "checked-out"})

    assert entry.device_id == "does-not-exist"
    assert list_devices(db_session) == []
    assert len(list_device_history(db_session, "does-not-exist")) == 1


def test_history_is_newest_first(db_session):
    device = _laptop(db_session)
    db_session.add_all(
        [
            DeviceHistory(device_id=device.id, type="checkout", timestamp="2024-01-01T09:00:00.000Z"),
            DeviceHistory(device_id=device.id, type="checkin", timestamp="2024-01-03T09:00:00.000Z"),
            DeviceHistory(device_id=device.id, type="checkout", timestamp="2024-01-02T09:00:00.000Z"),
            DeviceHistory(device_id="other", type="checkout", timestamp="2024-01-04T09:00:00.000Z"),
        ]
    )
    db_session.commit()

    timestamps = [e.timestamp for e in list_device_history(db_session, device.id)]
    assert timestamps == [
        "2024-01-03T09:00:00.000Z",
        "2024-01-02T09:00:00.000Z",
        "2024-01-01T09:00:00.000Z",
    ]


def test_history_reverses_insertion_order(db_session):
    device = _laptop(db_session)
    notes = [f"event {n}" for n in range(5)]
    for n, note in enumerate(notes):
        status = "available" if n % 2 else "checked-out"
        update_device(db_session, device.id, {"status": status, "checkout_notes": note})

    history = list_device_history(db_session, device.id)
    assert [e.notes for e in history] == list(reversed(notes))


def test_history_empty_for_unknown_device(db_session):
    assert list_device_history(db_session, "missing") == []


def test_failed_history_insert_rolls_back_device_update(db_session, monkeypatch):
    device = _laptop(db_session)
    # A NULL history type violates the NOT NULL constraint on insert.
    monkeypatch.setattr(devices_crud, "history_type_for", lambda status: None)

    with pytest.raises(IntegrityError):
        update_device(db_session, device.id, {"status": "checked-out", "assigned_to": "Pupil 3"})

    refreshed = db_session.get(Device, device.id)
    assert refreshed.status == "available"
    assert refreshed.assigned_to is None
    assert refreshed.checkout_time is None
    assert list_device_history(db_session, device.id) == []


def test_update_without_status_fails_and_writes_nothing(db_session):
    device = _laptop(db_session)

    with pytest.raises(IntegrityError):
        update_device(db_session, device.id, {"assigned_to": "Pupil 4"})

    assert db_session.get(Device, device.id).status == "available"
    assert list_device_history(db_session, device.id) == []


def test_delete_device_keeps_history(db_session):
    device = _laptop(db_session)
    update_device(db_session, device.id, {"status": "checked-out"})
    update_device(db_session, device.id, {"status": "available"})

    assert delete_device(db_session, device.id) == 1

    assert list_devices(db_session) == []
    assert [e.type for e in list_device_history(db_session, device.id)] == ["checkin", "checkout"]


def test_delete_unknown_device_is_a_noop(db_session):
    _laptop(db_session)
    assert delete_device(db_session, "missing") == 0
    assert len(list_devices(db_session)) == 1
