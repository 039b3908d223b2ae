"""Device endpoints under ``/api/devices``.

WHAT: List, add, check out/in and delete devices, plus the per-device history.
HOW: Each handler maps one request onto one CRUD call. Storage failures bubble
up as SQLAlchemy errors and are turned into ``{"error": ...}`` 500 responses by
the application's exception handlers.
"""


from __future__ import annotations
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from ..db.session import get_db
from ..schemas.common import SuccessOut
from ..schemas.device import DeviceCreate, DeviceHistoryOut, DeviceOut, DeviceUpdate
from ..crud.devices import create_device, delete_device, list_device_history, list_devices, update_device

router = APIRouter(prefix="/api/devices", tags=["devices"])


@router.get("", response_model=list[DeviceOut])
def api_list(db: Session = Depends(get_db)):
    return list_devices(db)


@router.get("/{device_id}/history", response_model=list[DeviceHistoryOut])
def api_history(device_id: str, db: Session = Depends(get_db)):
    return list_device_history(db, device_id)


@router.post("", response_model=DeviceOut)
def api_create(payload: DeviceCreate | None = None, db: Session = Depends(get_db)):
    return create_device(db, (payload or DeviceCreate()).model_dump())


@router.put("/{device_id}", response_model=SuccessOut)
def api_update(device_id: str, payload: DeviceUpdate | None = None, db: Session = Depends(get_db)):
    update_device(db, device_id, (payload or DeviceUpdate()).model_dump())
    return SuccessOut()


@router.delete("/{device_id}", response_model=SuccessOut)
def api_delete(device_id: str, db: Session = Depends(get_db)):
    delete_device(db, device_id)
    return SuccessOut()
