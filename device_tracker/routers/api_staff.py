from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..crud.staff import create_staff_member, delete_staff_member, list_staff
from ..db.session import get_db
from ..schemas.common import SuccessOut
from ..schemas.staff import StaffCreate, StaffOut

router = APIRouter(prefix="/api/staff", tags=["staff"])


@router.get("", response_model=list[StaffOut])
def api_list(db: Session = Depends(get_db)):
    return list_staff(db)


@router.post("", response_model=StaffOut)
def api_create(payload: StaffCreate | None = None, db: Session = Depends(get_db)):
    return create_staff_member(db, (payload or StaffCreate()).model_dump())


@router.delete("/{staff_id}", response_model=SuccessOut)
def api_delete(staff_id: str, db: Session = Depends(get_db)):
    # Deleting an unknown id is not an error; the call is idempotent.
    delete_staff_member(db, staff_id)
    return SuccessOut()
