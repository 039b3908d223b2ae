from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..crud.wards import create_ward, delete_ward, list_wards
from ..db.session import get_db
from ..schemas.common import SuccessOut
from ..schemas.ward import WardCreate, WardOut

router = APIRouter(prefix="/api/wards", tags=["wards"])


@router.get("", response_model=list[WardOut])
def api_list(db: Session = Depends(get_db)):
    return list_wards(db)


@router.post("", response_model=WardOut)
def api_create(payload: WardCreate | None = None, db: Session = Depends(get_db)):
    return create_ward(db, (payload or WardCreate()).model_dump())


@router.delete("/{ward_id}", response_model=SuccessOut)
def api_delete(ward_id: str, db: Session = Depends(get_db)):
    delete_ward(db, ward_id)
    return SuccessOut()
