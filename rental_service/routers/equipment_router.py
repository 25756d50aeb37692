from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from .. import crud, schemas
from ..database import get_db

router = APIRouter(prefix="/equipment", tags=["Equipment"])


@router.get("", response_model=List[schemas.EquipmentRead])
def read_equipment(db: Session = Depends(get_db)):
    return crud.list_equipment(db)
