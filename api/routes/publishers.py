# api/routes/publishers.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.integrity.enforcer import LifecycleEnforcer
from core.models.integrity import DeletedEntity
from core.sa.database import get_db

router = APIRouter(prefix="/publishers", tags=["publishers"])

@router.delete("/{publisher_id}", response_model=DeletedEntity)
def delete_publisher(publisher_id: str, db: Session = Depends(get_db)):
    return LifecycleEnforcer(db).delete_publisher(publisher_id)
