# api/routes/series.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from core.integrity.enforcer import LifecycleEnforcer
from core.models.book import EntityRef
from core.models.entities import SeriesInput
from core.models.integrity import DeletedEntity
from core.sa.database import get_db

router = APIRouter(prefix="/series", tags=["series"])

@router.post("", response_model=EntityRef, status_code=status.HTTP_201_CREATED)
def create_series(series: SeriesInput, db: Session = Depends(get_db)):
    """Create a series; at least one existing author is required"""
    return EntityRef.model_validate(LifecycleEnforcer(db).create_series(series))

@router.delete("/{series_id}", response_model=DeletedEntity)
def delete_series(series_id: str, db: Session = Depends(get_db)):
    return LifecycleEnforcer(db).delete_series(series_id)
