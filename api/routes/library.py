# api/routes/library.py

from typing import Any, Dict
from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from core.integrity.enforcer import LifecycleEnforcer
from core.integrity.impact import ImpactAnalyzer
from core.models.integrity import CleanupResult, IntegrityCheckResult
from core.models.library import LibraryStats
from core.models.transfer import ImportBatch, ImportResult
from core.sa.database import get_db
from core.services.bulk_merge import BulkMergeCoordinator
from core.services.library_service import LibraryService

router = APIRouter(prefix="/library", tags=["library"])

@router.get("/integrity", response_model=IntegrityCheckResult)
def integrity_check(db: Session = Depends(get_db)):
    """Scan for orphans, authorless series and books with dangling references"""
    return ImpactAnalyzer(db).integrity_check()

@router.post("/cleanup-orphans", response_model=CleanupResult)
def cleanup_orphans(db: Session = Depends(get_db)):
    return LifecycleEnforcer(db).cleanup_orphans()

@router.post("/import", response_model=ImportResult)
def import_batch(batch: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    """Merge an export into the library; existing ids are skipped"""
    return BulkMergeCoordinator(db).import_batch(batch)

@router.get("/export", response_model=ImportBatch)
def export_batch(db: Session = Depends(get_db)):
    return BulkMergeCoordinator(db).export_batch()

@router.get("/stats", response_model=LibraryStats)
def get_stats(db: Session = Depends(get_db)):
    return LibraryService(db).get_stats()
