# api/routes/authors.py

from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.integrity.enforcer import LifecycleEnforcer
from core.integrity.impact import ImpactAnalyzer
from core.models.integrity import AuthorDeleteImpact, DeletedEntity
from core.sa.database import get_db
from core.sa.repositories.author import AuthorRepository
from api.schemas.entities import AuthorListItem

router = APIRouter(prefix="/authors", tags=["authors"])

@router.get("", response_model=List[AuthorListItem])
def get_authors(db: Session = Depends(get_db)):
    """Get every author with the number of books linked to them"""
    return [
        AuthorListItem(id=author.id, name=author.name, bio=author.bio, book_count=book_count)
        for author, book_count in AuthorRepository(db).list_with_book_counts()
    ]

@router.get("/{author_id}/delete-impact", response_model=AuthorDeleteImpact)
def get_delete_impact(author_id: str, db: Session = Depends(get_db)):
    """Series that would be left without any author"""
    return ImpactAnalyzer(db).check_author_delete_impact(author_id)

@router.delete("/{author_id}", response_model=DeletedEntity)
def delete_author(author_id: str, db: Session = Depends(get_db)):
    return LifecycleEnforcer(db).delete_author(author_id)
