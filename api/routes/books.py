# api/routes/books.py

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from core.integrity.enforcer import LifecycleEnforcer
from core.integrity.impact import ImpactAnalyzer
from core.models.book import BookInput, BookRecord
from core.models.integrity import BookImpact
from core.sa.database import get_db
from core.sa.models import ReadingStatus
from core.sa.repositories.book import BookRepository
from api.schemas.book import BookDeleteResponse

router = APIRouter(prefix="/books", tags=["books"])

@router.get("", response_model=List[BookRecord])
def get_books(
    query: Optional[str] = Query(None, description="Search books by title or ISBN"),
    reading_status: Optional[ReadingStatus] = Query(None, description="Filter books by reading status"),
    page: int = Query(1, ge=1, description="Page number"),
    size: int = Query(20, ge=1, le=100, description="Items per page"),
    db: Session = Depends(get_db)
):
    """
    Get a page of books with optional title search and reading status filter.
    """
    books = BookRepository(db).search_books(
        query=query,
        reading_status=reading_status,
        limit=size,
        offset=(page - 1) * size
    )
    return [BookRecord.model_validate(book) for book in books]

@router.get("/{book_id}", response_model=BookRecord)
def get_book(book_id: str, db: Session = Depends(get_db)):
    book = BookRepository(db).get_by_id(book_id)
    if not book:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Book with id {book_id} not found")
    return BookRecord.model_validate(book)

@router.post("", response_model=BookRecord, status_code=status.HTTP_201_CREATED)
def create_book(book: BookInput, db: Session = Depends(get_db)):
    created = LifecycleEnforcer(db).create_book(book)
    return BookRecord.model_validate(created)

@router.put("/{book_id}", response_model=BookRecord)
def update_book(
    book_id: str,
    book: BookInput,
    cascade_orphans: bool = Query(False, description="Delete authors, publisher and series the edit leaves without books"),
    db: Session = Depends(get_db)
):
    """
    Replace a book's fields and links.

    Responds 409 with the list of violations when the edit would leave an
    author, publisher or series without books and cascade_orphans is false.
    """
    updated = LifecycleEnforcer(db).update_book(book_id, book, cascade_orphans=cascade_orphans)
    return BookRecord.model_validate(updated)

@router.delete("/{book_id}", response_model=BookDeleteResponse)
def delete_book(
    book_id: str,
    cascade_orphans: bool = Query(False, description="Also delete the authors, publisher and series left without books"),
    db: Session = Depends(get_db)
):
    deleted = LifecycleEnforcer(db).delete_book(book_id, cascade_orphans=cascade_orphans)
    return BookDeleteResponse.from_deleted(deleted)

@router.get("/{book_id}/delete-impact", response_model=BookImpact)
def get_delete_impact(book_id: str, db: Session = Depends(get_db)):
    """
    Preview what deleting the book would leave without any book.
    """
    return ImpactAnalyzer(db).check_delete_impact(book_id)

@router.post("/{book_id}/update-impact", response_model=BookImpact)
def get_update_impact(book_id: str, book: BookInput, db: Session = Depends(get_db)):
    """
    Preview what replacing the book with the given state would leave without any book.
    """
    return ImpactAnalyzer(db).check_update_impact(book_id, book)
