# core/models/book.py

from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from typing import Optional, List
from core.sa.models import ReadingStatus


def _unique(ids: List[str]) -> List[str]:
    return list(dict.fromkeys(ids))


class EntityRef(BaseModel):
    id: str
    name: str

    model_config = ConfigDict(from_attributes=True)


class BookInput(BaseModel):
    """Proposed state of a book, used for creation and in-place edits"""
    id: Optional[str] = None
    title: str = Field(min_length=1, max_length=500)
    isbn: Optional[str] = Field(default=None, max_length=20)
    publication_year: Optional[int] = None
    pages: Optional[int] = Field(default=None, gt=0)
    description: Optional[str] = Field(default=None, max_length=5000)
    cover_image: Optional[str] = None
    reading_status: ReadingStatus = ReadingStatus.UNREAD
    notes: Optional[str] = Field(default=None, max_length=10000)
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    publisher_id: str = Field(min_length=1)
    series_id: Optional[str] = None
    series_order: Optional[int] = Field(default=None, gt=0)
    category_id: str = Field(min_length=1)
    author_ids: List[str] = []
    genre_ids: List[str] = []
    topic_ids: List[str] = []

    @field_validator('isbn', 'series_id', mode='before')
    @classmethod
    def blank_as_none(cls, value):
        if value == '':
            return None
        return value

    @field_validator('publication_year')
    @classmethod
    def check_publication_year(cls, value):
        if value is not None and not 1000 <= value <= datetime.now().year + 1:
            raise ValueError('publication year out of range')
        return value

    @field_validator('author_ids', 'genre_ids', 'topic_ids')
    @classmethod
    def drop_duplicate_ids(cls, value):
        return _unique(value)


class BookRecord(BaseModel):
    id: str
    title: str
    isbn: Optional[str] = None
    publication_year: Optional[int] = None
    pages: Optional[int] = None
    description: Optional[str] = None
    cover_image: Optional[str] = None
    reading_status: ReadingStatus
    notes: Optional[str] = None
    rating: Optional[float] = None
    publisher_id: str
    series_id: Optional[str] = None
    series_order: Optional[int] = None
    category_id: str
    publisher: Optional[EntityRef] = None
    series: Optional[EntityRef] = None
    category: Optional[EntityRef] = None
    authors: List[EntityRef] = []
    genres: List[EntityRef] = []
    topics: List[EntityRef] = []
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
