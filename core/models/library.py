# core/models/library.py

from typing import Dict, List
from pydantic import BaseModel
from core.models.book import EntityRef


class NamedCount(BaseModel):
    id: str
    name: str
    book_count: int


class LibraryTotals(BaseModel):
    books: int = 0
    authors: int = 0
    publishers: int = 0
    series: int = 0
    genres: int = 0
    topics: int = 0
    categories: int = 0


class LibraryStats(BaseModel):
    totals: LibraryTotals
    reading_status: Dict[str, int]
    top_genres: List[NamedCount] = []
    top_authors: List[NamedCount] = []
    recent_books: List[EntityRef] = []
    recommended_books: List[EntityRef] = []
