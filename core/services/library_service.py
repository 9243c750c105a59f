# core/services/library_service.py

from typing import List
from sqlalchemy.orm import Session

from core.models.book import EntityRef
from core.models.library import LibraryStats, LibraryTotals, NamedCount
from core.sa.repositories import (
    BookRepository, AuthorRepository, PublisherRepository, SeriesRepository,
    GenreRepository, TopicRepository, CategoryRepository
)
from core.sa.repositories.base import BaseRepository

TOP_LIMIT = 5


def _top(repository: BaseRepository, limit: int = TOP_LIMIT) -> List[NamedCount]:
    return [
        NamedCount(id=entity.id, name=entity.name, book_count=count)
        for entity, count in repository.list_with_book_counts()
        if count > 0
    ][:limit]


def _refs(books) -> List[EntityRef]:
    return [EntityRef(id=book.id, name=book.title) for book in books]


class LibraryService:
    def __init__(self, session: Session):
        self.session = session
        self.books = BookRepository(session)
        self.authors = AuthorRepository(session)
        self.genres = GenreRepository(session)

    def get_stats(self) -> LibraryStats:
        """Dashboard figures: totals per kind, reading progress, favourites and recent additions"""
        totals = LibraryTotals(
            books=self.books.count(),
            authors=self.authors.count(),
            publishers=PublisherRepository(self.session).count(),
            series=SeriesRepository(self.session).count(),
            genres=self.genres.count(),
            topics=TopicRepository(self.session).count(),
            categories=CategoryRepository(self.session).count(),
        )
        return LibraryStats(
            totals=totals,
            reading_status=self.books.count_by_reading_status(),
            top_genres=_top(self.genres),
            top_authors=_top(self.authors),
            recent_books=_refs(self.books.get_recent_books(TOP_LIMIT)),
            recommended_books=_refs(self.books.get_recommended_books(TOP_LIMIT)),
        )
