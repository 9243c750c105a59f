# core/sa/repositories/author.py
from typing import List
from sqlalchemy import desc
from core.integrity.catalog import EntityKind
from ..models import Author, BookAuthor, SeriesAuthor
from .base import BaseRepository

class AuthorRepository(BaseRepository[Author]):
    model = Author
    kind = EntityKind.AUTHOR

    def get_recent_authors(self, limit: int = 10) -> List[Author]:
        """Get recently added authors"""
        return self.session.query(Author).order_by(
            desc(Author.created_at)
        ).limit(limit).all()

    def get_authors_by_book(self, book_id: str) -> List[Author]:
        """Get all authors for a specific book"""
        return (
            self.session.query(Author)
            .join(BookAuthor, BookAuthor.author_id == Author.id)
            .filter(BookAuthor.book_id == book_id)
            .order_by(Author.name)
            .all()
        )

    def get_authors_by_series(self, series_id: str) -> List[Author]:
        """Get all authors credited on a series"""
        return (
            self.session.query(Author)
            .join(SeriesAuthor, SeriesAuthor.author_id == Author.id)
            .filter(SeriesAuthor.series_id == series_id)
            .order_by(Author.name)
            .all()
        )
