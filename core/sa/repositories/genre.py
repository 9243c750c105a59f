# core/sa/repositories/genre.py

from typing import List
from core.integrity.catalog import EntityKind
from core.sa.models import Genre, BookGenre
from .base import BaseRepository

class GenreRepository(BaseRepository[Genre]):
    """Repository for managing Genre entities."""
    model = Genre
    kind = EntityKind.GENRE

    def get_genres_by_book(self, book_id: str) -> List[Genre]:
        """Get all genres associated with a specific book.

        Args:
            book_id: The id of the book

        Returns:
            List of Genre objects associated with the book
        """
        return (
            self.session.query(Genre)
            .join(BookGenre, BookGenre.genre_id == Genre.id)
            .filter(BookGenre.book_id == book_id)
            .order_by(Genre.name)
            .all()
        )
