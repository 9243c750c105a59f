# core/sa/repositories/series.py

from typing import List
from sqlalchemy.orm import joinedload
from core.integrity.catalog import EntityKind
from core.models.entities import SeriesInput
from core.sa.models import Series, Book, SeriesAuthor
from .base import BaseRepository

class SeriesRepository(BaseRepository[Series]):
    model = Series
    kind = EntityKind.SERIES
    link_fields = {'author_ids'}

    def get_series_with_books(self, series_id: str) -> Series | None:
        """
        Retrieve a series along with its books, in reading order.
        """
        return (
            self.session.query(Series)
            .options(joinedload(Series.books))
            .filter(Series.id == series_id)
            .first()
        )

    def get_series_by_author(self, author_id: str) -> List[Series]:
        """
        Get all series that credit a specific author.
        """
        return (
            self.session.query(Series)
            .join(SeriesAuthor, SeriesAuthor.series_id == Series.id)
            .filter(SeriesAuthor.author_id == author_id)
            .order_by(Series.name)
            .all()
        )

    def get_books_in_series(self, series_id: str) -> List[Book]:
        return (
            self.session.query(Book)
            .filter(Book.series_id == series_id)
            .order_by(Book.series_order.asc().nulls_last(), Book.title)
            .all()
        )

    def get_author_ids(self, series_id: str) -> List[str]:
        return [
            author_id for (author_id,) in
            self.session.query(SeriesAuthor.author_id).filter(SeriesAuthor.series_id == series_id)
        ]

    def create(self, data: SeriesInput) -> Series:
        """
        Insert a series together with its author links.
        """
        series = super().create(data)
        for author_id in data.author_ids:
            self.session.add(SeriesAuthor(series_id=series.id, author_id=author_id))
        self.session.flush()
        return series
