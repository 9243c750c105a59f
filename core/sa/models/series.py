# core/sa/models/series.py
from sqlalchemy import String, Text, ForeignKey, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, IdentifierMixin, TimestampMixin

class SeriesAuthor(Base, TimestampMixin):
    """Association model for the authors of a series"""
    __tablename__ = 'series_authors'

    series_id: Mapped[str] = mapped_column(String(36), ForeignKey('series.id'), primary_key=True)
    author_id: Mapped[str] = mapped_column(String(36), ForeignKey('authors.id'), primary_key=True)

    # Relationships
    series = relationship('Series', back_populates='series_authors')
    author = relationship('Author', back_populates='series_authors')

class Series(Base, IdentifierMixin, TimestampMixin):
    __tablename__ = 'series'

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    books = relationship('Book', back_populates='series')
    series_authors = relationship('SeriesAuthor', back_populates='series')

    # Convenience relationship
    authors = relationship('Author', secondary='series_authors', viewonly=True)

    __table_args__ = (
        # Search index
        Index('idx_series_name', 'name'),
    )
