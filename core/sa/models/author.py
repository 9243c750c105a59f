# core/sa/models/author.py
from sqlalchemy import String, Text, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, IdentifierMixin, TimestampMixin

class Author(Base, IdentifierMixin, TimestampMixin):
    __tablename__ = 'authors'

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    book_authors = relationship('BookAuthor', back_populates='author')
    series_authors = relationship('SeriesAuthor', back_populates='author')

    # Convenience relationships
    books = relationship('Book', secondary='book_authors', viewonly=True)
    series = relationship('Series', secondary='series_authors', viewonly=True)

    __table_args__ = (
        # Search index
        Index('idx_authors_name', 'name'),
    )
