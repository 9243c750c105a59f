# core/sa/models/genre.py
from sqlalchemy import String, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, IdentifierMixin, TimestampMixin

class Genre(Base, IdentifierMixin, TimestampMixin):
    __tablename__ = 'genres'

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # Relationships
    book_genres = relationship('BookGenre', back_populates='genre')

    # Convenience relationship
    books = relationship('Book', secondary='book_genres', viewonly=True)

    __table_args__ = (
        # Search index
        Index('idx_genres_name', 'name'),
    )
