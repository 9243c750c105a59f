# core/sa/models/book.py
from sqlalchemy import String, Integer, Float, ForeignKey, Text, Index, CheckConstraint
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, IdentifierMixin, TimestampMixin
from enum import Enum

class ReadingStatus(str, Enum):
    UNREAD = "unread"
    READING = "reading"
    COMPLETED = "completed"

class BookAuthor(Base, TimestampMixin):
    __tablename__ = 'book_authors'

    book_id: Mapped[str] = mapped_column(ForeignKey('books.id'), primary_key=True)
    author_id: Mapped[str] = mapped_column(ForeignKey('authors.id'), primary_key=True)

    # Relationships
    book = relationship('Book', back_populates='book_authors')
    author = relationship('Author', back_populates='book_authors')

class BookGenre(Base, TimestampMixin):
    __tablename__ = 'book_genres'

    book_id: Mapped[str] = mapped_column(ForeignKey('books.id'), primary_key=True)
    genre_id: Mapped[str] = mapped_column(ForeignKey('genres.id'), primary_key=True)

    # Relationships
    book = relationship('Book', back_populates='book_genres')
    genre = relationship('Genre', back_populates='book_genres')

class BookTopic(Base, TimestampMixin):
    __tablename__ = 'book_topics'

    book_id: Mapped[str] = mapped_column(ForeignKey('books.id'), primary_key=True)
    topic_id: Mapped[str] = mapped_column(ForeignKey('topics.id'), primary_key=True)

    # Relationships
    book = relationship('Book', back_populates='book_topics')
    topic = relationship('Topic', back_populates='book_topics')

class Book(Base, IdentifierMixin, TimestampMixin):
    __tablename__ = 'books'

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    isbn: Mapped[str | None] = mapped_column(String(20), nullable=True)
    publication_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    pages: Mapped[int | None] = mapped_column(Integer, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    cover_image: Mapped[str | None] = mapped_column(String, nullable=True)
    reading_status: Mapped[str] = mapped_column(String(20), nullable=False, default=ReadingStatus.UNREAD.value)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    rating: Mapped[float | None] = mapped_column(Float, nullable=True)
    publisher_id: Mapped[str] = mapped_column(ForeignKey('publishers.id'), nullable=False)
    series_id: Mapped[str | None] = mapped_column(ForeignKey('series.id'), nullable=True)
    series_order: Mapped[int | None] = mapped_column(Integer, nullable=True)
    category_id: Mapped[str] = mapped_column(ForeignKey('categories.id'), nullable=False)

    # Relationships
    book_authors = relationship('BookAuthor', back_populates='book')
    book_genres = relationship('BookGenre', back_populates='book')
    book_topics = relationship('BookTopic', back_populates='book')
    publisher = relationship('Publisher', back_populates='books')
    series = relationship('Series', back_populates='books')
    category = relationship('Category', back_populates='books')

    # Convenience relationships
    authors = relationship('Author', secondary='book_authors', viewonly=True)
    genres = relationship('Genre', secondary='book_genres', viewonly=True)
    topics = relationship('Topic', secondary='book_topics', viewonly=True)

    __table_args__ = (
        CheckConstraint("reading_status IN ('unread', 'reading', 'completed')", name='ck_books_reading_status'),
        CheckConstraint('rating >= 0 AND rating <= 5', name='ck_books_rating'),

        # Search indexes
        Index('idx_books_title', 'title'),
        Index('idx_books_isbn', 'isbn'),

        # Foreign key indexes used by the link counts
        Index('idx_books_publisher', 'publisher_id'),
        Index('idx_books_series', 'series_id'),
        Index('idx_books_category', 'category_id'),
    )
