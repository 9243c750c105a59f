# core/sa/__init__.py
from .database import Database, transaction, get_db
from .store import EntityStore
from .models import (
    Base, Book, Author, Publisher, Series, Genre, Topic, Category,
    BookAuthor, BookGenre, BookTopic, SeriesAuthor
)

__all__ = [
    'Database',
    'transaction',
    'get_db',
    'EntityStore',
    'Base',
    'Book',
    'Author',
    'Publisher',
    'Series',
    'Genre',
    'Topic',
    'Category',
    'BookAuthor',
    'BookGenre',
    'BookTopic',
    'SeriesAuthor'
]
