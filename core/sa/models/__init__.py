from .base import Base, IdentifierMixin, TimestampMixin, new_id
from .author import Author
from .publisher import Publisher
from .genre import Genre
from .topic import Topic
from .category import Category, DEFAULT_CATEGORY_ID, DEFAULT_CATEGORY_COLOR
from .series import Series, SeriesAuthor
from .book import Book, BookAuthor, BookGenre, BookTopic, ReadingStatus

__all__ = [
    'Base',
    'IdentifierMixin',
    'TimestampMixin',
    'new_id',
    'Book',
    'BookAuthor',
    'BookGenre',
    'BookTopic',
    'ReadingStatus',
    'Author',
    'Publisher',
    'Series',
    'SeriesAuthor',
    'Genre',
    'Topic',
    'Category',
    'DEFAULT_CATEGORY_ID',
    'DEFAULT_CATEGORY_COLOR',
]
