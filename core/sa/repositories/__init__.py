# core/sa/repositories/__init__.py
from .book import BookRepository
from .author import AuthorRepository
from .publisher import PublisherRepository
from .series import SeriesRepository
from .genre import GenreRepository
from .topic import TopicRepository
from .category import CategoryRepository

__all__ = [
    'BookRepository',
    'AuthorRepository',
    'PublisherRepository',
    'SeriesRepository',
    'GenreRepository',
    'TopicRepository',
    'CategoryRepository',
]
