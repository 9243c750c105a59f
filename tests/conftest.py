# tests/conftest.py
import sys
import pytest
from pathlib import Path
from typing import List, Optional

# Add project root to Python path
project_root = str(Path(__file__).parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from sqlalchemy.orm import Session
from core.sa.database import Database
from core.sa.models import (
    Book, Author, Publisher, Series, Genre, Topic, Category,
    BookAuthor, BookGenre, BookTopic, SeriesAuthor, DEFAULT_CATEGORY_ID
)

@pytest.fixture
def database_url(tmp_path):
    """URL of a fresh SQLite file for one test"""
    return f"sqlite:///{tmp_path / 'library.db'}"

@pytest.fixture
def database(database_url):
    """Create a test database instance with the default category and genres"""
    db = Database(database_url)
    db.init_db(seed=True)
    yield db
    db.engine.dispose()

@pytest.fixture
def db_session(database):
    """Create a new database session for a test"""
    session: Session = database.get_session()
    try:
        yield session
    finally:
        session.close()

@pytest.fixture
def make_author(db_session):
    """Insert an author row directly and return its id"""
    def _make(name: str, bio: Optional[str] = None) -> str:
        author = Author(name=name, bio=bio)
        db_session.add(author)
        db_session.flush()
        author_id = author.id
        db_session.commit()
        return author_id
    return _make

@pytest.fixture
def make_publisher(db_session):
    def _make(name: str, location: Optional[str] = None) -> str:
        publisher = Publisher(name=name, location=location)
        db_session.add(publisher)
        db_session.flush()
        publisher_id = publisher.id
        db_session.commit()
        return publisher_id
    return _make

@pytest.fixture
def make_series(db_session):
    """Insert a series with the given authors and return its id"""
    def _make(name: str, author_ids: List[str] = ()) -> str:
        series = Series(name=name)
        db_session.add(series)
        db_session.flush()
        for author_id in author_ids:
            db_session.add(SeriesAuthor(series_id=series.id, author_id=author_id))
        series_id = series.id
        db_session.commit()
        return series_id
    return _make

@pytest.fixture
def make_genre(db_session):
    def _make(name: str) -> str:
        genre = Genre(name=name)
        db_session.add(genre)
        db_session.flush()
        genre_id = genre.id
        db_session.commit()
        return genre_id
    return _make

@pytest.fixture
def make_topic(db_session):
    def _make(name: str) -> str:
        topic = Topic(name=name)
        db_session.add(topic)
        db_session.flush()
        topic_id = topic.id
        db_session.commit()
        return topic_id
    return _make

@pytest.fixture
def make_book(db_session):
    """Insert a book with its link rows and return its id"""
    def _make(
        title: str,
        publisher_id: str,
        author_ids: List[str] = (),
        series_id: Optional[str] = None,
        category_id: str = DEFAULT_CATEGORY_ID,
        genre_ids: List[str] = (),
        topic_ids: List[str] = (),
        reading_status: str = 'unread'
    ) -> str:
        book = Book(
            title=title,
            publisher_id=publisher_id,
            series_id=series_id,
            category_id=category_id,
            reading_status=reading_status
        )
        db_session.add(book)
        db_session.flush()
        for author_id in author_ids:
            db_session.add(BookAuthor(book_id=book.id, author_id=author_id))
        for genre_id in genre_ids:
            db_session.add(BookGenre(book_id=book.id, genre_id=genre_id))
        for topic_id in topic_ids:
            db_session.add(BookTopic(book_id=book.id, topic_id=topic_id))
        book_id = book.id
        db_session.commit()
        return book_id
    return _make

@pytest.fixture
def lone_book(make_author, make_publisher, make_book):
    """Book X whose author A1 and publisher P1 have no other book"""
    author_id = make_author("A1")
    publisher_id = make_publisher("P1")
    book_id = make_book("X", publisher_id, [author_id])
    return {'book': book_id, 'author': author_id, 'publisher': publisher_id}

@pytest.fixture
def shared_library(make_author, make_publisher, make_series, make_book):
    """Two books sharing an author and a publisher, plus one book that stands alone.

    Shared author "Ann" wrote both series books; "Bob" co-wrote only the first.
    "Solo" is the single book of its own author and publisher.
    """
    ann = make_author("Ann")
    bob = make_author("Bob")
    cy = make_author("Cy")
    shared_pub = make_publisher("Shared Press")
    solo_pub = make_publisher("Solo Press")
    saga = make_series("Saga", [ann])
    first = make_book("Saga One", shared_pub, [ann, bob], series_id=saga)
    second = make_book("Saga Two", shared_pub, [ann], series_id=saga)
    solo = make_book("Solo", solo_pub, [cy])
    return {
        'ann': ann, 'bob': bob, 'cy': cy,
        'shared_pub': shared_pub, 'solo_pub': solo_pub,
        'saga': saga,
        'first': first, 'second': second, 'solo': solo,
    }
@pytest.fixture
def handed_over_series(make_author, make_publisher, make_series, make_book):
    """Series "Saga" credits only Ann, who wrote just its first book; Ben wrote the second"""
    ann = make_author("Ann")
    ben = make_author("Ben")
    publisher = make_publisher("Saga Press")
    saga = make_series("Saga", [ann])
    first = make_book("One", publisher, [ann], series_id=saga)
    second = make_book("Two", publisher, [ben], series_id=saga)
    return {
        'ann': ann, 'ben': ben, 'publisher': publisher,
        'saga': saga, 'first': first, 'second': second,
    }
