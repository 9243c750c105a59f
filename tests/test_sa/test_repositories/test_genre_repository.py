# tests/test_sa/test_repositories/test_genre_repository.py

import pytest
from core.models.entities import GenreInput, CategoryInput
from core.sa.models import DEFAULT_CATEGORY_COLOR
from core.sa.repositories.genre import GenreRepository
from core.sa.repositories.topic import TopicRepository
from core.sa.repositories.category import CategoryRepository

@pytest.fixture
def genre_repo(db_session):
    """Fixture to create a GenreRepository instance."""
    return GenreRepository(db_session)

def test_get_seeded_genre_by_name(genre_repo):
    """Test fetching a default genre by its name."""
    fetched = genre_repo.find_by_name("fantasy")
    assert fetched is not None
    assert fetched.name == "Fantasy"

def test_get_by_nonexistent_name(genre_repo):
    """Test fetching a genre with non-existent name."""
    assert genre_repo.find_by_name("Nonexistent Genre") is None

def test_get_genres_by_book(genre_repo, make_genre, make_publisher, make_book):
    """Test getting the genres linked to a book."""
    cozy = make_genre("Cozy")
    noir = make_genre("Noir")
    book_id = make_book("Tea and Murder", make_publisher("P"), genre_ids=[noir, cozy])

    assert [genre.name for genre in genre_repo.get_genres_by_book(book_id)] == ["Cozy", "Noir"]

def test_topics_by_book(db_session, make_topic, make_publisher, make_book):
    topic_id = make_topic("Sailing")
    book_id = make_book("At Sea", make_publisher("P"), topic_ids=[topic_id])
    assert [topic.name for topic in TopicRepository(db_session).get_topics_by_book(book_id)] == ["Sailing"]

def test_create_genre(genre_repo, db_session):
    genre = genre_repo.create(GenreInput(name="Solarpunk", description="Hopeful futures"))
    db_session.commit()
    assert genre_repo.find_by_name("SOLARPUNK").id == genre.id

def test_category_defaults(db_session):
    repo = CategoryRepository(db_session)
    category = repo.create(CategoryInput(name="Reference"))
    assert category.color == DEFAULT_CATEGORY_COLOR
    assert repo.get_default().name == "General"
