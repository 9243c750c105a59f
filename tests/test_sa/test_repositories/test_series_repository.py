# tests/test_sa/test_repositories/test_series_repository.py

import pytest
from core.models.entities import SeriesInput
from core.sa.repositories.series import SeriesRepository

@pytest.fixture
def series_repo(db_session):
    return SeriesRepository(db_session)

def test_create_links_authors(series_repo, db_session, make_author):
    first = make_author("First")
    second = make_author("Second")
    series = series_repo.create(SeriesInput(name="Pair", author_ids=[first, second, first]))
    db_session.commit()

    assert sorted(series_repo.get_author_ids(series.id)) == sorted([first, second])

def test_get_series_by_author(series_repo, shared_library):
    assert [s.name for s in series_repo.get_series_by_author(shared_library['ann'])] == ["Saga"]
    assert series_repo.get_series_by_author(shared_library['cy']) == []

def test_get_books_in_series(series_repo, shared_library):
    books = series_repo.get_books_in_series(shared_library['saga'])
    assert [book.title for book in books] == ["Saga One", "Saga Two"]

def test_get_series_with_books(series_repo, shared_library):
    series = series_repo.get_series_with_books(shared_library['saga'])
    assert len(series.books) == 2
