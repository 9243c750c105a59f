# tests/test_sa/test_repositories/test_author_repository.py

import pytest
from core.exceptions import NotFoundError
from core.models.entities import AuthorInput
from core.sa.repositories.author import AuthorRepository

@pytest.fixture
def author_repo(db_session):
    """Fixture to create an AuthorRepository instance."""
    return AuthorRepository(db_session)

def test_find_by_name_ignores_case(author_repo, make_author):
    author_id = make_author("Ursula K. Le Guin")
    found = author_repo.find_by_name("  ursula k. le guin ")
    assert found is not None
    assert found.id == author_id

def test_search_authors(author_repo, make_author):
    make_author("Terry Pratchett")
    make_author("Terry Brooks")
    make_author("Neil Gaiman")

    results = author_repo.search("Terry")
    assert [author.name for author in results] == ["Terry Brooks", "Terry Pratchett"]
    assert len(author_repo.search("")) == 3

def test_create_keeps_supplied_id(author_repo, db_session):
    author = author_repo.create(AuthorInput(id="author-1", name="Octavia Butler"))
    db_session.commit()
    assert author_repo.get_by_id("author-1").name == "Octavia Butler"

def test_create_generates_id(author_repo):
    author = author_repo.create(AuthorInput(name="Anonymous"))
    assert author.id

def test_update(author_repo, make_author):
    author_id = make_author("Old Name", bio="Old bio")
    author = author_repo.update(author_id, AuthorInput(name="New Name", bio=None))
    assert author.name == "New Name"
    assert author.bio is None

def test_update_missing(author_repo):
    with pytest.raises(NotFoundError):
        author_repo.update("missing", AuthorInput(name="Ghost"))

def test_list_with_book_counts(author_repo, shared_library, make_author):
    make_author("Zed")
    counts = {author.name: count for author, count in author_repo.list_with_book_counts()}
    assert counts == {"Ann": 2, "Bob": 1, "Cy": 1, "Zed": 0}

def test_get_authors_by_book_and_series(author_repo, shared_library):
    assert [a.name for a in author_repo.get_authors_by_book(shared_library['first'])] == ["Ann", "Bob"]
    assert [a.name for a in author_repo.get_authors_by_series(shared_library['saga'])] == ["Ann"]
