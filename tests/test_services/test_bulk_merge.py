# tests/test_services/test_bulk_merge.py
import json
import pytest
from core.exceptions import ValidationError
from core.integrity.impact import ImpactAnalyzer
from core.models.transfer import EXPORT_VERSION
from core.sa.database import Database
from core.sa.models import Book, Author, Publisher, Series, Genre, DEFAULT_CATEGORY_ID
from core.services.bulk_merge import BulkMergeCoordinator

@pytest.fixture
def coordinator(db_session):
    return BulkMergeCoordinator(db_session)

@pytest.fixture
def batch():
    """A small export with one author, publisher, series and two books"""
    return {
        'version': EXPORT_VERSION,
        'exported_at': '2024-05-01T12:00:00+00:00',
        'categories': [{'id': 'cat-1', 'name': 'Fiction Shelf', 'color': '#ff0000'}],
        'authors': [{'id': 'author-1', 'name': 'Le Guin'}],
        'publishers': [{'id': 'pub-1', 'name': 'Ace', 'website': 'https://ace.example'}],
        'genres': [{'id': 'genre-1', 'name': 'Anthropological SF'}],
        'topics': [{'id': 'topic-1', 'name': 'Anarchism'}],
        'series': [{'id': 'series-1', 'name': 'Hainish Cycle', 'author_ids': ['author-1']}],
        'books': [
            {
                'id': 'book-1', 'title': 'The Dispossessed', 'publisher_id': 'pub-1',
                'category_id': 'cat-1', 'series_id': 'series-1', 'series_order': 6,
                'author_ids': ['author-1'], 'genre_ids': ['genre-1'], 'topic_ids': ['topic-1'],
                'reading_status': 'completed', 'rating': 5,
            },
            {
                'id': 'book-2', 'title': 'The Left Hand of Darkness', 'publisher_id': 'pub-1',
                'category_id': DEFAULT_CATEGORY_ID, 'series_id': 'series-1', 'series_order': 4,
                'author_ids': ['author-1'],
            },
        ],
    }

def test_import_batch(coordinator, db_session, batch):
    result = coordinator.import_batch(batch)

    assert result.success, result.errors
    assert result.imported == {
        'categories': 1, 'authors': 1, 'publishers': 1, 'genres': 1,
        'topics': 1, 'series': 1, 'books': 2,
    }
    book = db_session.get(Book, 'book-1')
    assert book.series.name == 'Hainish Cycle'
    assert [author.name for author in book.authors] == ['Le Guin']
    assert ImpactAnalyzer(db_session).integrity_check().is_valid

def test_import_twice_is_idempotent(coordinator, db_session, batch):
    coordinator.import_batch(batch)
    second = coordinator.import_batch(batch)

    assert second.success
    assert set(second.imported.values()) == {0}
    assert db_session.query(Book).count() == 2

def test_missing_version_has_no_side_effects(coordinator, db_session, batch):
    del batch['version']
    with pytest.raises(ValidationError):
        coordinator.import_batch(batch)
    assert db_session.query(Author).count() == 0

def test_failed_book_is_collected_and_orphans_cleaned(coordinator, db_session, batch):
    batch['books'] = [dict(batch['books'][0], publisher_id='unknown-publisher')]

    result = coordinator.import_batch(batch)

    assert not result.success
    assert result.imported['books'] == 0
    assert result.errors[0].startswith('Failed to import book "The Dispossessed"')
    assert 'Publisher with id unknown-publisher not found' in result.errors[0]
    assert 'Cleaned up 1 orphan author(s) without books' in result.errors
    assert 'Cleaned up 1 orphan publisher(s) without books' in result.errors
    assert 'Cleaned up 1 orphan series without books' in result.errors
    assert db_session.query(Author).count() == 0
    assert db_session.query(Series).count() == 0
    # Tag entities carry no minimum and stay
    assert db_session.get(Genre, 'genre-1') is not None

def test_series_without_authors_is_skipped(coordinator, db_session, batch):
    batch['series'][0]['author_ids'] = []
    batch['books'] = [dict(book, series_id=None) for book in batch['books']]

    result = coordinator.import_batch(batch)

    assert result.imported['series'] == 0
    assert result.errors == ['Failed to import series "Hainish Cycle": a series needs at least one author']
    assert result.imported['books'] == 2

def test_invalid_row_does_not_stop_the_batch(coordinator, db_session, batch):
    batch['authors'].append({'id': 'author-2', 'name': ''})
    batch['authors'].append({'name': 'No Id'})

    result = coordinator.import_batch(batch)

    assert result.imported['authors'] == 1
    assert len(result.errors) == 2
    assert result.imported['books'] == 2

def test_duplicate_genre_name_fails_in_its_savepoint(coordinator, db_session, batch):
    batch['genres'].append({'id': 'genre-2', 'name': 'Fantasy'})

    result = coordinator.import_batch(batch)

    assert result.imported['genres'] == 1
    assert result.errors[0].startswith('Failed to import genre "Fantasy"')
    assert db_session.get(Genre, 'genre-2') is None
    assert result.imported['books'] == 2

def test_export_then_import_into_empty_library(coordinator, database_url, tmp_path, batch):
    coordinator.import_batch(batch)
    exported = coordinator.export_batch()

    assert exported.version == EXPORT_VERSION
    assert {book['id'] for book in exported.books} == {'book-1', 'book-2'}

    path = tmp_path / 'export.json'
    path.write_text(exported.model_dump_json(indent=2), encoding='utf-8')

    other = Database(f"sqlite:///{tmp_path / 'other.db'}")
    other.init_db()
    session = other.get_session()
    try:
        result = BulkMergeCoordinator(session).import_batch(BulkMergeCoordinator.load_batch(str(path)))
        assert result.success, result.errors
        # Seeded category and genres already exist under the same ids
        assert result.imported['books'] == 2
        assert result.imported['categories'] == 1
        assert result.imported['genres'] == 1
        book = session.get(Book, 'book-1')
        assert book.reading_status == 'completed'
        assert [topic.name for topic in book.topics] == ['Anarchism']
    finally:
        session.close()
        other.engine.dispose()

def test_export_reimport_is_noop(coordinator, shared_library):
    result = coordinator.import_batch(coordinator.export_batch())
    assert result.success
    assert set(result.imported.values()) == {0}

def test_load_batch_rejects_bad_json(tmp_path):
    path = tmp_path / 'broken.json'
    path.write_text('{"version": ', encoding='utf-8')
    with pytest.raises(ValidationError):
        BulkMergeCoordinator.load_batch(str(path))

def test_load_batch_requires_version(tmp_path):
    path = tmp_path / 'old.json'
    path.write_text(json.dumps({'books': []}), encoding='utf-8')
    with pytest.raises(ValidationError):
        BulkMergeCoordinator.load_batch(str(path))

def test_load_batch_missing_file(tmp_path):
    with pytest.raises(ValidationError):
        BulkMergeCoordinator.load_batch(str(tmp_path / 'nowhere.json'))
