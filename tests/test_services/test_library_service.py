# tests/test_services/test_library_service.py
from core.services.library_service import LibraryService

def test_get_stats(db_session, shared_library, make_genre, make_book):
    cozy = make_genre("Cozy")
    make_book("Cozy Read", shared_library['solo_pub'], [shared_library['cy']], genre_ids=[cozy],
              reading_status='completed')

    stats = LibraryService(db_session).get_stats()

    assert stats.totals.books == 4
    assert stats.totals.authors == 3
    assert stats.totals.publishers == 2
    assert stats.totals.series == 1
    assert stats.totals.genres == 11
    assert stats.totals.categories == 1
    assert stats.reading_status == {'unread': 3, 'reading': 0, 'completed': 1}
    assert [(genre.name, genre.book_count) for genre in stats.top_genres] == [("Cozy", 1)]
    assert [(author.name, author.book_count) for author in stats.top_authors][:2] == [("Ann", 2), ("Cy", 2)]
    assert len(stats.recent_books) == 4

def test_stats_on_empty_library(db_session):
    stats = LibraryService(db_session).get_stats()
    assert stats.totals.books == 0
    assert stats.top_authors == []
    assert stats.recent_books == []
    assert stats.recommended_books == []
