# core/integrity/impact.py
"""Read-only previews of what a destructive operation would leave behind.

Every count is taken from the current state of the session, with the
candidate book still present, so an entity linked to nothing but that book
shows a count of exactly one.
"""
from typing import Dict, Iterable, List, Optional
import logging
from sqlalchemy.orm import Session

from core.integrity.catalog import EntityKind, relationship, required_relationships
from core.models.book import BookInput, EntityRef
from core.models.integrity import (
    BookImpact, AuthorDeleteImpact, IntegrityCheckResult, IntegrityViolation,
    IntegritySummary, ViolationType
)
from core.sa.models import Base
from core.sa.repositories import BookRepository, SeriesRepository
from core.sa.store import EntityStore, display_name

logger = logging.getLogger(__name__)

AUTHOR_BOOKS = relationship(EntityKind.AUTHOR, EntityKind.BOOK)
PUBLISHER_BOOKS = relationship(EntityKind.PUBLISHER, EntityKind.BOOK)
SERIES_BOOKS = relationship(EntityKind.SERIES, EntityKind.BOOK)
SERIES_AUTHORS = relationship(EntityKind.SERIES, EntityKind.AUTHOR)

_ORPHAN_TYPES = {
    EntityKind.AUTHOR: (ViolationType.ORPHAN_AUTHOR, 'orphan_authors', 'Author "{}" has no books'),
    EntityKind.PUBLISHER: (ViolationType.ORPHAN_PUBLISHER, 'orphan_publishers', 'Publisher "{}" has no books'),
    EntityKind.SERIES: (ViolationType.ORPHAN_SERIES, 'orphan_series', 'Series "{}" has no books'),
}


class ImpactAnalyzer:
    def __init__(self, session: Session):
        self.session = session
        self.store = EntityStore(session)
        self.books = BookRepository(session)
        self.series = SeriesRepository(session)

    def _ref(self, kind: EntityKind, entity_id: str) -> EntityRef:
        entity = self.store.find(kind, entity_id)
        return EntityRef(id=entity_id, name=display_name(entity) if entity is not None else entity_id)

    def _sole_link(self, rel, entity_id: Optional[str]) -> bool:
        return entity_id is not None and self.store.count_links(rel, entity_id) == 1

    def series_left_without_authors(self, author_ids: Iterable[str], removed_series_ids: Iterable[str] = ()) -> List[EntityRef]:
        """Series outside ``removed_series_ids`` whose every author is among ``author_ids``"""
        leaving = set(author_ids)
        removed = set(removed_series_ids)
        affected = {}
        for author_id in leaving:
            for series in self.series.get_series_by_author(author_id):
                if series.id in removed:
                    continue
                if set(self.series.get_author_ids(series.id)) <= leaving:
                    affected[series.id] = EntityRef.model_validate(series)
        return sorted(affected.values(), key=lambda ref: ref.name)

    def _stranded_series(self, orphaned_authors: List[EntityRef], orphaned_series: Optional[EntityRef]) -> List[EntityRef]:
        return self.series_left_without_authors(
            [author.id for author in orphaned_authors],
            [orphaned_series.id] if orphaned_series is not None else [],
        )

    def check_delete_impact(self, book_id: str) -> BookImpact:
        """Authors, publisher and series that deleting the book would leave with no books.

        Also lists the series whose last author is among those orphaned authors
        while the series itself still has other books.

        Raises:
            NotFoundError: if the book does not exist
        """
        book = self.store.get(EntityKind.BOOK, book_id)
        orphaned_authors = [
            self._ref(EntityKind.AUTHOR, author_id)
            for author_id in self.books.get_author_ids(book_id)
            if self._sole_link(AUTHOR_BOOKS, author_id)
        ]
        orphaned_series = (
            self._ref(EntityKind.SERIES, book.series_id)
            if self._sole_link(SERIES_BOOKS, book.series_id) else None
        )
        impact = BookImpact(
            orphaned_authors=sorted(orphaned_authors, key=lambda ref: ref.name),
            orphaned_publisher=(
                self._ref(EntityKind.PUBLISHER, book.publisher_id)
                if self._sole_link(PUBLISHER_BOOKS, book.publisher_id) else None
            ),
            orphaned_series=orphaned_series,
            series_without_authors=self._stranded_series(orphaned_authors, orphaned_series),
        )
        logger.debug(f"Delete impact for book {book_id}: {impact.model_dump()}")
        return impact

    def check_update_impact(self, book_id: str, new_state: BookInput) -> BookImpact:
        """Entities an edit would orphan by dropping them from the book.

        Only links the edit actually removes are considered: authors absent from
        the proposed author list, and the publisher or series when it changes.
        """
        book = self.store.get(EntityKind.BOOK, book_id)
        proposed_authors = set(new_state.author_ids)
        orphaned_authors = [
            self._ref(EntityKind.AUTHOR, author_id)
            for author_id in self.books.get_author_ids(book_id)
            if author_id not in proposed_authors and self._sole_link(AUTHOR_BOOKS, author_id)
        ]

        orphaned_publisher = None
        if new_state.publisher_id != book.publisher_id and self._sole_link(PUBLISHER_BOOKS, book.publisher_id):
            orphaned_publisher = self._ref(EntityKind.PUBLISHER, book.publisher_id)

        orphaned_series = None
        if new_state.series_id != book.series_id and self._sole_link(SERIES_BOOKS, book.series_id):
            orphaned_series = self._ref(EntityKind.SERIES, book.series_id)

        return BookImpact(
            orphaned_authors=sorted(orphaned_authors, key=lambda ref: ref.name),
            orphaned_publisher=orphaned_publisher,
            orphaned_series=orphaned_series,
            series_without_authors=self._stranded_series(orphaned_authors, orphaned_series),
        )

    def check_author_delete_impact(self, author_id: str) -> AuthorDeleteImpact:
        """Series that would be left without any author, whatever the author's book count"""
        self.store.get(EntityKind.AUTHOR, author_id)
        return AuthorDeleteImpact(series_with_no_authors=[
            EntityRef.model_validate(series)
            for series in self.series.get_series_by_author(author_id)
            if self._sole_link(SERIES_AUTHORS, series.id)
        ])

    def find_orphans(self) -> Dict[EntityKind, List[Base]]:
        """Authors, publishers and series that currently have no book at all"""
        return {
            rel.owner: self.store.list_unlinked(rel)
            for rel in required_relationships()
            if rel.target == EntityKind.BOOK
        }

    def integrity_check(self) -> IntegrityCheckResult:
        """Scan the whole library for broken cardinality rules without changing anything"""
        violations: List[IntegrityViolation] = []
        summary = IntegritySummary()

        for kind, orphans in self.find_orphans().items():
            violation_type, counter, message = _ORPHAN_TYPES[kind]
            setattr(summary, counter, len(orphans))
            for entity in orphans:
                violations.append(IntegrityViolation(
                    type=violation_type,
                    entity_kind=kind,
                    entity_id=entity.id,
                    entity_name=entity.name,
                    message=message.format(entity.name),
                ))

        authorless = self.store.list_unlinked(SERIES_AUTHORS)
        summary.series_without_authors = len(authorless)
        for series in authorless:
            violations.append(IntegrityViolation(
                type=ViolationType.SERIES_WITHOUT_AUTHORS,
                entity_kind=EntityKind.SERIES,
                entity_id=series.id,
                entity_name=series.name,
                message=f'Series "{series.name}" has no authors',
            ))

        for target, violation_type, counter in (
            (EntityKind.PUBLISHER, ViolationType.BOOK_WITHOUT_PUBLISHER, 'books_without_publisher'),
            (EntityKind.CATEGORY, ViolationType.BOOK_WITHOUT_CATEGORY, 'books_without_category'),
        ):
            books = self.store.list_unresolved(relationship(EntityKind.BOOK, target))
            setattr(summary, counter, len(books))
            for book in books:
                violations.append(IntegrityViolation(
                    type=violation_type,
                    entity_kind=EntityKind.BOOK,
                    entity_id=book.id,
                    entity_name=book.title,
                    message=f'Book "{book.title}" has no {target.value}',
                ))

        result = IntegrityCheckResult(violations=violations, summary=summary)
        if not result.is_valid:
            logger.warning(f"Integrity check found {len(violations)} violation(s)")
        return result
