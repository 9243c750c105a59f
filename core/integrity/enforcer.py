# core/integrity/enforcer.py
"""Transactional mutations that keep the library's cardinality rules intact.

Every destructive operation first asks the impact analyzer what it would
orphan. Without cascading a non-empty report blocks the operation before any
write; with cascading the orphans are deleted in the same transaction as the
primary change.
"""
from typing import List, Union, Type, TypeVar
import logging
from pydantic import BaseModel, ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from core.exceptions import BlockedByInvariant, ValidationError
from core.integrity.catalog import EntityKind, Rule, relationship
from core.integrity.impact import ImpactAnalyzer
from core.models.book import BookInput, EntityRef
from core.models.entities import SeriesInput
from core.models.integrity import BookImpact, CleanupResult, DeletedEntity, InvariantViolation
from core.sa.models import Book, Series, DEFAULT_CATEGORY_ID
from core.sa.repositories import BookRepository, SeriesRepository
from core.sa.store import EntityStore, display_name

logger = logging.getLogger(__name__)

M = TypeVar('M', bound=BaseModel)


def validate_input(model: Type[M], data: Union[M, dict]) -> M:
    """Coerce raw input into ``model``, reporting every problem as a ValidationError"""
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        errors = [
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        ]
        raise ValidationError(f"Invalid {model.__name__}", errors) from e


class LifecycleEnforcer:
    def __init__(self, session: Session):
        self.session = session
        self.store = EntityStore(session)
        self.analyzer = ImpactAnalyzer(session)
        self.books = BookRepository(session)
        self.series = SeriesRepository(session)

    def _check_references(self, data: BookInput) -> None:
        """Every id the book points at has to exist"""
        references = [(EntityKind.PUBLISHER, data.publisher_id), (EntityKind.CATEGORY, data.category_id)]
        if data.series_id:
            references.append((EntityKind.SERIES, data.series_id))
        references += [(EntityKind.AUTHOR, author_id) for author_id in data.author_ids]
        references += [(EntityKind.GENRE, genre_id) for genre_id in data.genre_ids]
        references += [(EntityKind.TOPIC, topic_id) for topic_id in data.topic_ids]

        missing = [
            f"{kind.value.capitalize()} with id {entity_id} not found"
            for kind, entity_id in references
            if self.store.find(kind, entity_id) is None
        ]
        if missing:
            raise ValidationError("Book references records that do not exist", missing)

    def _block(self, action: str, impact: BookImpact) -> BlockedByInvariant:
        violations = impact.to_violations()
        problems = '; '.join(violation.message for violation in violations)
        logger.warning(f"Blocked {action}: {problems}")
        return BlockedByInvariant(
            f"Cannot {action}: {problems}. Please reassign or delete these entities first.",
            violations
        )

    def _delete_orphans(self, impact: BookImpact) -> List[DeletedEntity]:
        deleted = []
        for kind, refs in (
            (EntityKind.AUTHOR, impact.orphaned_authors),
            (EntityKind.PUBLISHER, [impact.orphaned_publisher] if impact.orphaned_publisher else []),
            (EntityKind.SERIES, [impact.orphaned_series] if impact.orphaned_series else []),
        ):
            for ref in refs:
                self.store.delete(kind, ref.id)
                deleted.append(DeletedEntity(kind=kind, id=ref.id, name=ref.name))
                logger.info(f"Cascade deleted {kind.value} {ref.id} ({ref.name})")
        return deleted

    def create_book(self, data: Union[BookInput, dict]) -> Book:
        """Insert a book with its links after checking that everything it references exists"""
        data = validate_input(BookInput, data)
        with self.store.transaction():
            if data.id and self.store.find(EntityKind.BOOK, data.id) is not None:
                raise ValidationError(f"Book with id {data.id} already exists")
            self._check_references(data)
            book = self.books.create(data)
            logger.info(f"Created book {book.id} ({book.title})")
        return book

    def create_series(self, data: Union[SeriesInput, dict]) -> Series:
        """Insert a series; a series always starts with at least one author"""
        data = validate_input(SeriesInput, data)
        with self.store.transaction():
            missing = [
                f"Author with id {author_id} not found"
                for author_id in data.author_ids
                if self.store.find(EntityKind.AUTHOR, author_id) is None
            ]
            if missing:
                raise ValidationError("Series references authors that do not exist", missing)
            series = self.series.create(data)
            logger.info(f"Created series {series.id} ({series.name})")
        return series

    def delete_book(self, book_id: str, cascade_orphans: bool = False) -> List[DeletedEntity]:
        """Delete a book, optionally taking the entities it alone kept alive with it.

        Args:
            book_id: The book to delete
            cascade_orphans: Also delete authors, publisher and series left with no books

        Returns:
            Every deleted record, the book first

        Raises:
            NotFoundError: if the book does not exist
            BlockedByInvariant: if the deletion would orphan something and cascading is off,
                or would leave a series that keeps other books without any author
        """
        with self.store.transaction():
            book = self.store.get(EntityKind.BOOK, book_id)
            title = book.title
            impact = self.analyzer.check_delete_impact(book_id)
            if impact.blocks_cascade or (impact.has_impact and not cascade_orphans):
                raise self._block(f'delete book "{title}"', impact)

            self.store.delete(EntityKind.BOOK, book_id)
            deleted = [DeletedEntity(kind=EntityKind.BOOK, id=book_id, name=title)]
            if cascade_orphans:
                deleted += self._delete_orphans(impact)

        logger.info(f"Successfully deleted: {', '.join(str(entity) for entity in deleted)}")
        return deleted

    def update_book(
        self,
        book_id: str,
        new_state: Union[BookInput, dict],
        cascade_orphans: bool = False
    ) -> Book:
        """Replace a book's fields and links with ``new_state``.

        Raises:
            ValidationError: if the new state is malformed or references missing records
            NotFoundError: if the book does not exist
            BlockedByInvariant: if the edit would orphan something and cascading is off,
                or would leave a series that keeps other books without any author
        """
        data = validate_input(BookInput, new_state)
        with self.store.transaction():
            book = self.store.get(EntityKind.BOOK, book_id)
            self._check_references(data)
            impact = self.analyzer.check_update_impact(book_id, data)
            if impact.blocks_cascade or (impact.has_impact and not cascade_orphans):
                raise self._block(f'update book "{book.title}"', impact)

            book = self.books.update(book_id, data)
            if cascade_orphans and impact.has_impact:
                self._delete_orphans(impact)
            logger.info(f"Updated book {book_id} ({book.title})")
        return book

    def _refuse_while_linked(self, kind: EntityKind, entity, hint: str) -> None:
        rel = relationship(kind, EntityKind.BOOK)
        linked_count = self.store.count_links(rel, entity.id)
        if linked_count > 0:
            name = display_name(entity)
            logger.warning(f"Blocked delete of {kind.value} {entity.id}: {linked_count} linked book(s)")
            raise BlockedByInvariant(
                f"Cannot delete {kind.value}: {hint.format(count=linked_count)}",
                [InvariantViolation(
                    rule=Rule.BOOKS_STILL_LINKED,
                    entity_kind=kind,
                    entity_id=entity.id,
                    entity_name=name,
                    message=f'{kind.value.capitalize()} "{name}" is still linked to {linked_count} book(s)',
                )],
                linked_count=linked_count
            )

    def _delete_single(self, kind: EntityKind, entity) -> DeletedEntity:
        deleted = DeletedEntity(kind=kind, id=entity.id, name=display_name(entity))
        self.store.delete(kind, entity.id)
        logger.info(f"Deleted {kind.value} {entity.id} ({deleted.name})")
        return deleted

    def delete_author(self, author_id: str) -> DeletedEntity:
        """Delete an author that has no books and is not the only author of any series"""
        with self.store.transaction():
            author = self.store.get(EntityKind.AUTHOR, author_id)
            self._refuse_while_linked(
                EntityKind.AUTHOR, author,
                "they have {count} book(s). Remove the author from all books first."
            )
            impact = self.analyzer.check_author_delete_impact(author_id)
            if impact.has_impact:
                names = ', '.join(series.name for series in impact.series_with_no_authors)
                logger.warning(f"Blocked delete of author {author_id}: sole author of {names}")
                raise BlockedByInvariant(
                    f"Cannot delete author: they are the only author of {names}. "
                    "Add another author to the series first.",
                    impact.to_violations(),
                    linked_count=0
                )
            return self._delete_single(EntityKind.AUTHOR, author)

    def delete_publisher(self, publisher_id: str) -> DeletedEntity:
        with self.store.transaction():
            publisher = self.store.get(EntityKind.PUBLISHER, publisher_id)
            self._refuse_while_linked(
                EntityKind.PUBLISHER, publisher,
                "they have {count} book(s). Reassign books to another publisher first."
            )
            return self._delete_single(EntityKind.PUBLISHER, publisher)

    def delete_series(self, series_id: str) -> DeletedEntity:
        with self.store.transaction():
            series = self.store.get(EntityKind.SERIES, series_id)
            self._refuse_while_linked(
                EntityKind.SERIES, series,
                "it has {count} book(s). Remove books from the series first."
            )
            return self._delete_single(EntityKind.SERIES, series)

    def delete_genre(self, genre_id: str) -> DeletedEntity:
        with self.store.transaction():
            genre = self.store.get(EntityKind.GENRE, genre_id)
            self._refuse_while_linked(EntityKind.GENRE, genre, "it has {count} book(s) associated with it")
            return self._delete_single(EntityKind.GENRE, genre)

    def delete_topic(self, topic_id: str) -> DeletedEntity:
        with self.store.transaction():
            topic = self.store.get(EntityKind.TOPIC, topic_id)
            self._refuse_while_linked(EntityKind.TOPIC, topic, "it has {count} book(s) associated with it")
            return self._delete_single(EntityKind.TOPIC, topic)

    def delete_category(self, category_id: str) -> DeletedEntity:
        with self.store.transaction():
            category = self.store.get(EntityKind.CATEGORY, category_id)
            self._refuse_while_linked(EntityKind.CATEGORY, category, "it has {count} book(s) associated with it")
            if category_id == DEFAULT_CATEGORY_ID:
                raise ValidationError("Cannot delete the default category")
            return self._delete_single(EntityKind.CATEGORY, category)

    def cleanup_orphans(self) -> CleanupResult:
        """Delete every author, publisher and series with no books, until none are left.

        An orphan author who is the last author of a series that still has books
        is kept, so that series never loses its whole author set.
        """
        result = CleanupResult()
        collected = {
            EntityKind.AUTHOR: result.deleted_authors,
            EntityKind.PUBLISHER: result.deleted_publishers,
            EntityKind.SERIES: result.deleted_series,
        }
        kept_authors = set()
        with self.store.transaction():
            while True:
                orphans = self.analyzer.find_orphans()
                authors = [author for author in orphans[EntityKind.AUTHOR] if author.id not in kept_authors]
                for series in self.analyzer.series_left_without_authors(
                    [author.id for author in authors],
                    [series.id for series in orphans[EntityKind.SERIES]],
                ):
                    kept_authors.update(self.series.get_author_ids(series.id))
                    logger.warning(f'Keeping the orphan author(s) of series "{series.name}" so it keeps an author')
                orphans[EntityKind.AUTHOR] = [author for author in authors if author.id not in kept_authors]
                if not any(orphans.values()):
                    break
                for kind, entities in orphans.items():
                    for entity in entities:
                        collected[kind].append(EntityRef(id=entity.id, name=entity.name))
                        self.store.delete(kind, entity.id)
                        logger.info(f"Deleted orphan {kind.value} {entity.id} ({entity.name})")

        if result.total:
            logger.info(f"Orphan cleanup removed {result.total} record(s)")
        return result
