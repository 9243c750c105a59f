# core/services/bulk_merge.py
"""Identity-keyed import and export of the whole library.

Importing is a merge: a record whose id already exists is left alone, any
other record is inserted with the id it was exported with. Running the same
batch twice therefore changes nothing the second time.
"""
from datetime import datetime, UTC
from typing import Any, Callable, Dict, Type, Union
import json
import logging
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import LibraryError, ValidationError
from core.integrity.catalog import EntityKind
from core.integrity.enforcer import LifecycleEnforcer, validate_input
from core.models.book import BookInput
from core.models.entities import AuthorInput, PublisherInput, SeriesInput, GenreInput, TopicInput, CategoryInput
from core.models.transfer import ImportBatch, ImportResult, EXPORT_VERSION
from core.sa.repositories import (
    BookRepository, AuthorRepository, PublisherRepository, SeriesRepository,
    GenreRepository, TopicRepository, CategoryRepository
)
from core.sa.store import EntityStore

logger = logging.getLogger(__name__)


def _columns(entity, model: Type[BaseModel], skip=()) -> Dict[str, Any]:
    return {name: getattr(entity, name) for name in model.model_fields if name not in skip}


def _label(row: Any) -> str:
    if isinstance(row, dict):
        return str(row.get('name') or row.get('title') or row.get('id') or '?')
    return repr(row)


def _describe(error: Exception) -> str:
    if isinstance(error, ValidationError) and error.errors:
        return f"{error.message}: {'; '.join(error.errors)}"
    return str(error)


class BulkMergeCoordinator:
    def __init__(self, session: Session):
        self.session = session
        self.store = EntityStore(session)
        self.enforcer = LifecycleEnforcer(session)
        self.books = BookRepository(session)
        self.authors = AuthorRepository(session)
        self.publishers = PublisherRepository(session)
        self.series = SeriesRepository(session)
        self.genres = GenreRepository(session)
        self.topics = TopicRepository(session)
        self.categories = CategoryRepository(session)

    def _groups(self):
        # Dependency order: everything a book or series points at comes first
        return (
            ('categories', EntityKind.CATEGORY, CategoryInput, self.categories.create),
            ('authors', EntityKind.AUTHOR, AuthorInput, self.authors.create),
            ('publishers', EntityKind.PUBLISHER, PublisherInput, self.publishers.create),
            ('genres', EntityKind.GENRE, GenreInput, self.genres.create),
            ('topics', EntityKind.TOPIC, TopicInput, self.topics.create),
            ('series', EntityKind.SERIES, SeriesInput, self.enforcer.create_series),
            ('books', EntityKind.BOOK, BookInput, self.enforcer.create_book),
        )

    @staticmethod
    def load_batch(path: str) -> ImportBatch:
        """Read and validate an export file.

        Raises:
            ValidationError: if the file cannot be read or is not a valid batch
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ValidationError(f"Failed to parse import file: {e}") from e
        return validate_input(ImportBatch, raw)

    def _import_row(
        self,
        group: str,
        kind: EntityKind,
        input_model: Type[BaseModel],
        create: Callable,
        row: Any,
        result: ImportResult
    ) -> None:
        label = _label(row)
        try:
            if kind == EntityKind.SERIES and isinstance(row, dict) and not row.get('author_ids'):
                raise ValidationError("a series needs at least one author")
            data = validate_input(input_model, row)
            if not data.id:
                raise ValidationError("record has no id")
            if self.store.find(kind, data.id) is not None:
                return
            with self.session.begin_nested():
                create(data)
            result.imported[group] += 1
        except (LibraryError, SQLAlchemyError) as e:
            message = f'Failed to import {kind.value} "{label}": {_describe(e)}'
            logger.warning(message)
            result.errors.append(message)

    def import_batch(self, records: Union[ImportBatch, dict]) -> ImportResult:
        """Merge a batch into the library in a single transaction.

        Each row gets its own savepoint, so a failing row is reported in
        ``errors`` and the rest of the batch still goes in. Orphans left by
        failed rows are cleaned up before the transaction commits.

        Raises:
            ValidationError: if the batch itself is malformed (nothing is written)
        """
        batch = validate_input(ImportBatch, records)
        result = ImportResult()

        with self.store.transaction():
            for group, kind, input_model, create in self._groups():
                for row in getattr(batch, group):
                    self._import_row(group, kind, input_model, create, row, result)

            cleanup = self.enforcer.cleanup_orphans()
            for refs, label in (
                (cleanup.deleted_authors, 'author(s)'),
                (cleanup.deleted_publishers, 'publisher(s)'),
                (cleanup.deleted_series, 'series'),
            ):
                if refs:
                    result.errors.append(f"Cleaned up {len(refs)} orphan {label} without books")

        logger.info(f"Import finished: {result.imported}, {len(result.errors)} error(s)")
        return result

    def export_batch(self) -> ImportBatch:
        """Snapshot the whole library in the format ``import_batch`` reads"""
        with self.store.transaction():
            batch = ImportBatch(
                version=EXPORT_VERSION,
                exported_at=datetime.now(UTC),
                categories=[_columns(c, CategoryInput) for c in self.categories.get_all()],
                authors=[_columns(a, AuthorInput) for a in self.authors.get_all()],
                publishers=[_columns(p, PublisherInput) for p in self.publishers.get_all()],
                genres=[_columns(g, GenreInput) for g in self.genres.get_all()],
                topics=[_columns(t, TopicInput) for t in self.topics.get_all()],
                series=[
                    {**_columns(s, SeriesInput, skip={'author_ids'}), 'author_ids': self.series.get_author_ids(s.id)}
                    for s in self.series.get_all()
                ],
                books=[
                    {
                        **_columns(b, BookInput, skip={'author_ids', 'genre_ids', 'topic_ids'}),
                        'author_ids': [author.id for author in b.authors],
                        'genre_ids': [genre.id for genre in b.genres],
                        'topic_ids': [topic.id for topic in b.topics],
                    }
                    for b in self.books.get_all()
                ],
            )
        return batch
