# core/sa/store.py
"""Generic access to records and link rows, keyed by the relationship catalog.

The impact analyzer and lifecycle enforcer only ever talk to the store in
terms of ``EntityKind`` and ``Relationship``; the mapping from those to ORM
classes and columns lives here.
"""
from typing import Dict, List, Optional, Type
from sqlalchemy import select, delete, func, exists
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError
from core.integrity.catalog import EntityKind, Relationship, RELATIONSHIPS
from core.sa.database import transaction
from core.sa.models import (
    Base, Book, Author, Publisher, Series, Genre, Topic, Category,
    BookAuthor, BookGenre, BookTopic, SeriesAuthor
)

MODELS: Dict[EntityKind, Type[Base]] = {
    EntityKind.BOOK: Book,
    EntityKind.AUTHOR: Author,
    EntityKind.PUBLISHER: Publisher,
    EntityKind.SERIES: Series,
    EntityKind.GENRE: Genre,
    EntityKind.TOPIC: Topic,
    EntityKind.CATEGORY: Category,
}

LINK_MODELS: Dict[str, Type[Base]] = {
    'books': Book,
    'book_authors': BookAuthor,
    'book_genres': BookGenre,
    'book_topics': BookTopic,
    'series_authors': SeriesAuthor,
}


def display_name(entity: Base) -> str:
    """Name shown to users for any record (books are known by their title)"""
    if isinstance(entity, Book):
        return entity.title
    return entity.name


def _label_column(model: Type[Base]):
    return model.title if model is Book else model.name


class EntityStore:
    def __init__(self, session: Session):
        self.session = session

    def transaction(self):
        """Unit of work on the store's session (joins an already open one)"""
        return transaction(self.session)

    def find(self, kind: EntityKind, entity_id: str) -> Optional[Base]:
        return self.session.get(MODELS[EntityKind(kind)], entity_id)

    def get(self, kind: EntityKind, entity_id: str) -> Base:
        """Get a record by id, raising NotFoundError when it does not exist"""
        entity = self.find(kind, entity_id)
        if entity is None:
            raise NotFoundError(EntityKind(kind).value, entity_id)
        return entity

    def count_links(self, rel: Relationship, entity_id: str) -> int:
        """Count the link rows that point at ``entity_id`` through ``rel``"""
        self.session.flush()
        link_model = LINK_MODELS[rel.link_table]
        column = getattr(link_model, rel.link_column)
        return self.session.execute(
            select(func.count()).select_from(link_model).where(column == entity_id)
        ).scalar_one()

    def list_unlinked(self, rel: Relationship) -> List[Base]:
        """Owners of ``rel`` that have no link row at all (the orphan scan)"""
        self.session.flush()
        model = MODELS[rel.owner]
        link_model = LINK_MODELS[rel.link_table]
        column = getattr(link_model, rel.link_column)
        stmt = (
            select(model)
            .where(~exists().where(column == model.id))
            .order_by(_label_column(model), model.id)
        )
        return list(self.session.scalars(stmt))

    def list_unresolved(self, rel: Relationship) -> List[Base]:
        """Owners whose foreign key for ``rel`` does not resolve to an existing target"""
        self.session.flush()
        model = MODELS[rel.owner]
        target = MODELS[rel.target]
        column = getattr(model, rel.link_column)
        stmt = (
            select(model)
            .where(~exists().where(target.id == column))
            .order_by(_label_column(model), model.id)
        )
        return list(self.session.scalars(stmt))

    def delete(self, kind: EntityKind, entity_id: str) -> int:
        """Delete a record together with every junction row that names it.

        Returns:
            Number of records deleted (0 or 1)
        """
        self.session.flush()
        kind = EntityKind(kind)
        for rel in RELATIONSHIPS:
            if rel.is_junction and rel.owner == kind:
                link_model = LINK_MODELS[rel.link_table]
                self.session.execute(
                    delete(link_model).where(getattr(link_model, rel.link_column) == entity_id)
                )
        model = MODELS[kind]
        result = self.session.execute(delete(model).where(model.id == entity_id))
        return result.rowcount
