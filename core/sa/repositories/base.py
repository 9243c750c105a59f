# core/sa/repositories/base.py
from typing import Generic, TypeVar, Type, Optional, List, Tuple, Set
from pydantic import BaseModel
from sqlalchemy import func
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError
from core.integrity.catalog import EntityKind, relationship
from core.sa.models import Base
from core.sa.store import LINK_MODELS

T = TypeVar('T', bound=Base)


class BaseRepository(Generic[T]):
    """Shared lookups for the named entity tables"""
    model: Type[T]
    kind: EntityKind
    # Input fields that are stored as link rows rather than columns
    link_fields: Set[str] = set()

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, entity_id: str) -> Optional[T]:
        return self.session.get(self.model, entity_id)

    def get_all(self) -> List[T]:
        return self.session.query(self.model).order_by(self.model.name).all()

    def exists(self, entity_id: str) -> bool:
        return self.get_by_id(entity_id) is not None

    def count(self) -> int:
        return self.session.query(func.count(self.model.id)).scalar()

    def find_by_name(self, name: str) -> Optional[T]:
        """Get a record by name, ignoring case and surrounding whitespace"""
        return (
            self.session.query(self.model)
            .filter(func.lower(self.model.name) == name.strip().lower())
            .first()
        )

    def search(self, query: str, limit: int = 20) -> List[T]:
        """Search records by name"""
        base_query = self.session.query(self.model)
        if query:  # Only apply filter if query is not empty
            base_query = base_query.filter(self.model.name.ilike(f"%{query}%"))
        return base_query.order_by(self.model.name).limit(limit).all()

    def list_with_book_counts(self) -> List[Tuple[T, int]]:
        """Every record with the number of books linked to it, busiest first"""
        rel = relationship(self.kind, EntityKind.BOOK)
        link_model = LINK_MODELS[rel.link_table]
        link_column = getattr(link_model, rel.link_column)
        book_count = func.count(link_column).label('book_count')
        return (
            self.session.query(self.model, book_count)
            .outerjoin(link_model, link_column == self.model.id)
            .group_by(self.model.id)
            .order_by(book_count.desc(), self.model.name)
            .all()
        )

    def create(self, data: BaseModel) -> T:
        """Insert a record from validated input, keeping a caller-supplied id"""
        values = data.model_dump(exclude=self.link_fields, exclude_none=True)
        entity = self.model(**values)
        self.session.add(entity)
        self.session.flush()
        return entity

    def update(self, entity_id: str, data: BaseModel) -> T:
        entity = self.get_by_id(entity_id)
        if entity is None:
            raise NotFoundError(self.kind.value, entity_id)
        for field, value in data.model_dump(exclude=self.link_fields | {'id'}).items():
            setattr(entity, field, value)
        self.session.flush()
        return entity
