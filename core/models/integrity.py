# core/models/integrity.py

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, computed_field
from core.integrity.catalog import EntityKind, Rule
from core.models.book import EntityRef


class InvariantViolation(BaseModel):
    """One entity put at risk by a proposed mutation"""
    rule: Rule
    entity_kind: EntityKind
    entity_id: str
    entity_name: str
    message: str


class BookImpact(BaseModel):
    """Entities a book deletion or edit would leave without any book.

    ``series_without_authors`` lists series that keep other books but would lose
    their last author if the orphaned authors were removed. Cascading cannot
    resolve those, so they block the operation either way.
    """
    orphaned_authors: List[EntityRef] = []
    orphaned_publisher: Optional[EntityRef] = None
    orphaned_series: Optional[EntityRef] = None
    series_without_authors: List[EntityRef] = []

    @computed_field
    @property
    def has_impact(self) -> bool:
        return (
            bool(self.orphaned_authors) or self.orphaned_publisher is not None
            or self.orphaned_series is not None or bool(self.series_without_authors)
        )

    @property
    def blocks_cascade(self) -> bool:
        return bool(self.series_without_authors)

    def to_violations(self) -> List[InvariantViolation]:
        violations = [
            InvariantViolation(
                rule=Rule.AUTHOR_REQUIRES_BOOK,
                entity_kind=EntityKind.AUTHOR,
                entity_id=author.id,
                entity_name=author.name,
                message=f'Author "{author.name}" would have no books',
            )
            for author in self.orphaned_authors
        ]
        if self.orphaned_publisher:
            violations.append(InvariantViolation(
                rule=Rule.PUBLISHER_REQUIRES_BOOK,
                entity_kind=EntityKind.PUBLISHER,
                entity_id=self.orphaned_publisher.id,
                entity_name=self.orphaned_publisher.name,
                message=f'Publisher "{self.orphaned_publisher.name}" would have no books',
            ))
        if self.orphaned_series:
            violations.append(InvariantViolation(
                rule=Rule.SERIES_REQUIRES_BOOK,
                entity_kind=EntityKind.SERIES,
                entity_id=self.orphaned_series.id,
                entity_name=self.orphaned_series.name,
                message=f'Series "{self.orphaned_series.name}" would have no books',
            ))
        violations += [
            InvariantViolation(
                rule=Rule.SERIES_REQUIRES_AUTHOR,
                entity_kind=EntityKind.SERIES,
                entity_id=series.id,
                entity_name=series.name,
                message=f'Series "{series.name}" would have no authors',
            )
            for series in self.series_without_authors
        ]
        return violations


class AuthorDeleteImpact(BaseModel):
    series_with_no_authors: List[EntityRef] = []

    @computed_field
    @property
    def has_impact(self) -> bool:
        return bool(self.series_with_no_authors)

    def to_violations(self) -> List[InvariantViolation]:
        return [
            InvariantViolation(
                rule=Rule.SERIES_REQUIRES_AUTHOR,
                entity_kind=EntityKind.SERIES,
                entity_id=series.id,
                entity_name=series.name,
                message=f'Series "{series.name}" would have no authors',
            )
            for series in self.series_with_no_authors
        ]


class ViolationType(str, Enum):
    ORPHAN_AUTHOR = "orphan-author"
    ORPHAN_PUBLISHER = "orphan-publisher"
    ORPHAN_SERIES = "orphan-series"
    SERIES_WITHOUT_AUTHORS = "series-without-authors"
    BOOK_WITHOUT_PUBLISHER = "book-without-publisher"
    BOOK_WITHOUT_CATEGORY = "book-without-category"


class IntegrityViolation(BaseModel):
    type: ViolationType
    entity_kind: EntityKind
    entity_id: str
    entity_name: str
    message: str


class IntegritySummary(BaseModel):
    orphan_authors: int = 0
    orphan_publishers: int = 0
    orphan_series: int = 0
    series_without_authors: int = 0
    books_without_publisher: int = 0
    books_without_category: int = 0


class IntegrityCheckResult(BaseModel):
    violations: List[IntegrityViolation] = []
    summary: IntegritySummary = IntegritySummary()

    @computed_field
    @property
    def is_valid(self) -> bool:
        return not self.violations


class DeletedEntity(BaseModel):
    kind: EntityKind
    id: str
    name: str

    def __str__(self) -> str:
        return f"{self.kind.value.capitalize()}: {self.name}"


class CleanupResult(BaseModel):
    deleted_authors: List[EntityRef] = []
    deleted_publishers: List[EntityRef] = []
    deleted_series: List[EntityRef] = []

    @computed_field
    @property
    def total(self) -> int:
        return len(self.deleted_authors) + len(self.deleted_publishers) + len(self.deleted_series)
