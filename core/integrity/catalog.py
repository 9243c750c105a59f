# core/integrity/catalog.py
"""Static declaration of every relationship between library entities.

Each relationship is read from the point of view of its owner: it states how
many ``target`` records the owner must be linked to, and where those links
live (a junction table, or the foreign key column on the referencing table).
The impact analyzer and the orphan sweep are driven entirely by the
``required-min-one`` entries of this table.
"""
from enum import Enum
from typing import NamedTuple, List, Optional, Dict, Tuple


class EntityKind(str, Enum):
    BOOK = "book"
    AUTHOR = "author"
    PUBLISHER = "publisher"
    SERIES = "series"
    GENRE = "genre"
    TOPIC = "topic"
    CATEGORY = "category"


class Cardinality(str, Enum):
    REQUIRED_EXACTLY_ONE = "required-exactly-one"
    REQUIRED_MIN_ONE = "required-min-one"
    OPTIONAL_ONE = "optional-one"
    OPTIONAL_MANY = "optional-many"


class Rule(str, Enum):
    AUTHOR_REQUIRES_BOOK = "author-requires-book"
    PUBLISHER_REQUIRES_BOOK = "publisher-requires-book"
    SERIES_REQUIRES_BOOK = "series-requires-book"
    SERIES_REQUIRES_AUTHOR = "series-requires-author"
    BOOK_REQUIRES_PUBLISHER = "book-requires-publisher"
    BOOK_REQUIRES_CATEGORY = "book-requires-category"
    # Direct deletes of a dependent entity are refused while books still point at it
    BOOKS_STILL_LINKED = "books-still-linked"


class Relationship(NamedTuple):
    owner: EntityKind
    target: EntityKind
    cardinality: Cardinality
    link_table: str
    link_column: str
    rule: Optional[Rule] = None

    @property
    def is_junction(self) -> bool:
        return self.link_table in JUNCTION_TABLES


JUNCTION_TABLES = frozenset({'book_authors', 'book_genres', 'book_topics', 'series_authors'})

RELATIONSHIPS: Tuple[Relationship, ...] = (
    # Book side: what a book points at
    Relationship(EntityKind.BOOK, EntityKind.PUBLISHER, Cardinality.REQUIRED_EXACTLY_ONE,
                 'books', 'publisher_id', Rule.BOOK_REQUIRES_PUBLISHER),
    Relationship(EntityKind.BOOK, EntityKind.CATEGORY, Cardinality.REQUIRED_EXACTLY_ONE,
                 'books', 'category_id', Rule.BOOK_REQUIRES_CATEGORY),
    Relationship(EntityKind.BOOK, EntityKind.SERIES, Cardinality.OPTIONAL_ONE, 'books', 'series_id'),
    Relationship(EntityKind.BOOK, EntityKind.AUTHOR, Cardinality.OPTIONAL_MANY, 'book_authors', 'book_id'),
    Relationship(EntityKind.BOOK, EntityKind.GENRE, Cardinality.OPTIONAL_MANY, 'book_genres', 'book_id'),
    Relationship(EntityKind.BOOK, EntityKind.TOPIC, Cardinality.OPTIONAL_MANY, 'book_topics', 'book_id'),

    # Dependent entities: what must keep pointing back at them
    Relationship(EntityKind.AUTHOR, EntityKind.BOOK, Cardinality.REQUIRED_MIN_ONE,
                 'book_authors', 'author_id', Rule.AUTHOR_REQUIRES_BOOK),
    Relationship(EntityKind.AUTHOR, EntityKind.SERIES, Cardinality.OPTIONAL_MANY, 'series_authors', 'author_id'),
    Relationship(EntityKind.PUBLISHER, EntityKind.BOOK, Cardinality.REQUIRED_MIN_ONE,
                 'books', 'publisher_id', Rule.PUBLISHER_REQUIRES_BOOK),
    Relationship(EntityKind.SERIES, EntityKind.BOOK, Cardinality.REQUIRED_MIN_ONE,
                 'books', 'series_id', Rule.SERIES_REQUIRES_BOOK),
    Relationship(EntityKind.SERIES, EntityKind.AUTHOR, Cardinality.REQUIRED_MIN_ONE,
                 'series_authors', 'series_id', Rule.SERIES_REQUIRES_AUTHOR),

    # Tag entities carry no minimum
    Relationship(EntityKind.GENRE, EntityKind.BOOK, Cardinality.OPTIONAL_MANY, 'book_genres', 'genre_id'),
    Relationship(EntityKind.TOPIC, EntityKind.BOOK, Cardinality.OPTIONAL_MANY, 'book_topics', 'topic_id'),
    Relationship(EntityKind.CATEGORY, EntityKind.BOOK, Cardinality.OPTIONAL_MANY, 'books', 'category_id'),
)

_BY_PAIR: Dict[Tuple[EntityKind, EntityKind], Relationship] = {
    (rel.owner, rel.target): rel for rel in RELATIONSHIPS
}


def relationship(owner: EntityKind, target: EntityKind) -> Relationship:
    """Look up the declared relationship between two kinds"""
    try:
        return _BY_PAIR[(EntityKind(owner), EntityKind(target))]
    except KeyError:
        raise KeyError(f"No relationship declared from {owner} to {target}") from None


def required_relationships(kind: Optional[EntityKind] = None) -> List[Relationship]:
    """Relationships an entity must keep at least one link for.

    Args:
        kind: Restrict to relationships owned by this kind

    Returns:
        The ``required-min-one`` relationships, in declaration order
    """
    return [
        rel for rel in RELATIONSHIPS
        if rel.cardinality == Cardinality.REQUIRED_MIN_ONE and (kind is None or rel.owner == kind)
    ]


def minimum_satisfied(kind: EntityKind, linked_count: int, via: EntityKind = EntityKind.BOOK) -> bool:
    """Whether ``linked_count`` links to ``via`` keep ``kind`` above its minimum"""
    rel = _BY_PAIR.get((EntityKind(kind), EntityKind(via)))
    if rel is None or rel.cardinality != Cardinality.REQUIRED_MIN_ONE:
        return True
    return linked_count >= 1
