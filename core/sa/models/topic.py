# core/sa/models/topic.py
from sqlalchemy import String, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, IdentifierMixin, TimestampMixin

class Topic(Base, IdentifierMixin, TimestampMixin):
    __tablename__ = 'topics'

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # Relationships
    book_topics = relationship('BookTopic', back_populates='topic')

    # Convenience relationship
    books = relationship('Book', secondary='book_topics', viewonly=True)

    __table_args__ = (
        Index('idx_topics_name', 'name'),
    )
