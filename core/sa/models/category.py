# core/sa/models/category.py
from sqlalchemy import String, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, IdentifierMixin, TimestampMixin

DEFAULT_CATEGORY_ID = '00000000-0000-4000-8000-000000000001'
DEFAULT_CATEGORY_COLOR = '#3b82f6'

class Category(Base, IdentifierMixin, TimestampMixin):
    __tablename__ = 'categories'

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    color: Mapped[str | None] = mapped_column(String(7), nullable=True, default=DEFAULT_CATEGORY_COLOR)

    # Relationships
    books = relationship('Book', back_populates='category')

    __table_args__ = (
        Index('idx_categories_name', 'name'),
    )
