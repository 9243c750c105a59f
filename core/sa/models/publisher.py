# core/sa/models/publisher.py
from sqlalchemy import String, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, IdentifierMixin, TimestampMixin

class Publisher(Base, IdentifierMixin, TimestampMixin):
    __tablename__ = 'publishers'

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    website: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    # Relationships
    books = relationship('Book', back_populates='publisher')

    __table_args__ = (
        # Search index
        Index('idx_publishers_name', 'name'),
    )
