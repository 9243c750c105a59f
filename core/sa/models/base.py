# core/sa/models/base.py
from datetime import datetime, UTC
from uuid import uuid4
from sqlalchemy.orm import DeclarativeBase, mapped_column, Mapped
from sqlalchemy import DateTime, String

def new_id() -> str:
    """Generate a new record identifier"""
    return str(uuid4())

class Base(DeclarativeBase):
    """Base class for all models"""
    pass

class IdentifierMixin:
    """Mixin for the stable external identifier carried by every record"""
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

class TimestampMixin:
    """Mixin to add created_at and updated_at columns"""
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC), onupdate=lambda: datetime.now(UTC))
