# core/sa/repositories/category.py

from core.integrity.catalog import EntityKind
from core.sa.models import Category, DEFAULT_CATEGORY_ID
from .base import BaseRepository

class CategoryRepository(BaseRepository[Category]):
    """Repository for managing Category entities."""
    model = Category
    kind = EntityKind.CATEGORY

    def get_default(self) -> Category | None:
        """The built-in category new books fall back to"""
        return self.get_by_id(DEFAULT_CATEGORY_ID)
