# core/models/transfer.py

from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, computed_field

EXPORT_VERSION = "1.0.0"

IMPORT_ORDER = ('categories', 'authors', 'publishers', 'genres', 'topics', 'series', 'books')


class ImportBatch(BaseModel):
    """A whole-library snapshot as written by export and read by import.

    Rows are kept as plain mappings here; each one is validated on its own
    while importing so that one bad row does not reject the batch.
    """
    version: str = Field(min_length=1)
    exported_at: Optional[datetime] = None
    categories: List[Dict[str, Any]] = []
    authors: List[Dict[str, Any]] = []
    publishers: List[Dict[str, Any]] = []
    genres: List[Dict[str, Any]] = []
    topics: List[Dict[str, Any]] = []
    series: List[Dict[str, Any]] = []
    books: List[Dict[str, Any]] = []

    model_config = ConfigDict(extra='ignore')


class ImportResult(BaseModel):
    imported: Dict[str, int] = Field(default_factory=lambda: {group: 0 for group in IMPORT_ORDER})
    errors: List[str] = []

    @computed_field
    @property
    def success(self) -> bool:
        return not self.errors
