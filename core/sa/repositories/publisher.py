# core/sa/repositories/publisher.py
from core.integrity.catalog import EntityKind
from ..models import Publisher
from .base import BaseRepository

class PublisherRepository(BaseRepository[Publisher]):
    model = Publisher
    kind = EntityKind.PUBLISHER
