# core/sa/repositories/topic.py

from typing import List
from core.integrity.catalog import EntityKind
from core.sa.models import Topic, BookTopic
from .base import BaseRepository

class TopicRepository(BaseRepository[Topic]):
    """Repository for managing Topic entities."""
    model = Topic
    kind = EntityKind.TOPIC

    def get_topics_by_book(self, book_id: str) -> List[Topic]:
        return (
            self.session.query(Topic)
            .join(BookTopic, BookTopic.topic_id == Topic.id)
            .filter(BookTopic.book_id == book_id)
            .order_by(Topic.name)
            .all()
        )
