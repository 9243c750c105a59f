# api/schemas/book.py
from typing import List
from pydantic import BaseModel
from core.models.integrity import DeletedEntity


class BookDeleteResponse(BaseModel):
    message: str
    deleted_entities: List[DeletedEntity]

    @classmethod
    def from_deleted(cls, deleted: List[DeletedEntity]) -> "BookDeleteResponse":
        return cls(
            message=f"Successfully deleted: {', '.join(str(entity) for entity in deleted)}",
            deleted_entities=deleted
        )
