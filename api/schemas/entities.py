# api/schemas/entities.py
from pydantic import BaseModel


class AuthorListItem(BaseModel):
    id: str
    name: str
    bio: str | None = None
    book_count: int
