# core/models/entities.py

from typing import Optional, List
from pydantic import BaseModel, Field, field_validator


class AuthorInput(BaseModel):
    id: Optional[str] = None
    name: str = Field(min_length=1, max_length=255)
    bio: Optional[str] = Field(default=None, max_length=2000)


class PublisherInput(BaseModel):
    id: Optional[str] = None
    name: str = Field(min_length=1, max_length=255)
    location: Optional[str] = Field(default=None, max_length=255)
    website: Optional[str] = None

    @field_validator('website', mode='before')
    @classmethod
    def blank_as_none(cls, value):
        if value == '':
            return None
        return value

    @field_validator('website')
    @classmethod
    def check_website(cls, value):
        if value is not None and not value.startswith(('http://', 'https://')):
            raise ValueError('website must be an http(s) URL')
        return value


class SeriesInput(BaseModel):
    id: Optional[str] = None
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=2000)
    # A series must always have at least one author
    author_ids: List[str] = Field(min_length=1)

    @field_validator('author_ids')
    @classmethod
    def drop_duplicate_ids(cls, value):
        return list(dict.fromkeys(value))


class GenreInput(BaseModel):
    id: Optional[str] = None
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)


class TopicInput(GenreInput):
    pass


class CategoryInput(BaseModel):
    id: Optional[str] = None
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    color: Optional[str] = Field(default=None, pattern=r'^#[0-9A-Fa-f]{6}$')
