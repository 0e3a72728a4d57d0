"""
Pydantic schemas for the Posts API.

Defines request/response models with validation.
"""
from datetime import datetime
from typing import Optional
from pydantic import AliasChoices, BaseModel, Field

from apps.accounts.schemas import AuthorResponse


class PostCreate(BaseModel):
    """Schema for creating a new post."""
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    # Only accepted when it names the caller. The web client sends "authorId".
    author_id: Optional[str] = Field(None, validation_alias=AliasChoices("author_id", "authorId"))


class PostUpdate(BaseModel):
    """Schema for updating a post. Both fields are overwritten."""
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)


class PostResponse(BaseModel):
    """Schema for post responses."""
    id: str
    title: str
    content: str
    author_id: str
    author: AuthorResponse
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class MessageResponse(BaseModel):
    message: str
