# socialnet/posts/schemas.py
from typing import Annotated

from fastapi import Path
from pydantic import BaseModel, Field
from datetime import datetime

from socialnet.db.base import MAX_ID

# ids fuera de rango nunca llegan a la DB
PostId = Annotated[int, Path(ge=1, le=MAX_ID)]


class PostCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=255)
    media_url: str | None = Field(default=None, max_length=2048)


class PostUpdate(BaseModel):
    """
    Payload para edición de post: campos en None no se tocan.
    """
    content: str | None = Field(default=None, min_length=1, max_length=255)
    media_url: str | None = Field(default=None, max_length=2048)


class PostOut(BaseModel):
    id: int
    user_id: int
    content: str
    media_url: str | None = None
    created_at: datetime
    edited_at: datetime | None = None

    class Config:
        from_attributes = True


class LikesOut(BaseModel):
    id: int               # post_id o comment_id
    count: int
    users: list[str]
