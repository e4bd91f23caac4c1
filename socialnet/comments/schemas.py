# socialnet/comments/schemas.py
from typing import Annotated

from fastapi import Path
from pydantic import BaseModel, Field
from datetime import datetime

from socialnet.db.base import MAX_ID

CommentId = Annotated[int, Path(ge=1, le=MAX_ID)]


class CommentCreate(BaseModel):
    text: str = Field(..., min_length=1, max_length=255)


class CommentUpdate(CommentCreate):
    pass


class CommentOut(BaseModel):
    id: int
    post_id: int
    user_id: int
    text: str
    created_at: datetime

    class Config:
        from_attributes = True
