# socialnet/comments/repository.py
from __future__ import annotations

from typing import List
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from socialnet.comments.models import Comment, CommentLike
from socialnet.users.models import User


async def create_comment(
    db: AsyncSession,
    *,
    user_id: int,
    post_id: int,
    text: str,
) -> Comment:
    c = Comment(user_id=user_id, post_id=post_id, text=text)
    db.add(c)
    await db.flush()
    await db.refresh(c)
    return c


async def get_comment(db: AsyncSession, comment_id: int) -> Comment | None:
    res = await db.execute(select(Comment).where(Comment.id == comment_id))
    return res.scalar_one_or_none()


async def list_post_comments(db: AsyncSession, post_id: int) -> List[Comment]:
    # ordenados por fecha (y por id para desempatar)
    res = await db.execute(
        select(Comment)
        .where(Comment.post_id == post_id)
        .order_by(Comment.created_at.asc(), Comment.id.asc())
    )
    return list(res.scalars())


async def update_comment(db: AsyncSession, comment: Comment, text: str) -> Comment:
    comment.text = text
    await db.flush()
    await db.refresh(comment)
    return comment


async def delete_comment(db: AsyncSession, comment_id: int) -> None:
    await db.execute(delete(Comment).where(Comment.id == comment_id))
    await db.flush()


# -------------------------
# likes de comentarios
# -------------------------


async def like_comment(db: AsyncSession, *, user_id: int, comment_id: int) -> CommentLike:
    like = CommentLike(user_id=user_id, comment_id=comment_id)
    db.add(like)
    await db.flush()
    return like


async def unlike_comment(db: AsyncSession, *, user_id: int, comment_id: int) -> bool:
    res = await db.execute(
        select(CommentLike).where(
            CommentLike.user_id == user_id,
            CommentLike.comment_id == comment_id,
        )
    )
    existing = res.scalar_one_or_none()
    if not existing:
        return False
    await db.execute(delete(CommentLike).where(CommentLike.id == existing.id))
    await db.flush()
    return True


async def list_comment_likers(db: AsyncSession, comment_id: int) -> list[str]:
    res = await db.execute(
        select(User.username)
        .join(CommentLike, CommentLike.user_id == User.id)
        .where(CommentLike.comment_id == comment_id)
        .order_by(CommentLike.created_at.asc(), CommentLike.id.asc())
    )
    return [row[0] for row in res.all()]
