# socialnet/comments/router.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from socialnet.db.session import get_session
from socialnet.auth.dependencies import require_comment_owner, require_user
from socialnet.auth.policy import Grant
from socialnet.comments.schemas import CommentCreate, CommentUpdate, CommentOut, CommentId
from socialnet.comments import repository as repo
from socialnet.posts.repository import get_post
from socialnet.posts.schemas import LikesOut, PostId
from socialnet.users.schemas import MessageOut

router = APIRouter(prefix="/api/comments", tags=["comments"])

# /api/posts/{post_id}/comments/
post_comments_router = APIRouter(prefix="/api/posts", tags=["comments"])


async def _ensure_post(db: AsyncSession, post_id: int) -> None:
    if not await get_post(db, post_id):
        raise HTTPException(status_code=404, detail="post not found")


async def _get_comment_or_404(db: AsyncSession, comment_id: int):
    c = await repo.get_comment(db, comment_id)
    if not c:
        raise HTTPException(status_code=404, detail="comment not found")
    return c


@post_comments_router.get("/{post_id}/comments/", response_model=List[CommentOut])
async def comments_for_post(post_id: PostId, db: AsyncSession = Depends(get_session)):
    await _ensure_post(db, post_id)
    return await repo.list_post_comments(db, post_id)


@post_comments_router.post(
    "/{post_id}/comments/",
    response_model=CommentOut,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment_endpoint(
    post_id: PostId,
    payload: CommentCreate,
    grant: Grant = Depends(require_user),
    db: AsyncSession = Depends(get_session),
):
    await _ensure_post(db, post_id)
    c = await repo.create_comment(
        db,
        user_id=grant.user_id,
        post_id=post_id,
        text=payload.text,
    )
    await db.commit()
    return c


@router.get("/{comment_id}/", response_model=CommentOut)
async def get_one(comment_id: CommentId, db: AsyncSession = Depends(get_session)):
    return await _get_comment_or_404(db, comment_id)


@router.put("/{comment_id}/", response_model=CommentOut)
@router.patch("/{comment_id}/", response_model=CommentOut)
async def edit_comment(
    comment_id: CommentId,
    payload: CommentUpdate,
    grant: Grant = Depends(require_comment_owner),
    db: AsyncSession = Depends(get_session),
):
    c = await repo.update_comment(db, grant.subject, payload.text)
    await db.commit()
    return c


@router.delete("/{comment_id}/", response_model=MessageOut)
async def delete_comment_endpoint(
    comment_id: CommentId,
    grant: Grant = Depends(require_comment_owner),
    db: AsyncSession = Depends(get_session),
):
    await repo.delete_comment(db, comment_id)
    await db.commit()
    return MessageOut(message=f"comment {comment_id} deleted")


# likes
@router.post("/{comment_id}/like/", response_model=LikesOut)
async def like_comment_endpoint(
    comment_id: CommentId,
    grant: Grant = Depends(require_user),
    db: AsyncSession = Depends(get_session),
):
    await _get_comment_or_404(db, comment_id)
    try:
        await repo.like_comment(db, user_id=grant.user_id, comment_id=comment_id)
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="already liked")

    users = await repo.list_comment_likers(db, comment_id)
    return LikesOut(id=comment_id, count=len(users), users=users)


@router.delete("/{comment_id}/like/", response_model=LikesOut)
@router.delete("/{comment_id}/unlike/", response_model=LikesOut)
async def unlike_comment_endpoint(
    comment_id: CommentId,
    grant: Grant = Depends(require_user),
    db: AsyncSession = Depends(get_session),
):
    await _get_comment_or_404(db, comment_id)
    if not await repo.unlike_comment(db, user_id=grant.user_id, comment_id=comment_id):
        raise HTTPException(status_code=404, detail="not liked")
    await db.commit()

    users = await repo.list_comment_likers(db, comment_id)
    return LikesOut(id=comment_id, count=len(users), users=users)


@router.get("/{comment_id}/likes/", response_model=LikesOut)
async def comment_likes(comment_id: CommentId, db: AsyncSession = Depends(get_session)):
    await _get_comment_or_404(db, comment_id)
    users = await repo.list_comment_likers(db, comment_id)
    return LikesOut(id=comment_id, count=len(users), users=users)
