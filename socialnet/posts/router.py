# socialnet/posts/router.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from socialnet.db.session import get_session
from socialnet.auth.dependencies import require_identity, require_post_owner, require_user
from socialnet.auth.policy import Grant
from socialnet.users.repository import get_by_username
from socialnet.users.schemas import MessageOut
from socialnet.posts import repository as repo
from socialnet.posts.schemas import PostCreate, PostUpdate, PostOut, LikesOut, PostId

router = APIRouter(prefix="/api/posts", tags=["posts"])

# /api/users/{username}/posts/
user_posts_router = APIRouter(prefix="/api/users", tags=["posts"])


async def _get_post_or_404(db: AsyncSession, post_id: int):
    post = await repo.get_post(db, post_id)
    if not post:
        raise HTTPException(status_code=404, detail="post not found")
    return post


@user_posts_router.get("/{username}/posts/", response_model=List[PostOut])
async def user_posts(
    username: str,
    limit: int = Query(30, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_session),
):
    user = await get_by_username(db, username)
    if not user:
        raise HTTPException(status_code=404, detail="user not found")
    return await repo.list_posts_by_user(db, user.id, limit=limit, offset=offset)


@user_posts_router.post("/{username}/posts/", response_model=PostOut, status_code=status.HTTP_201_CREATED)
async def publish(
    username: str,
    payload: PostCreate,
    grant: Grant = Depends(require_identity),
    db: AsyncSession = Depends(get_session),
):
    post = await repo.create_post(
        db,
        user_id=grant.user_id,
        content=payload.content,
        media_url=payload.media_url,
    )
    await db.commit()
    return post


@router.get("/", response_model=List[PostOut])
async def feed_list(
    limit: int = Query(10, ge=1, le=50),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_session),
):
    return await repo.list_posts(db, limit=limit, offset=offset)


@router.get("/{post_id}/", response_model=PostOut)
async def get_one(post_id: PostId, db: AsyncSession = Depends(get_session)):
    return await _get_post_or_404(db, post_id)


@router.put("/{post_id}/", response_model=PostOut)
@router.patch("/{post_id}/", response_model=PostOut)
async def edit_post(
    post_id: PostId,
    payload: PostUpdate,
    grant: Grant = Depends(require_post_owner),
    db: AsyncSession = Depends(get_session),
):
    post = await repo.update_post(
        db,
        grant.subject,
        content=payload.content,
        media_url=payload.media_url,
    )
    await db.commit()
    return post


@router.delete("/{post_id}/", response_model=MessageOut)
async def delete_post(
    post_id: PostId,
    grant: Grant = Depends(require_post_owner),
    db: AsyncSession = Depends(get_session),
):
    await repo.delete_post(db, post_id)
    await db.commit()
    return MessageOut(message=f"post {post_id} deleted")


# -------------------------
# likes
# -------------------------
@router.post("/{post_id}/like/", response_model=LikesOut)
async def like(
    post_id: PostId,
    grant: Grant = Depends(require_user),
    db: AsyncSession = Depends(get_session),
):
    await _get_post_or_404(db, post_id)
    try:
        await repo.like_post(db, post_id, grant.user_id)
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="already liked")

    users = await repo.list_post_likers(db, post_id)
    return LikesOut(id=post_id, count=len(users), users=users)


@router.delete("/{post_id}/like/", response_model=LikesOut)
@router.delete("/{post_id}/unlike/", response_model=LikesOut)
async def unlike(
    post_id: PostId,
    grant: Grant = Depends(require_user),
    db: AsyncSession = Depends(get_session),
):
    await _get_post_or_404(db, post_id)
    if not await repo.unlike_post(db, post_id, grant.user_id):
        raise HTTPException(status_code=404, detail="not liked")
    await db.commit()

    users = await repo.list_post_likers(db, post_id)
    return LikesOut(id=post_id, count=len(users), users=users)


@router.get("/{post_id}/likes/", response_model=LikesOut)
async def likes(post_id: PostId, db: AsyncSession = Depends(get_session)):
    await _get_post_or_404(db, post_id)
    users = await repo.list_post_likers(db, post_id)
    return LikesOut(id=post_id, count=len(users), users=users)
