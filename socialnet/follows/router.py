# socialnet/follows/router.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from socialnet.db.session import get_session
from socialnet.auth.dependencies import require_user
from socialnet.auth.policy import Grant
from socialnet.users.repository import get_by_username
from socialnet.follows import repository as repo
from socialnet.follows.schemas import FollowOut

router = APIRouter(prefix="/api/users", tags=["follows"])


async def _get_user_or_404(db: AsyncSession, username: str):
    user = await get_by_username(db, username)
    if not user:
        raise HTTPException(status_code=404, detail="user not found")
    return user


@router.get("/{username}/followers/", response_model=List[str])
async def followers(username: str, db: AsyncSession = Depends(get_session)):
    user = await _get_user_or_404(db, username)
    return await repo.list_followers(db, user.id)


@router.get("/{username}/following/", response_model=List[str])
async def following(username: str, db: AsyncSession = Depends(get_session)):
    user = await _get_user_or_404(db, username)
    return await repo.list_following(db, user.id)


@router.post("/{username}/follow/", response_model=FollowOut)
async def follow(
    username: str,
    grant: Grant = Depends(require_user),
    db: AsyncSession = Depends(get_session),
):
    me = grant.subject
    target = await _get_user_or_404(db, username)
    if target.id == me.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="cannot follow yourself")

    try:
        await repo.create_follow(db, user_id=target.id, follower_id=me.id)
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="already following")

    return FollowOut(username=target.username, follower=me.username, following=True)


@router.delete("/{username}/follow/", response_model=FollowOut)
@router.delete("/{username}/unfollow/", response_model=FollowOut)
async def unfollow(
    username: str,
    grant: Grant = Depends(require_user),
    db: AsyncSession = Depends(get_session),
):
    me = grant.subject
    target = await _get_user_or_404(db, username)

    removed = await repo.delete_follow(db, user_id=target.id, follower_id=me.id)
    if not removed:
        raise HTTPException(status_code=404, detail="not following")
    await db.commit()

    return FollowOut(username=target.username, follower=me.username, following=False)
