# socialnet/follows/repository.py
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession
from socialnet.follows.models import Follow
from socialnet.users.models import User


async def create_follow(db: AsyncSession, *, user_id: int, follower_id: int) -> Follow:
    """follower_id empieza a seguir a user_id. Duplicado → IntegrityError."""
    follow = Follow(user_id=user_id, follower_id=follower_id)
    db.add(follow)
    await db.flush()
    return follow


async def delete_follow(db: AsyncSession, *, user_id: int, follower_id: int) -> bool:
    res = await db.execute(
        delete(Follow).where(
            Follow.user_id == user_id,
            Follow.follower_id == follower_id,
        )
    )
    await db.flush()
    return (res.rowcount or 0) > 0


async def list_followers(db: AsyncSession, user_id: int) -> list[str]:
    res = await db.execute(
        select(User.username)
        .join(Follow, Follow.follower_id == User.id)
        .where(Follow.user_id == user_id)
        .order_by(Follow.created_at.asc(), Follow.id.asc())
    )
    return [row[0] for row in res.all()]


async def list_following(db: AsyncSession, follower_id: int) -> list[str]:
    res = await db.execute(
        select(User.username)
        .join(Follow, Follow.user_id == User.id)
        .where(Follow.follower_id == follower_id)
        .order_by(Follow.created_at.asc(), Follow.id.asc())
    )
    return [row[0] for row in res.all()]
