# socialnet/users/repository.py
from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from socialnet.users.models import User
from socialnet.posts.models import Post
from socialnet.follows.models import Follow


async def get_by_username(db: AsyncSession, username: str) -> User | None:
    res = await db.execute(select(User).where(User.username == username))
    return res.scalar_one_or_none()


async def get_by_id(db: AsyncSession, user_id: int) -> User | None:
    res = await db.execute(select(User).where(User.id == user_id))
    return res.scalar_one_or_none()


async def create_user(
    db: AsyncSession,
    username: str,
    email: str,
    hashed_password: str,
    *,
    name: str | None = None,
    bio: str | None = None,
) -> User:
    user = User(
        username=username,
        email=email,
        hashed_password=hashed_password,
        name=name,
        bio=bio,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


async def update_user(db: AsyncSession, user: User, **fields) -> User:
    """Solo pisa los campos que llegan con valor (None = no tocar)."""
    for key, value in fields.items():
        if value is not None and getattr(user, key) != value:
            setattr(user, key, value)
    await db.flush()
    await db.refresh(user)
    return user


async def delete_user(db: AsyncSession, user_id: int) -> None:
    # posts, comentarios, likes y follows caen por ON DELETE CASCADE
    await db.execute(delete(User).where(User.id == user_id))
    await db.flush()


async def get_profile_stats(db: AsyncSession, user_id: int) -> dict:
    res = await db.execute(
        select(
            select(func.count(Post.id)).where(Post.user_id == user_id).scalar_subquery().label("posts"),
            select(func.count(Follow.id)).where(Follow.user_id == user_id).scalar_subquery().label("followers"),
            select(func.count(Follow.id)).where(Follow.follower_id == user_id).scalar_subquery().label("following"),
        )
    )
    row = res.one()
    return {
        "posts": int(row.posts or 0),
        "followers": int(row.followers or 0),
        "following": int(row.following or 0),
    }
