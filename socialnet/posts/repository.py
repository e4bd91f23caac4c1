# socialnet/posts/repository.py
from datetime import datetime, timezone

from sqlalchemy import select, desc, delete
from sqlalchemy.ext.asyncio import AsyncSession
from socialnet.posts.models import Post, PostLike
from socialnet.users.models import User


# -------------------------
# POSTS
# -------------------------
async def create_post(
    db: AsyncSession,
    user_id: int,
    content: str,
    media_url: str | None = None,
) -> Post:
    post = Post(user_id=user_id, content=content, media_url=media_url)
    db.add(post)
    await db.flush()
    await db.refresh(post)
    return post


async def list_posts(
    db: AsyncSession,
    limit: int = 10,
    offset: int = 0,
) -> list[Post]:
    q = (
        select(Post)
        .order_by(desc(Post.created_at), desc(Post.id))
        .limit(limit)
        .offset(offset)
    )
    res = await db.execute(q)
    return list(res.scalars())


async def list_posts_by_user(
    db: AsyncSession,
    user_id: int,
    limit: int = 30,
    offset: int = 0,
) -> list[Post]:
    """
    Devuelve publicaciones de un usuario en orden descendente por fecha.
    """
    q = (
        select(Post)
        .where(Post.user_id == user_id)
        .order_by(desc(Post.created_at), desc(Post.id))
        .limit(limit)
        .offset(offset)
    )
    res = await db.execute(q)
    return list(res.scalars())


async def get_post(db: AsyncSession, post_id: int) -> Post | None:
    res = await db.execute(select(Post).where(Post.id == post_id))
    return res.scalar_one_or_none()


async def update_post(
    db: AsyncSession,
    post: Post,
    *,
    content: str | None = None,
    media_url: str | None = None,
) -> Post:
    if content is not None:
        post.content = content
    if media_url is not None:
        post.media_url = media_url
    post.edited_at = datetime.now(timezone.utc)
    await db.flush()
    await db.refresh(post)
    return post


async def delete_post(db: AsyncSession, post_id: int) -> None:
    await db.execute(delete(Post).where(Post.id == post_id))
    await db.flush()


# -------------------------
# LIKES SOBRE POSTS
# -------------------------
async def get_post_like(db: AsyncSession, post_id: int, user_id: int) -> PostLike | None:
    res = await db.execute(
        select(PostLike).where(
            PostLike.post_id == post_id,
            PostLike.user_id == user_id,
        )
    )
    return res.scalar_one_or_none()


async def like_post(db: AsyncSession, post_id: int, user_id: int) -> PostLike:
    """El UniqueConstraint (user_id, post_id) lanza IntegrityError si ya existe."""
    like = PostLike(post_id=post_id, user_id=user_id)
    db.add(like)
    await db.flush()
    return like


async def unlike_post(db: AsyncSession, post_id: int, user_id: int) -> bool:
    existing = await get_post_like(db, post_id, user_id)
    if not existing:
        return False
    await db.execute(delete(PostLike).where(PostLike.id == existing.id))
    await db.flush()
    return True


async def list_post_likers(db: AsyncSession, post_id: int) -> list[str]:
    q = (
        select(User.username)
        .join(PostLike, PostLike.user_id == User.id)
        .where(PostLike.post_id == post_id)
        .order_by(PostLike.created_at.asc(), PostLike.id.asc())
    )
    res = await db.execute(q)
    return [row[0] for row in res.all()]
