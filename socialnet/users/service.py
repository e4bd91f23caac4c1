# socialnet/users/service.py
from __future__ import annotations
from sqlalchemy.ext.asyncio import AsyncSession
from socialnet.users.models import User
from socialnet.users.repository import get_by_username, create_user, update_user
from socialnet.core.security import hash_password, create_access_token, verify_password
from socialnet.users.schemas import UserCreate, UserUpdate

# hash fijo para gastar lo mismo en argon2 cuando el usuario no existe
_DUMMY_HASH = hash_password("socialnet-dummy-password")


async def register_user(db: AsyncSession, data: UserCreate) -> User:
    if await get_by_username(db, data.username):
        raise ValueError("username already exists")

    hashed = hash_password(data.password)
    # El commit lo hace el router
    return await create_user(
        db,
        data.username,
        data.email,
        hashed,
        name=data.name,
        bio=data.bio,
    )


async def authenticate_user(db: AsyncSession, username: str, password: str) -> User | None:
    user = await get_by_username(db, username)
    if not user:
        verify_password(password, _DUMMY_HASH)
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


async def login_user(db: AsyncSession, username: str, password: str) -> tuple[User, str]:
    user = await authenticate_user(db, username, password)
    if not user:
        raise ValueError("invalid credentials")
    return user, create_access_token(user.id)


async def update_account(db: AsyncSession, user: User, data: UserUpdate) -> User:
    if data.username and data.username != user.username:
        if await get_by_username(db, data.username):
            raise ValueError("username already exists")

    return await update_user(
        db,
        user,
        username=data.username,
        name=data.name,
        email=data.email,
        bio=data.bio,
        hashed_password=hash_password(data.password) if data.password else None,
    )
