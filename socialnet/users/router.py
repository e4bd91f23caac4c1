# socialnet/users/router.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from socialnet.db.session import get_session
from socialnet.auth.dependencies import require_identity
from socialnet.auth.policy import Grant
from socialnet.users.schemas import (
    UserCreate,
    UserUpdate,
    UserOut,
    UserProfileOut,
    LoginRequest,
    TokenOut,
    MessageOut,
)
from socialnet.users import service as svc
from socialnet.users.repository import get_by_username, get_profile_stats, delete_user

log = logging.getLogger("uvicorn")

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("/signup/", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def signup(payload: UserCreate, db: AsyncSession = Depends(get_session)):
    try:
        user = await svc.register_user(db, payload)
        await db.commit()
    except (ValueError, IntegrityError):
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="username already exists")
    log.info(f"👤 nuevo usuario {user.username} (id={user.id})")
    return user


@router.post("/login/", response_model=TokenOut)
async def login(payload: LoginRequest, db: AsyncSession = Depends(get_session)):
    try:
        user, token = await svc.login_user(db, payload.username, payload.password)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid credentials")
    return TokenOut(username=user.username, access_token=token)


@router.get("/{username}/", response_model=UserProfileOut)
async def profile(username: str, db: AsyncSession = Depends(get_session)):
    user = await get_by_username(db, username)
    if not user:
        raise HTTPException(status_code=404, detail="user not found")
    stats = await get_profile_stats(db, user.id)
    return UserProfileOut(
        id=user.id,
        username=user.username,
        name=user.name,
        bio=user.bio,
        **stats,
    )


@router.put("/{username}/", response_model=UserOut)
@router.patch("/{username}/", response_model=UserOut)
async def update_me(
    username: str,
    payload: UserUpdate,
    grant: Grant = Depends(require_identity),
    db: AsyncSession = Depends(get_session),
):
    try:
        user = await svc.update_account(db, grant.subject, payload)
        await db.commit()
    except (ValueError, IntegrityError):
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="username already exists")
    return user


@router.delete("/{username}/", response_model=MessageOut)
async def delete_me(
    username: str,
    grant: Grant = Depends(require_identity),
    db: AsyncSession = Depends(get_session),
):
    await delete_user(db, grant.user_id)
    await db.commit()
    log.info(f"🗑️ usuario {username} eliminado")
    return MessageOut(message=f"user {username} deleted")
