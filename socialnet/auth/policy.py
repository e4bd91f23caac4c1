# socialnet/auth/policy.py
"""
Política de autorización para operaciones protegidas.

Un solo chequeo configurable, en vez de un middleware por caso:

    Requirement(Capability.IDENTITY)                      → /users/{username}/...
    Requirement(Capability.OWNERSHIP, ResourceKind.POST)  → /posts/{post_id}/...
    Requirement(Capability.EXISTENCE)                     → cualquier usuario logueado

Flujo: firma → expiración → identidad/dueño/existencia. Cualquier paso que
falla termina en PermissionDenied (mismo resultado sin importar el motivo),
salvo dos casos:

- TokenExpired: solo se lanza después de verificar la firma. Es el único
  aviso distinto de "permission denied" que ve el cliente.
- StoreUnavailable: la DB falló durante el lookup (se responde 5xx, no 401).
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Awaitable, Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from socialnet.core.security import (
    ExpiredTokenError,
    InvalidTokenError,
    TokenClaims,
    decode_access_token,
)
from socialnet.db.base import MAX_ID
from socialnet.users import repository as users_repo
from socialnet.posts import repository as posts_repo
from socialnet.comments import repository as comments_repo

log = logging.getLogger("uvicorn")


class Capability(str, enum.Enum):
    IDENTITY = "identity"
    OWNERSHIP = "ownership"
    EXISTENCE = "existence"


class ResourceKind(str, enum.Enum):
    POST = "post"
    COMMENT = "comment"

    @property
    def path_param(self) -> str:
        return f"{self.value}_id"


# loaders por tipo de recurso: (db, id) -> entidad con .user_id, o None
_RESOURCE_LOADERS: dict[ResourceKind, Callable[[AsyncSession, int], Awaitable[Any]]] = {
    ResourceKind.POST: posts_repo.get_post,
    ResourceKind.COMMENT: comments_repo.get_comment,
}


class AuthorizationError(Exception):
    pass


class PermissionDenied(AuthorizationError):
    """`reason` es solo para logs, nunca se devuelve al cliente."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class TokenExpired(AuthorizationError):
    pass


class StoreUnavailable(AuthorizationError):
    pass


@dataclass(frozen=True)
class Requirement:
    capability: Capability
    resource_kind: ResourceKind | None = None

    def __post_init__(self):
        if self.capability is Capability.OWNERSHIP and self.resource_kind is None:
            raise ValueError("ownership requirement needs a resource kind")
        if self.capability is not Capability.OWNERSHIP and self.resource_kind is not None:
            raise ValueError(f"{self.capability.value} requirement takes no resource kind")


@dataclass(frozen=True)
class Grant:
    """Resultado de una autorización exitosa."""

    user_id: int
    # usuario (identity/existence) o recurso (ownership) ya cargado
    subject: Any


def verify_token(token: str | None, *, now: datetime | None = None) -> TokenClaims:
    if not token:
        raise PermissionDenied("missing token")
    try:
        return decode_access_token(token, now=now)
    except ExpiredTokenError:
        raise TokenExpired("token expired")
    except InvalidTokenError as e:
        raise PermissionDenied(f"invalid token: {e}")


async def _lookup(loader, db: AsyncSession, key):
    try:
        return await loader(db, key)
    except SQLAlchemyError as e:
        log.exception("auth lookup failed")
        raise StoreUnavailable("store lookup failed") from e


async def check_identity(db: AsyncSession, claims: TokenClaims, username: str | None):
    if not username:
        raise PermissionDenied("missing username")
    user = await _lookup(users_repo.get_by_username, db, username)
    if user is None:
        raise PermissionDenied(f"user {username!r} not found")
    if user.id != claims.user_id:
        raise PermissionDenied(f"user {claims.user_id} is not {username!r}")
    return user


async def check_ownership(
    db: AsyncSession,
    claims: TokenClaims,
    kind: ResourceKind,
    resource_id: Any,
):
    try:
        rid = int(resource_id)
    except (TypeError, ValueError):
        raise PermissionDenied(f"invalid {kind.value} id {resource_id!r}")
    if not 1 <= rid <= MAX_ID:
        raise PermissionDenied(f"{kind.value} id {rid} out of range")

    resource = await _lookup(_RESOURCE_LOADERS[kind], db, rid)
    if resource is None:
        raise PermissionDenied(f"{kind.value} {rid} not found")
    if resource.user_id != claims.user_id:
        raise PermissionDenied(f"{kind.value} {rid} not owned by user {claims.user_id}")
    return resource


async def check_existence(db: AsyncSession, claims: TokenClaims):
    user = await _lookup(users_repo.get_by_id, db, claims.user_id)
    if user is None:
        raise PermissionDenied(f"user {claims.user_id} no longer exists")
    return user


async def authorize(
    db: AsyncSession,
    token: str | None,
    requirement: Requirement,
    *,
    username: str | None = None,
    resource_id: Any = None,
    now: datetime | None = None,
) -> Grant:
    claims = verify_token(token, now=now)

    if requirement.capability is Capability.IDENTITY:
        subject = await check_identity(db, claims, username)
    elif requirement.capability is Capability.OWNERSHIP:
        subject = await check_ownership(db, claims, requirement.resource_kind, resource_id)
    else:
        subject = await check_existence(db, claims)

    return Grant(user_id=claims.user_id, subject=subject)
