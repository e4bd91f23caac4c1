# socialnet/auth/dependencies.py
import logging

from fastapi import Depends, Header, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from socialnet.core.config import settings
from socialnet.db.session import get_session
from socialnet.auth.policy import (
    Capability,
    Grant,
    PermissionDenied,
    Requirement,
    ResourceKind,
    StoreUnavailable,
    TokenExpired,
    authorize,
)

log = logging.getLogger("uvicorn")

PERMISSION_DENIED = "permission denied"
TOKEN_EXPIRED = "token expired"
SERVICE_UNAVAILABLE = "service unavailable"


def extract_token(
    header_token: str | None,
    authorization: str | None,
    token: str | None,
) -> str | None:
    """
    Orden: header propio (x-jwt-token) → Authorization: Bearer → ?token=
    """
    if header_token:
        return header_token.strip()
    if authorization and authorization.lower().startswith("bearer "):
        return authorization.split(" ", 1)[1].strip()
    return token


def require(capability: Capability, resource_kind: ResourceKind | None = None):
    """
    Devuelve una dependencia de FastAPI que autoriza la request o la corta.

        @router.delete("/{post_id}/")
        async def delete(grant: Grant = Depends(require(Capability.OWNERSHIP, ResourceKind.POST))):
            ...
    """
    requirement = Requirement(capability, resource_kind)

    async def dependency(
        request: Request,
        db: AsyncSession = Depends(get_session),
        header_token: str | None = Header(None, alias=settings.TOKEN_HEADER),
        authorization: str | None = Header(None),
        token: str | None = Query(None),
    ) -> Grant:
        params = request.path_params
        try:
            return await authorize(
                db,
                extract_token(header_token, authorization, token),
                requirement,
                username=params.get("username"),
                resource_id=params.get(resource_kind.path_param) if resource_kind else None,
            )
        except PermissionDenied as e:
            log.debug(f"🔒 {request.method} {request.url.path} denied: {e.reason}")
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=PERMISSION_DENIED)
        except TokenExpired:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=TOKEN_EXPIRED)
        except StoreUnavailable:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail=SERVICE_UNAVAILABLE,
            )

    return dependency


require_identity = require(Capability.IDENTITY)
require_user = require(Capability.EXISTENCE)
require_post_owner = require(Capability.OWNERSHIP, ResourceKind.POST)
require_comment_owner = require(Capability.OWNERSHIP, ResourceKind.COMMENT)
