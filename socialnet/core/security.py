# socialnet/core/security.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from passlib.context import CryptContext
from jose import jwt, JWTError

from socialnet.core.config import settings

ALGORITHM = "HS256"

# Usa SOLO argon2 para nuevos hashes
pwd_context = CryptContext(
    schemes=["argon2"],
    default="argon2",
    deprecated="auto",
)


def _as_utc(now: datetime | None) -> datetime:
    """`now` naive se interpreta como UTC."""
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


class TokenError(Exception):
    """Base de los errores de verificación de token."""


class InvalidTokenError(TokenError):
    """Firma inválida o payload mal formado."""


class ExpiredTokenError(TokenError):
    """Firma válida pero el token ya expiró."""


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    expires_at: datetime

    def is_expired(self, now: datetime | None = None) -> bool:
        now = _as_utc(now)
        return now >= self.expires_at


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    return pwd_context.verify(password, hashed)


def encode_claims(claims: TokenClaims, secret: str | None = None) -> str:
    payload = {
        "sub": str(claims.user_id),
        "exp": int(claims.expires_at.timestamp()),
    }
    return jwt.encode(payload, secret or settings.JWT_SECRET, algorithm=ALGORITHM)


def decode_claims(token: str, secret: str | None = None) -> TokenClaims:
    """
    Verifica la firma y convierte el payload en TokenClaims.
    NO revisa la expiración (eso lo hace decode_access_token con su `now`).
    """
    if not token:
        raise InvalidTokenError("empty token")
    try:
        payload = jwt.decode(
            token,
            secret or settings.JWT_SECRET,
            algorithms=[ALGORITHM],
            options={"verify_exp": False},
        )
    except JWTError as e:
        raise InvalidTokenError(str(e)) from e

    sub = payload.get("sub")
    exp = payload.get("exp")
    try:
        user_id = int(sub)
    except (TypeError, ValueError):
        raise InvalidTokenError("malformed sub")
    # bool es int en Python, lo descartamos explícitamente
    if isinstance(exp, bool) or not isinstance(exp, (int, float)):
        raise InvalidTokenError("malformed exp")

    return TokenClaims(
        user_id=user_id,
        expires_at=datetime.fromtimestamp(int(exp), tz=timezone.utc),
    )


def create_access_token(
    user_id: int,
    *,
    now: datetime | None = None,
    expires_minutes: int | None = None,
) -> str:
    now = _as_utc(now)
    if expires_minutes is None:
        expires_minutes = settings.ACCESS_TOKEN_EXPIRE_MIN
    expire = now + timedelta(minutes=expires_minutes)
    return encode_claims(TokenClaims(user_id=user_id, expires_at=expire))


def decode_access_token(token: str, *, now: datetime | None = None) -> TokenClaims:
    claims = decode_claims(token)
    if claims.is_expired(now):
        raise ExpiredTokenError("token expired")
    return claims
