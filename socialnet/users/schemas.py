# socialnet/users/schemas.py
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field, AliasChoices


class UserCreate(BaseModel):
    username: str = Field(..., min_length=3, max_length=25, pattern=r"^[A-Za-z0-9_.]+$")
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    # Acepta name | full_name
    name: str | None = Field(
        default=None,
        max_length=225,
        validation_alias=AliasChoices("name", "full_name"),
    )
    bio: str | None = Field(default=None, max_length=255)


class UserUpdate(BaseModel):
    """Todos opcionales: solo se actualiza lo que llega."""
    username: str | None = Field(default=None, min_length=3, max_length=25, pattern=r"^[A-Za-z0-9_.]+$")
    name: str | None = Field(default=None, max_length=225)
    email: EmailStr | None = None
    bio: str | None = Field(default=None, max_length=255)
    password: str | None = Field(default=None, min_length=6, max_length=128)


class LoginRequest(BaseModel):
    username: str
    password: str


class TokenOut(BaseModel):
    username: str
    access_token: str
    token_type: str = "bearer"


class UserOut(BaseModel):
    id: int
    username: str
    name: str | None = None
    email: EmailStr
    bio: str | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class UserProfileOut(BaseModel):
    id: int
    username: str
    name: str | None = None
    bio: str | None = None
    posts: int = 0
    followers: int = 0
    following: int = 0


class MessageOut(BaseModel):
    message: str
