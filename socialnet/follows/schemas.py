# socialnet/follows/schemas.py
from pydantic import BaseModel


class FollowOut(BaseModel):
    username: str          # a quién se sigue
    follower: str          # quién sigue
    following: bool
