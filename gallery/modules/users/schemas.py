from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class UserUpdate(BaseModel):
    username: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None


class UserResponse(BaseModel):
    id: str
    username: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class AuthorSummary(BaseModel):
    """Author columns embedded in post and comment listings."""
    username: Optional[str] = None
    avatar_url: Optional[str] = None


class ProfileEnsureResult(BaseModel):
    created: bool
