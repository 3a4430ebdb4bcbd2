from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime
from gallery.modules.users.schemas import AuthorSummary


class CommentCreate(BaseModel):
    content: str

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Comment cannot be empty")
        return value


class CommentResponse(BaseModel):
    id: str
    post_id: str
    user_id: str
    content: str
    created_at: datetime
    user: Optional[AuthorSummary] = None

    class Config:
        from_attributes = True
