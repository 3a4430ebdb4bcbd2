from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from gallery.modules.users.schemas import AuthorSummary


class PostCreate(BaseModel):
    title: str
    description: Optional[str] = None


class PostResponse(BaseModel):
    id: str
    user_id: str
    title: str
    image_url: str
    description: Optional[str] = None
    created_at: datetime
    user: Optional[AuthorSummary] = None

    class Config:
        from_attributes = True
