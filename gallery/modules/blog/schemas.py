from pydantic import BaseModel
from datetime import datetime


class BlogArticleResponse(BaseModel):
    id: str
    title: str
    slug: str
    content: str
    created_at: datetime

    class Config:
        from_attributes = True
