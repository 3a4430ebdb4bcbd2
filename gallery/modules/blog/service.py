from supabase import Client
from gallery.core.exceptions import NotFoundError, TransportFailure
from gallery.modules.blog.schemas import BlogArticleResponse
from typing import List


class BlogService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_articles(self, limit: int = 10, offset: int = 0) -> List[BlogArticleResponse]:
        try:
            result = self.supabase.table("blog")\
                .select("*")\
                .order("created_at", desc=True)\
                .limit(limit)\
                .offset(offset)\
                .execute()
        except Exception as e:
            raise TransportFailure(str(e), cause=e) from e
        return [BlogArticleResponse(**article) for article in result.data]

    def get_article(self, slug: str) -> BlogArticleResponse:
        try:
            result = self.supabase.table("blog")\
                .select("*")\
                .eq("slug", slug)\
                .limit(1)\
                .execute()
        except Exception as e:
            raise TransportFailure(str(e), cause=e) from e

        if not result.data:
            raise NotFoundError("Article not found")
        return BlogArticleResponse(**result.data[0])
