from fastapi import APIRouter, Depends
from gallery.database.supabase_client import get_supabase
from gallery.modules.blog.schemas import BlogArticleResponse
from gallery.modules.blog.service import BlogService
from supabase import Client
from typing import List

router = APIRouter(prefix="/blog", tags=["blog"])


def get_blog_service(supabase: Client = Depends(get_supabase)) -> BlogService:
    return BlogService(supabase)


@router.get("", response_model=List[BlogArticleResponse])
async def list_articles(
    limit: int = 10,
    offset: int = 0,
    service: BlogService = Depends(get_blog_service)
):
    """Blog articles, newest first"""
    return service.list_articles(limit=limit, offset=offset)


@router.get("/{slug}", response_model=BlogArticleResponse)
async def get_article(
    slug: str,
    service: BlogService = Depends(get_blog_service)
):
    return service.get_article(slug)
