from fastapi import APIRouter, Depends, UploadFile, File, Form
from gallery.config import settings
from gallery.database.supabase_client import get_supabase
from gallery.modules.posts.schemas import PostCreate, PostResponse
from gallery.modules.posts.service import PostService
from gallery.core.dependencies import get_current_user
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/posts", tags=["posts"])


def get_post_service(supabase: Client = Depends(get_supabase)) -> PostService:
    return PostService(supabase)


@router.get("", response_model=List[PostResponse])
async def list_posts(
    limit: int = 20,
    offset: int = 0,
    service: PostService = Depends(get_post_service)
):
    """Gallery feed, newest first"""
    return service.list_posts(limit=limit, offset=offset)


@router.post("", response_model=PostResponse, status_code=201)
async def create_post(
    file: UploadFile = File(...),
    title: str = Form(...),
    description: Optional[str] = Form(None),
    current_user: Dict = Depends(get_current_user),
    service: PostService = Depends(get_post_service)
):
    """
    Upload an image and publish it as a post.
    The image goes to the storage bucket first; the post row stores its public URL.
    """
    # One byte past the cap is enough for create_post to reject it
    file_content = await file.read(settings.max_image_bytes + 1)
    return service.create_post(
        current_user["id"],
        PostCreate(title=title, description=description),
        file_content,
        file.filename or "upload",
        file.content_type
    )


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: str,
    service: PostService = Depends(get_post_service)
):
    """Get post by ID"""
    return service.get_post(post_id)
