from fastapi import APIRouter, Depends
from gallery.database.supabase_client import get_supabase
from gallery.modules.comments.schemas import CommentCreate, CommentResponse
from gallery.modules.comments.service import CommentService
from gallery.core.dependencies import get_current_user
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/posts/{post_id}/comments", tags=["comments"])


def get_comment_service(supabase: Client = Depends(get_supabase)) -> CommentService:
    return CommentService(supabase)


@router.get("", response_model=List[CommentResponse])
async def list_comments(
    post_id: str,
    service: CommentService = Depends(get_comment_service)
):
    """Comments on a post, oldest first"""
    return service.list_comments(post_id)


@router.post("", response_model=CommentResponse, status_code=201)
async def add_comment(
    post_id: str,
    comment_data: CommentCreate,
    current_user: Dict = Depends(get_current_user),
    service: CommentService = Depends(get_comment_service)
):
    """Comment on a post as the signed-in user"""
    return service.add_comment(post_id, current_user["id"], comment_data)
