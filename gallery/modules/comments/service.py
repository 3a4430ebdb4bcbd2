from supabase import Client
from gallery.core.exceptions import FOREIGN_KEY_VIOLATION, NotFoundError, TransportFailure
from gallery.modules.comments.schemas import CommentCreate, CommentResponse
from typing import List
import logging

logger = logging.getLogger(__name__)


class CommentService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_comments(self, post_id: str) -> List[CommentResponse]:
        """Comments on a post in the order they were written"""
        try:
            result = self.supabase.table("comments")\
                .select("*, user:users(username, avatar_url)")\
                .eq("post_id", post_id)\
                .order("created_at")\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching comments for post {post_id}: {e}")
            raise TransportFailure(str(e), cause=e) from e
        return [CommentResponse(**comment) for comment in result.data]

    def add_comment(self, post_id: str, user_id: str, comment_data: CommentCreate) -> CommentResponse:
        """Append a comment to a post"""
        try:
            result = self.supabase.table("comments").insert({
                "post_id": post_id,
                "user_id": user_id,
                "content": comment_data.content
            }).execute()
        except Exception as e:
            if getattr(e, "code", None) == FOREIGN_KEY_VIOLATION:
                raise NotFoundError("Post not found") from e
            logger.error(f"Error adding comment to post {post_id}: {e}")
            raise TransportFailure(str(e), cause=e) from e

        if not result.data:
            raise TransportFailure("Failed to add comment")
        return CommentResponse(**result.data[0])
