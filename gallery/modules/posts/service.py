from supabase import Client
from gallery.config import settings
from gallery.core.exceptions import InvalidInputError, NotFoundError, TransportFailure
from gallery.modules.posts.schemas import PostCreate, PostResponse
from gallery.modules.posts.storage import PostImageStorage, image_key
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)

POST_WITH_AUTHOR = "*, user:users(username, avatar_url)"


class PostService:
    def __init__(self, supabase: Client, storage: Optional[PostImageStorage] = None):
        self.supabase = supabase
        self.storage = storage or PostImageStorage(supabase)

    def list_posts(self, limit: int = 20, offset: int = 0) -> List[PostResponse]:
        """Newest posts first, with author name and avatar"""
        try:
            result = self.supabase.table("posts")\
                .select(POST_WITH_AUTHOR)\
                .order("created_at", desc=True)\
                .limit(limit)\
                .offset(offset)\
                .execute()
        except Exception as e:
            logger.error(f"Error listing posts: {e}")
            raise TransportFailure(str(e), cause=e) from e
        return [PostResponse(**post) for post in result.data]

    def get_post(self, post_id: str) -> PostResponse:
        """Get post by ID"""
        try:
            result = self.supabase.table("posts")\
                .select(POST_WITH_AUTHOR)\
                .eq("id", post_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching post {post_id}: {e}")
            raise TransportFailure(str(e), cause=e) from e

        if not result.data:
            raise NotFoundError("Post not found")
        return PostResponse(**result.data[0])

    def create_post(
        self,
        user_id: str,
        post_data: PostCreate,
        file_content: bytes,
        filename: str,
        content_type: Optional[str]
    ) -> PostResponse:
        """Upload the image, then create the post pointing at its public URL"""
        if not post_data.title.strip():
            raise InvalidInputError("Title is required")
        if not content_type or not content_type.startswith("image/"):
            raise InvalidInputError("Only image uploads are accepted")
        if not file_content:
            raise InvalidInputError("Image file is empty")
        if len(file_content) > settings.max_image_bytes:
            raise InvalidInputError(f"Image exceeds {settings.max_image_bytes} bytes")

        key = image_key(user_id, filename)
        image_url = self.storage.upload_file(file_content, key, content_type)

        try:
            result = self.supabase.table("posts").insert({
                "user_id": user_id,
                "title": post_data.title.strip(),
                "description": post_data.description,
                "image_url": image_url
            }).execute()
        except Exception as e:
            logger.error(f"Error creating post for {user_id}: {e}")
            self.storage.delete_file(key)
            raise TransportFailure(str(e), cause=e) from e

        if not result.data:
            self.storage.delete_file(key)
            raise TransportFailure("Failed to create post")

        logger.info(f"Created post {result.data[0]['id']} for {user_id}")
        return PostResponse(**result.data[0])
