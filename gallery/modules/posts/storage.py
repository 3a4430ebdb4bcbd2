"""Supabase Storage for post images."""
import time
from supabase import Client
from gallery.config import settings
from gallery.core.exceptions import StorageUploadError
import logging

logger = logging.getLogger(__name__)


def image_key(user_id: str, filename: str) -> str:
    """Object key for an upload: owner, upload time in millis, original extension."""
    extension = filename.rsplit(".", 1)[-1].lower() if "." in filename else "bin"
    return f"{user_id}-{int(time.time() * 1000)}.{extension}"


class PostImageStorage:
    def __init__(self, supabase: Client, bucket_name: str = None):
        self.bucket_name = bucket_name or settings.storage_bucket
        self._bucket = supabase.storage.from_(self.bucket_name)

    def upload_file(self, file_content: bytes, key: str, content_type: str) -> str:
        """Upload image bytes and return their public URL"""
        try:
            self._bucket.upload(key, file_content, {"content-type": content_type})
        except Exception as e:
            logger.error(f"Failed to upload {key} to bucket {self.bucket_name}: {e}")
            raise StorageUploadError(str(e), cause=e) from e
        return self._bucket.get_public_url(key)

    def delete_file(self, key: str) -> bool:
        """Delete an uploaded image"""
        try:
            self._bucket.remove([key])
            return True
        except Exception as e:
            logger.warning("Failed to delete from storage (%s): %s", key, e)
            return False
