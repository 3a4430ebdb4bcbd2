from supabase import Client
from gallery.config import settings
from gallery.core.exceptions import (
    NotFoundError, ProfileInsertError, ProfileLookupError, TransportFailure
)
from gallery.modules.users.schemas import UserUpdate, UserResponse, ProfileEnsureResult
from typing import Optional
import logging

logger = logging.getLogger(__name__)

# Postgres unique_violation; another request created the row first.
UNIQUE_VIOLATION = "23505"


def default_username(identity: str, email_hint: Optional[str] = None) -> str:
    """Email local part when there is one, otherwise prefix + head of the identity."""
    if email_hint:
        local_part = email_hint.split("@")[0]
        if local_part:
            return local_part
    return f"{settings.profile_name_prefix}{identity[:settings.profile_id_prefix_length]}"


class ProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def ensure_profile(self, identity: str, email_hint: Optional[str] = None) -> ProfileEnsureResult:
        """Make sure a users row exists for an authenticated identity.

        Lookup and insert failures raise ProfileLookupError and
        ProfileInsertError respectively. An empty lookup is the only thing
        that leads to an insert.
        """
        try:
            result = self.supabase.table("users")\
                .select("id")\
                .eq("id", identity)\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.error(f"Profile lookup failed for {identity}: {e}")
            raise ProfileLookupError(str(e), cause=e) from e

        if result.data:
            return ProfileEnsureResult(created=False)

        username = default_username(identity, email_hint)
        try:
            self.supabase.table("users").insert({
                "id": identity,
                "username": username
            }).execute()
        except Exception as e:
            if getattr(e, "code", None) == UNIQUE_VIOLATION:
                logger.info(f"Profile {identity} was created concurrently")
                return ProfileEnsureResult(created=False)
            logger.error(f"Profile insert failed for {identity}: {e}")
            raise ProfileInsertError(str(e), cause=e) from e

        logger.info(f"Created profile {identity} as {username!r}")
        return ProfileEnsureResult(created=True)

    def get_profile(self, user_id: str) -> UserResponse:
        """Get user profile by ID"""
        try:
            result = self.supabase.table("users")\
                .select("*")\
                .eq("id", user_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            raise TransportFailure(str(e), cause=e) from e

        if not result.data:
            raise NotFoundError("User not found")
        return UserResponse(**result.data[0])

    def update_profile(self, user_id: str, user_data: UserUpdate) -> UserResponse:
        """Update user profile; only fields that were sent are written"""
        update_data = {}
        if user_data.username is not None:
            update_data["username"] = user_data.username
        if user_data.avatar_url is not None:
            update_data["avatar_url"] = user_data.avatar_url
        if user_data.bio is not None:
            update_data["bio"] = user_data.bio

        if not update_data:
            return self.get_profile(user_id)

        try:
            result = self.supabase.table("users")\
                .update(update_data)\
                .eq("id", user_id)\
                .execute()
        except Exception as e:
            raise TransportFailure(str(e), cause=e) from e

        if not result.data:
            raise NotFoundError("User not found")
        return UserResponse(**result.data[0])
