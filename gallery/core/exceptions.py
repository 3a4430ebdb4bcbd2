"""
Error taxonomy shared by the service layer.

Services raise these instead of HTTPException; gallery.main maps them to
responses. "Not found" while reconciling a profile never reaches this layer.
"""

from typing import Optional

FOREIGN_KEY_VIOLATION = "23503"


class GalleryError(Exception):
    status_code: int = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(GalleryError):
    status_code = 404


class AuthenticationError(GalleryError):
    status_code = 401


class InvalidInputError(GalleryError):
    status_code = 400


class TransportFailure(GalleryError):
    """A call to Supabase could not complete."""

    status_code = 502
    stage = "remote call"

    def __init__(self, detail: str, cause: Optional[BaseException] = None):
        super().__init__(f"{self.stage} failed: {detail}")
        self.cause = cause


class ProfileLookupError(TransportFailure):
    stage = "profile lookup"


class ProfileInsertError(TransportFailure):
    stage = "profile insert"


class ReactionLookupError(TransportFailure):
    stage = "reaction lookup"


class ReactionWriteError(TransportFailure):
    stage = "reaction write"


class StorageUploadError(TransportFailure):
    stage = "image upload"


class IntegrityAnomaly(GalleryError):
    """Rows that break an invariant the store should enforce. Logged, not raised."""

    def __init__(self, table: str, key: dict, count: int):
        super().__init__(f"{count} rows in {table} for {key}")
        self.table = table
        self.key = key
        self.count = count
