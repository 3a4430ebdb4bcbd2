from supabase import Client
from gallery.config import settings
from gallery.core.exceptions import (
    FOREIGN_KEY_VIOLATION, IntegrityAnomaly, NotFoundError, ReactionLookupError, ReactionWriteError
)
from gallery.modules.reactions.schemas import (
    ReactionKind, ReactionToggleResult, ReactionSummary
)
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)


class ReactionService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_reactions(self, post_id: str) -> List[dict]:
        """All reaction rows for a post"""
        try:
            result = self.supabase.table("reactions")\
                .select("*")\
                .eq("post_id", post_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching reactions for post {post_id}: {e}")
            raise ReactionLookupError(str(e), cause=e) from e
        return result.data or []

    def toggle_reaction(self, post_id: str, user_id: str, kind: ReactionKind) -> ReactionToggleResult:
        """Insert the reaction when absent, delete it when present.

        Only rows of the same kind are considered, so other kinds held by the
        user on this post are left alone.
        """
        kind = ReactionKind(kind)
        if settings.reaction_toggle_rpc:
            return self._toggle_with_rpc(post_id, user_id, kind)

        matching = [
            r for r in self.list_reactions(post_id)
            if r["user_id"] == user_id and r["type"] == kind.value
        ]

        if matching:
            if len(matching) > 1:
                anomaly = IntegrityAnomaly(
                    "reactions",
                    {"post_id": post_id, "user_id": user_id, "type": kind.value},
                    len(matching)
                )
                logger.warning(f"Integrity anomaly: {anomaly.detail}; removing only {matching[0]['id']}")
            try:
                self.supabase.table("reactions")\
                    .delete()\
                    .eq("id", matching[0]["id"])\
                    .execute()
            except Exception as e:
                logger.error(f"Error removing {kind.value} reaction on post {post_id}: {e}")
                raise ReactionWriteError(str(e), cause=e) from e
            return ReactionToggleResult(kind=kind, active=False)

        try:
            self.supabase.table("reactions").insert({
                "post_id": post_id,
                "user_id": user_id,
                "type": kind.value
            }).execute()
        except Exception as e:
            if getattr(e, "code", None) == FOREIGN_KEY_VIOLATION:
                raise NotFoundError("Post not found") from e
            logger.error(f"Error adding {kind.value} reaction on post {post_id}: {e}")
            raise ReactionWriteError(str(e), cause=e) from e
        return ReactionToggleResult(kind=kind, active=True)

    def _toggle_with_rpc(self, post_id: str, user_id: str, kind: ReactionKind) -> ReactionToggleResult:
        try:
            result = self.supabase.rpc(settings.reaction_toggle_rpc, {
                "p_post_id": post_id,
                "p_user_id": user_id,
                "p_type": kind.value
            }).execute()
        except Exception as e:
            if getattr(e, "code", None) == FOREIGN_KEY_VIOLATION:
                raise NotFoundError("Post not found") from e
            logger.error(f"Toggle function {settings.reaction_toggle_rpc} failed: {e}")
            raise ReactionWriteError(str(e), cause=e) from e
        return ReactionToggleResult(kind=kind, active=bool(result.data))

    def summarize(self, post_id: str, user_id: Optional[str] = None) -> ReactionSummary:
        """Per-kind counts for a post and the kinds the viewer currently has on"""
        reactions = self.list_reactions(post_id)
        counts = {}
        reacted = []
        for kind in ReactionKind:
            of_kind = [r for r in reactions if r["type"] == kind.value]
            counts[kind] = len(of_kind)
            if user_id and any(r["user_id"] == user_id for r in of_kind):
                reacted.append(kind)
        return ReactionSummary(post_id=post_id, counts=counts, reacted=reacted)
