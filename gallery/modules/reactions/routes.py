from fastapi import APIRouter, Depends
from gallery.database.supabase_client import get_supabase
from gallery.modules.reactions.schemas import ReactionKind, ReactionToggleResult, ReactionSummary
from gallery.modules.reactions.service import ReactionService
from gallery.core.dependencies import get_current_user, get_optional_user
from supabase import Client
from typing import Dict, Optional

router = APIRouter(prefix="/posts/{post_id}/reactions", tags=["reactions"])


def get_reaction_service(supabase: Client = Depends(get_supabase)) -> ReactionService:
    return ReactionService(supabase)


@router.get("", response_model=ReactionSummary)
async def get_reactions(
    post_id: str,
    viewer: Optional[Dict] = Depends(get_optional_user),
    service: ReactionService = Depends(get_reaction_service)
):
    """Reaction counts for a post; includes the viewer's own reactions when signed in"""
    return service.summarize(post_id, viewer["id"] if viewer else None)


@router.post("/{kind}", response_model=ReactionToggleResult)
async def toggle_reaction(
    post_id: str,
    kind: ReactionKind,
    current_user: Dict = Depends(get_current_user),
    service: ReactionService = Depends(get_reaction_service)
):
    """Turn the signed-in user's reaction of this kind on or off"""
    return service.toggle_reaction(post_id, current_user["id"], kind)
