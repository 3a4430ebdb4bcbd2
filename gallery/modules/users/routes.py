from fastapi import APIRouter, Depends
from gallery.modules.users.schemas import UserUpdate, UserResponse
from gallery.modules.users.service import ProfileService
from gallery.core.dependencies import get_current_user, get_profile_service
from typing import Dict

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_my_profile(
    current_user: Dict = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Profile of the signed-in user"""
    return service.get_profile(current_user["id"])


@router.put("/me", response_model=UserResponse)
async def update_my_profile(
    user_data: UserUpdate,
    current_user: Dict = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Update username, avatar or bio of the signed-in user"""
    return service.update_profile(current_user["id"], user_data)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    service: ProfileService = Depends(get_profile_service)
):
    """Public profile by ID"""
    return service.get_profile(user_id)
