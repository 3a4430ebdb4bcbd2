from fastapi import APIRouter, Depends
from gallery.database.supabase_client import get_auth_client
from gallery.modules.auth.events import AuthEventStream, SignInReconciler
from gallery.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse,
    OAuthCallbackRequest, OAuthUrlResponse, SessionResponse
)
from gallery.modules.auth.service import AuthService
from gallery.modules.users.service import ProfileService
from gallery.core.dependencies import (
    get_auth_service, get_sign_in_service, get_profile_service, get_current_token, get_current_user
)
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(
    register_data: RegisterRequest,
    service: AuthService = Depends(get_sign_in_service),
    profiles: ProfileService = Depends(get_profile_service),
    auth_client: Client = Depends(get_auth_client)
):
    """Register a new user; the profile row is created if sign-up signs them in"""
    reconciler = SignInReconciler(profiles)
    with AuthEventStream(auth_client.auth).subscribe(reconciler):
        response = service.register(register_data)
    reconciler.raise_for_errors()
    response.profile_created = reconciler.created
    return response


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_sign_in_service),
    profiles: ProfileService = Depends(get_profile_service),
    auth_client: Client = Depends(get_auth_client)
):
    """Login and get access token"""
    reconciler = SignInReconciler(profiles)
    with AuthEventStream(auth_client.auth).subscribe(reconciler):
        response = service.login(login_data)
    reconciler.raise_for_errors()
    response.profile_created = reconciler.created
    return response


@router.post("/callback", response_model=TokenResponse)
async def oauth_callback(
    callback_data: OAuthCallbackRequest,
    service: AuthService = Depends(get_sign_in_service),
    profiles: ProfileService = Depends(get_profile_service)
):
    """Complete an OAuth redirect with the token pair from the URL fragment"""
    response = service.complete_oauth_redirect(callback_data.access_token, callback_data.refresh_token)
    result = profiles.ensure_profile(response.user_id, response.email)
    response.profile_created = result.created
    return response


@router.get("/oauth/{provider}", response_model=OAuthUrlResponse)
async def oauth_url(
    provider: str,
    service: AuthService = Depends(get_sign_in_service)
):
    """URL to send the browser to for an OAuth sign-in"""
    return OAuthUrlResponse(provider=provider, url=service.oauth_url(provider))


@router.get("/session", response_model=SessionResponse)
async def restore_session(current_user: Dict = Depends(get_current_user)):
    """Restore an existing session from its bearer token"""
    return SessionResponse(
        user_id=current_user["id"],
        email=current_user.get("email"),
        profile_created=current_user["profile_created"]
    )


@router.post("/logout", status_code=200)
async def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and invalidate token"""
    service.logout(token)
    return {"message": "Logged out successfully"}
