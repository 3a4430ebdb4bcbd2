"""
Core dependencies for route protection and service wiring
"""

from fastapi import Depends, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from gallery.core.exceptions import AuthenticationError
from gallery.database.supabase_client import get_auth_client, get_supabase
from gallery.modules.auth.service import AuthService
from gallery.modules.users.service import ProfileService
from supabase import Client
from typing import Any, Dict, Optional

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_sign_in_service(auth_client: Client = Depends(get_auth_client)) -> AuthService:
    """AuthService for flows that adopt a session (login, register, OAuth)"""
    return AuthService(auth_client)


def get_profile_service(supabase: Client = Depends(get_supabase)) -> ProfileService:
    return ProfileService(supabase)


def get_current_token(
    credentials: HTTPAuthorizationCredentials = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    return credentials.credentials


def get_current_user(
    token: str = Depends(get_current_token),
    auth_service: AuthService = Depends(get_auth_service),
    profiles: ProfileService = Depends(get_profile_service)
) -> Dict[str, Any]:
    """Resolve the bearer token to a user and reconcile their profile row.

    Every restored session goes through here, so any authenticated route can
    rely on the users row existing.
    """
    user_data = auth_service.get_current_user(token)
    result = profiles.ensure_profile(user_data["id"], user_data.get("email"))
    return {**user_data, "profile_created": result.created}


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(optional_security),
    auth_service: AuthService = Depends(get_auth_service)
) -> Optional[Dict[str, Any]]:
    """Viewer identity for public routes; anonymous when no token is sent or it no longer verifies"""
    if credentials is None:
        return None
    try:
        return auth_service.get_current_user(credentials.credentials)
    except AuthenticationError:
        return None
