import hashlib
import time
from supabase import Client
from gallery.config import settings
from gallery.core.exceptions import AuthenticationError, GalleryError, InvalidInputError, TransportFailure
from gallery.modules.auth.schemas import LoginRequest, RegisterRequest, TokenResponse, RegisterResponse
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)

# In-memory cache for get_current_user to reduce Supabase auth calls (e.g. many parallel requests with same token)
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500


def _user_payload(user) -> Dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "user_metadata": user.user_metadata or {},
        "app_metadata": user.app_metadata or {},
    }


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def register(self, register_data: RegisterRequest) -> RegisterResponse:
        """Register a new user using Supabase Auth"""
        try:
            auth_response = self.supabase.auth.sign_up({
                "email": register_data.email,
                "password": register_data.password,
            })

            if not auth_response.user:
                raise InvalidInputError("Failed to register user")

            return RegisterResponse(
                user_id=auth_response.user.id,
                email=auth_response.user.email or register_data.email,
                message="User registered successfully"
            )
        except GalleryError:
            raise
        except Exception as e:
            error_message = str(e)
            if "already registered" in error_message.lower() or "already exists" in error_message.lower():
                raise InvalidInputError("User already exists") from e
            raise TransportFailure(f"Registration failed: {error_message}", cause=e) from e

    def login(self, login_data: LoginRequest) -> TokenResponse:
        """Authenticate user using Supabase Auth"""
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })

            if not auth_response.user or not auth_response.session:
                raise AuthenticationError("Invalid credentials")

            return TokenResponse(
                access_token=auth_response.session.access_token,
                refresh_token=auth_response.session.refresh_token,
                user_id=auth_response.user.id,
                email=auth_response.user.email or login_data.email
            )
        except GalleryError:
            raise
        except Exception as e:
            error_message = str(e)
            if "invalid" in error_message.lower() or "credentials" in error_message.lower():
                raise AuthenticationError("Invalid email or password") from e
            raise TransportFailure(f"Login failed: {error_message}", cause=e) from e

    def complete_oauth_redirect(self, access_token: str, refresh_token: Optional[str] = None) -> TokenResponse:
        """Adopt the token pair an OAuth provider redirected back with"""
        try:
            auth_response = self.supabase.auth.set_session(access_token, refresh_token or "")
        except Exception as e:
            logger.error(f"Failed to set session from OAuth redirect: {e}")
            raise AuthenticationError("Invalid or expired OAuth tokens") from e

        session = auth_response.session
        if not session or not session.user:
            raise AuthenticationError("OAuth redirect did not produce a session")

        return TokenResponse(
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            user_id=session.user.id,
            email=session.user.email
        )

    def oauth_url(self, provider: str) -> str:
        """Provider URL the client should be sent to for an OAuth sign-in"""
        credentials: Dict[str, Any] = {"provider": provider}
        if settings.oauth_redirect_url:
            credentials["options"] = {"redirect_to": settings.oauth_redirect_url}
        try:
            response = self.supabase.auth.sign_in_with_oauth(credentials)
        except Exception as e:
            raise InvalidInputError(f"OAuth provider not available: {provider}") from e
        return response.url

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Get current user details from Supabase Auth token. Uses short TTL cache to reduce auth API calls."""
        cache_key = hashlib.sha256(token.encode()).hexdigest()
        now = time.monotonic()
        if cache_key in _AUTH_USER_CACHE:
            user_data, expiry = _AUTH_USER_CACHE[cache_key]
            if now < expiry:
                return user_data
            del _AUTH_USER_CACHE[cache_key]

        try:
            user_response = self.supabase.auth.get_user(jwt=token)
        except Exception as e:
            error_msg = str(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise AuthenticationError("Invalid or expired token") from e
            raise AuthenticationError("Authentication failed") from e

        if not user_response or not user_response.user:
            raise AuthenticationError("Invalid or expired token")

        user_data = _user_payload(user_response.user)
        if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
            _AUTH_USER_CACHE[cache_key] = (user_data, now + _AUTH_CACHE_TTL_SEC)
        return user_data

    def logout(self, token: str) -> bool:
        """Revoke the caller's own session and forget the cached token"""
        _AUTH_USER_CACHE.pop(hashlib.sha256(token.encode()).hexdigest(), None)
        try:
            # Revokes by JWT; the client's own session state is left alone
            self.supabase.auth.admin.sign_out(token, "local")
            return True
        except Exception as e:
            logger.warning(f"Sign out failed: {e}")
            return False


def clear_auth_cache():
    _AUTH_USER_CACHE.clear()
