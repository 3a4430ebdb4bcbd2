from pydantic import BaseModel, EmailStr
from typing import Optional


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    user_id: str
    email: Optional[str] = None
    profile_created: bool = False


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str


class RegisterResponse(BaseModel):
    user_id: str
    email: str
    message: str
    profile_created: bool = False


class OAuthCallbackRequest(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None


class OAuthUrlResponse(BaseModel):
    provider: str
    url: str


class SessionResponse(BaseModel):
    user_id: str
    email: Optional[str] = None
    profile_created: bool
