"""User/auth request and response schemas - API contract."""

from typing import Any

from pydantic import BaseModel


class RegisterRequest(BaseModel):
    # Loosely typed on purpose: AuthService reports field-level messages
    name: Any = None
    email: Any = None
    password: Any = None
    role: Any = None


class LoginRequest(BaseModel):
    email: Any = None
    password: Any = None


class UserPublic(BaseModel):
    """Public view of a user. Never carries the password hash."""

    id: str
    name: str
    email: str
    role: str

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    success: bool = True
    token: str
    user: UserPublic
