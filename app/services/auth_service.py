"""
Auth service - registration and login use cases.
Design: Endpoints stay thin; every rule about credentials lives here.
Validation failures raise ValidationError with a field-specific message,
except login, which reports unknown email and wrong password identically.
"""

import logging
from dataclasses import dataclass
from typing import Any

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.config import get_settings
from app.core.errors import AuthError, ConflictError, ServerError, ValidationError
from app.core.sanitize import (
    is_strong_password,
    is_valid_email,
    sanitize_email,
    sanitize_string,
)
from app.core.security import (
    DUMMY_PASSWORD_HASH,
    ROLES,
    create_access_token,
    hash_password,
    verify_password,
)
from app.db.models.user import User
from app.db.repositories.user_repository import UserRepository
from app.schemas.user import UserPublic

logger = logging.getLogger(__name__)

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_BYTES = 72  # bcrypt input limit
INVALID_CREDENTIALS = "Invalid email or password"


@dataclass
class AuthResult:
    token: str
    user: UserPublic


def _is_missing(value: Any) -> bool:
    return value is None or value == ""


def resolve_role(requested: Any, allow_admin: bool = True) -> str:
    """Only an exact 'admin' or 'user' is honoured; anything else is 'user'."""
    if requested not in ROLES:
        return "user"
    if requested == "admin" and not allow_admin:
        return "user"
    return requested


def validate_registration(name: str, email: str, password: str) -> None:
    """Apply name, email and password rules to already-sanitized values."""
    if len(name) < NAME_MIN_LENGTH:
        raise ValidationError("Name must be at least 2 characters long")
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError("Name must not exceed 50 characters")
    if not is_valid_email(email):
        raise ValidationError("Please provide a valid email address")
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationError("Password must be at least 6 characters long")
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValidationError("Password must not exceed 72 bytes")
    if not is_strong_password(password):
        raise ValidationError("Password must contain at least one uppercase letter and one number")


class AuthService:
    """Orchestrates sanitizer, password hasher, credential store and token issuer."""

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo
        self.settings = get_settings()

    async def register(self, name: Any, email: Any, password: Any, role: Any = None) -> AuthResult:
        if _is_missing(name) or _is_missing(email) or _is_missing(password):
            raise ValidationError("All fields (name, email, password) are required")

        clean_name = sanitize_string(name)
        clean_email = sanitize_email(email)
        clean_password = str(password)
        validate_registration(clean_name, clean_email, clean_password)
        user_role = resolve_role(role, self.settings.allow_admin_self_registration)

        try:
            if await self.user_repo.get_by_email(clean_email):
                raise ConflictError("Email already registered. Please use a different email or login.")
            hashed = await run_in_threadpool(hash_password, clean_password)
            user = await self.user_repo.add(
                User(name=clean_name, email=clean_email, hashed_password=hashed, role=user_role)
            )
        except IntegrityError as exc:
            # Lost a race with a concurrent registration for the same email
            raise ConflictError("Email already registered. Please use a different email or login.") from exc
        except SQLAlchemyError as exc:
            logger.exception("Register failed for %s", clean_email)
            raise ServerError("Server error during registration") from exc

        logger.info("Registered user id=%s role=%s", user.id, user.role)
        return AuthResult(
            token=create_access_token(user.id, user.role),
            user=UserPublic.model_validate(user),
        )

    async def login(self, email: Any, password: Any) -> AuthResult:
        if _is_missing(email) or _is_missing(password):
            raise ValidationError("Email and password are required")

        clean_email = sanitize_email(email)
        clean_password = str(password)
        if not is_valid_email(clean_email):
            raise ValidationError("Please provide a valid email address")

        try:
            user = await self.user_repo.get_by_email(clean_email)
        except SQLAlchemyError as exc:
            logger.exception("Login lookup failed for %s", clean_email)
            raise ServerError("Server error during login") from exc

        hashed = user.hashed_password if user else DUMMY_PASSWORD_HASH
        matches = await run_in_threadpool(verify_password, clean_password, hashed)
        if not user or not matches:
            logger.info("Failed login for %s", clean_email)
            raise AuthError(INVALID_CREDENTIALS)

        return AuthResult(
            token=create_access_token(user.id, user.role),
            user=UserPublic.model_validate(user),
        )
