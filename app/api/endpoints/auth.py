"""
Auth endpoints - registration and login.
Design: Thin controller; AuthService owns validation and error selection.
"""

from fastapi import APIRouter, status

from app.db.session import DbSession
from app.db.repositories.user_repository import UserRepository
from app.schemas.user import AuthResponse, LoginRequest, RegisterRequest
from app.services.auth_service import AuthService

router = APIRouter()


def _get_auth_service(session: DbSession) -> AuthService:
    return AuthService(UserRepository(session))


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(session: DbSession, data: RegisterRequest):
    """Create an account and log it in. Returns token plus public user view."""
    result = await _get_auth_service(session).register(
        data.name, data.email, data.password, data.role
    )
    return AuthResponse(token=result.token, user=result.user)


@router.post("/login", response_model=AuthResponse)
async def login(session: DbSession, data: LoginRequest):
    """Authenticate and return a token. Unknown email and bad password look the same."""
    result = await _get_auth_service(session).login(data.email, data.password)
    return AuthResponse(token=result.token, user=result.user)
