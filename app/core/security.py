"""
Security: password hashing and JWT.
Passwords are bcrypt-hashed via passlib; tokens are stateless HS256 JWTs
carrying the user id and role, valid for exactly 7 days.
"""

from dataclasses import dataclass
from datetime import datetime, timezone, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import get_settings

settings = get_settings()
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)

TOKEN_LIFETIME = timedelta(days=7)
ROLES = ("user", "admin")


@dataclass(frozen=True)
class TokenClaims:
    """Identity decoded from a verified token."""

    user_id: str
    role: str
    issued_at: datetime
    expires_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def hash_password(password: str) -> str:
    """One-way salted hash for storage. Never store plain passwords."""
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    """Constant-time comparison for login. Malformed hashes never match."""
    try:
        return pwd_context.verify(plain, hashed)
    except (ValueError, TypeError):
        return False


# Verified against on unknown emails so login timing does not reveal accounts
DUMMY_PASSWORD_HASH = hash_password("catalog-timing-equalizer")


def create_access_token(user_id: str, role: str, now: datetime | None = None) -> str:
    """Sign a token for the user. Expiry is always issuance + 7 days."""
    issued_at = now or datetime.now(timezone.utc)
    to_encode = {
        "sub": str(user_id),
        "role": role,
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + TOKEN_LIFETIME).timestamp()),
    }
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, now: datetime | None = None) -> TokenClaims | None:
    """Verify signature and expiry. Returns claims, or None if the token is unusable."""
    if not isinstance(token, str) or not token:
        return None
    try:
        # Expiry is checked below so that exp == now counts as expired
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"verify_exp": False},
        )
    except JWTError:
        return None

    user_id = payload.get("sub")
    role = payload.get("role")
    iat = payload.get("iat")
    exp = payload.get("exp")
    if not isinstance(user_id, str) or not user_id or role not in ROLES:
        return None
    if not all(isinstance(v, int) and not isinstance(v, bool) for v in (iat, exp)):
        return None

    current = now or datetime.now(timezone.utc)
    if exp <= current.timestamp():
        return None
    return TokenClaims(
        user_id=user_id,
        role=role,
        issued_at=datetime.fromtimestamp(iat, tz=timezone.utc),
        expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
    )
