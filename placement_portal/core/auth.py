"""
Authentication - bcrypt passwords, HS256 bearer tokens and the
dependencies that turn a token into an explicit CurrentUser.

The token carries only the user id ("sub"). Role and active flag are
read from the database on every request, so a role change applies to
the next call without re-login.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import text

from placement_portal.core.config import get_settings
from placement_portal.db.postgres import get_db_session
from placement_portal.schemas.schemas import CurrentUser, UserRole

settings = get_settings()

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# auto_error=False: a missing header is answered with 401 below, not 403
bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    return pwd_context.verify(plain_password, password_hash)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Sign the claims with an expiry (JWT_EXPIRE_MINUTES unless given)."""
    lifetime = expires_delta if expires_delta is not None else timedelta(minutes=settings.jwt_expire_minutes)
    claims = {**data, "exp": datetime.now(timezone.utc) + lifetime}
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """Claims of a valid, unexpired token; None otherwise."""
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )


def load_user(user_id: int) -> Optional[CurrentUser]:
    """
    Fetch user + role from the database.
    Users without a user_roles row are treated as students.
    """
    with get_db_session() as db:
        result = db.execute(
            text("""
                SELECT u.user_id, u.email, u.is_active, r.role
                FROM users u LEFT JOIN user_roles r ON r.user_id = u.user_id
                WHERE u.user_id = :id
            """),
            {"id": user_id}
        )
        row = result.fetchone()

    if not row:
        return None

    if not row[2]:  # is_active
        raise HTTPException(status_code=403, detail="Account deactivated")

    return CurrentUser(user_id=row[0], email=row[1], role=row[3] or UserRole.student.value)


def resolve_user(credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[CurrentUser]:
    """Return the caller for a bearer credential, or None when absent/invalid."""
    if credentials is None:
        return None

    payload = decode_token(credentials.credentials)
    if not payload or not payload.get("sub"):
        return None

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        return None

    return load_user(user_id)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> CurrentUser:
    """
    FastAPI dependency - Get current authenticated user.

    Usage:
        @app.get("/protected")
        async def route(user: CurrentUser = Depends(get_current_user)):
            return user
    """
    user = resolve_user(credentials)
    if user is None:
        raise unauthorized()
    return user


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> Optional[CurrentUser]:
    """Dependency for routes that answer unauthenticated callers themselves."""
    return resolve_user(credentials)


def require_roles(*roles: UserRole):
    """Dependency factory - restrict a route to the given roles."""
    allowed = {role.value for role in roles}

    async def dependency(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if user.role.value not in allowed:
            raise HTTPException(status_code=403, detail="Forbidden for role " + user.role.value)
        return user

    return dependency
