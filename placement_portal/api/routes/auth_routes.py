"""
Authentication Routes

POST /auth/register - Register new user (role row created alongside)
POST /auth/login - Login and get JWT token
GET /auth/me - Get current user info
"""

from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy import text

from placement_portal.db.postgres import get_db_session
from placement_portal.core.auth import hash_password, verify_password, create_access_token, get_current_user
from placement_portal.schemas.schemas import (
    RegisterRequest, LoginRequest, TokenResponse, UserResponse, MessageResponse, CurrentUser, UserRole
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=MessageResponse, status_code=201)
async def register(request: RegisterRequest):
    """
    Register a new user account.

    After registration, login to get access token, then fill in the profile.
    """
    with get_db_session() as db:
        result = db.execute(
            text("SELECT user_id FROM users WHERE email = :email"),
            {"email": request.email}
        )
        if result.fetchone():
            raise HTTPException(status_code=400, detail="Email already registered")

        result = db.execute(
            text("""
                INSERT INTO users (email, password_hash)
                VALUES (:email, :password_hash)
                RETURNING user_id
            """),
            {"email": request.email, "password_hash": hash_password(request.password)}
        )
        user_id = result.fetchone()[0]

        db.execute(
            text("INSERT INTO user_roles (user_id, role) VALUES (:user_id, :role)"),
            {"user_id": user_id, "role": request.role.value}
        )

    return MessageResponse(message=f"Registered successfully as {request.role.value}. Please login.")


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    with get_db_session() as db:
        result = db.execute(
            text("""
                SELECT u.user_id, u.password_hash, r.role, u.is_active
                FROM users u LEFT JOIN user_roles r ON r.user_id = u.user_id
                WHERE u.email = :email
            """),
            {"email": request.email}
        )
        user = result.fetchone()

    if not user:
        raise HTTPException(status_code=401, detail="Invalid email or password")

    user_id, password_hash, role, is_active = user
    role = role or UserRole.student.value

    if not is_active:
        raise HTTPException(status_code=403, detail="Account deactivated")

    if not verify_password(request.password, password_hash):
        raise HTTPException(status_code=401, detail="Invalid email or password")

    token = create_access_token(data={"sub": str(user_id)})

    return TokenResponse(access_token=token, user_id=user_id, role=role)


@router.get("/me", response_model=UserResponse)
async def get_me(user: CurrentUser = Depends(get_current_user)):
    """Get current authenticated user's info."""
    return UserResponse(user_id=user.user_id, email=user.email, role=user.role.value, is_active=True)
