"""Authentication routes."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session as DbSession

from studentix.config import ACCESS_TOKEN_EXPIRE_MINUTES
from studentix.database import get_db
from studentix.dependencies import CurrentUser
from studentix.models.auth import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    UserResponse,
)
from studentix.models.db.user import UserRole
from studentix.services.auth_service import (
    authenticate,
    create_access_token,
    create_session,
    create_user,
    invalidate_session,
    verify_token,
)
from studentix.services.outcomes import unwrap
from studentix.services.user_service import user_to_response

router = APIRouter(prefix="/api/auth", tags=["auth"])
security = HTTPBearer(auto_error=False)


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(
    data: RegisterRequest,
    db: Annotated[DbSession, Depends(get_db)],
) -> UserResponse:
    """Register a new account. It stays inactive until an admin approves it."""
    if data.role == UserRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot register as Administrator",
        )

    user = unwrap(create_user(db, data.email, data.password, data.fullName, data.role))
    return user_to_response(user)


@router.post("/login", response_model=AuthResponse)
def login(
    data: LoginRequest,
    db: Annotated[DbSession, Depends(get_db)],
) -> AuthResponse:
    """Login and get JWT token."""
    user = authenticate(db, data.email, data.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is inactive. Waiting for admin approval.",
        )

    token, jti, expires_at = create_access_token(user)
    create_session(db, user.id, jti, expires_at)

    return AuthResponse(
        user=user_to_response(user),
        token=token,
        expires_in=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


@router.post("/logout", response_model=MessageResponse)
def logout(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[DbSession, Depends(get_db)],
) -> MessageResponse:
    """Logout and invalidate current session."""
    if credentials is None:
        return MessageResponse(message="Already logged out")

    payload = verify_token(credentials.credentials)
    if payload and payload.get("jti"):
        invalidate_session(db, payload["jti"])

    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserResponse)
def get_me(current_user: CurrentUser) -> UserResponse:
    """Get current user info."""
    return user_to_response(current_user)
