"""User administration routes (admin only)."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session as DbSession

from studentix.database import get_db
from studentix.dependencies import AdminUser
from studentix.models.auth import AdminUserUpdateRequest, MessageResponse, UserResponse
from studentix.models.db.user import User
from studentix.services import user_service
from studentix.services.outcomes import unwrap

router = APIRouter(prefix="/api/users", tags=["users"])


def _reject_self(target_user_id: int, current_user: User, action: str) -> None:
    if target_user_id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Cannot {action} own account",
        )


@router.get("", response_model=list[UserResponse])
def list_users(
    current_user: AdminUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> list[UserResponse]:
    """List all users."""
    return [user_service.user_to_response(user) for user in user_service.list_users(db)]


@router.put("/{user_id}/approve", response_model=MessageResponse)
def approve_user(
    user_id: int,
    current_user: AdminUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> MessageResponse:
    """Activate a pending account."""
    _reject_self(user_id, current_user, "approve")
    unwrap(user_service.set_active(db, user_id, True))
    return MessageResponse(message=f"User {user_id} approved successfully")


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def deactivate_user(
    user_id: int,
    current_user: AdminUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> Response:
    """Deactivate an account. Accounts are never hard-deleted."""
    _reject_self(user_id, current_user, "deactivate")

    target = db.get(User, user_id)
    if target is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if not target.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User is already inactive",
        )

    unwrap(user_service.set_active(db, user_id, False))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    data: AdminUserUpdateRequest,
    current_user: AdminUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> UserResponse:
    """Update another user's name, email, role or activation."""
    _reject_self(user_id, current_user, "modify")
    user = unwrap(user_service.update_user(db, user_id, data))
    return user_service.user_to_response(user)
