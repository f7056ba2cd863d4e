"""User administration service."""
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session as DbSession

from studentix.models.auth import AdminUserUpdateRequest, UserResponse
from studentix.models.db.user import User, UserRole
from studentix.services.outcomes import Failure, Outcome

logger = logging.getLogger(__name__)


def user_to_response(user: User) -> UserResponse:
    """Convert User model to UserResponse."""
    return UserResponse(
        id=user.id,
        email=user.email,
        fullName=user.full_name,
        role=UserRole(user.role),
        isActive=user.is_active,
        createdAt=user.created_at,
    )


def list_users(db: DbSession, role: UserRole | None = None) -> list[User]:
    """List all users, optionally only those with one role."""
    stmt = select(User).order_by(User.id)
    if role is not None:
        stmt = stmt.where(User.role == role.value)
    return list(db.execute(stmt).scalars().all())


def set_active(db: DbSession, user_id: int, is_active: bool) -> Outcome[User]:
    """Approve (activate) or deactivate an account."""
    user = db.get(User, user_id)
    if user is None:
        return Outcome.fail(Failure.USER_NOT_FOUND)

    user.is_active = is_active
    db.commit()
    db.refresh(user)
    logger.info(f"User {user_id} {'approved' if is_active else 'deactivated'}")
    return Outcome.success(user)


def update_user(
    db: DbSession, user_id: int, request: AdminUserUpdateRequest
) -> Outcome[User]:
    """Apply the fields present in the request."""
    user = db.get(User, user_id)
    if user is None:
        return Outcome.fail(Failure.USER_NOT_FOUND)

    if request.email is not None:
        taken = db.execute(
            select(User.id).where(User.email == request.email, User.id != user_id)
        ).first()
        if taken is not None:
            return Outcome.fail(Failure.EMAIL_TAKEN)
        user.email = request.email

    if request.fullName is not None:
        user.full_name = request.fullName
    if request.role is not None:
        user.role = request.role.value
    if request.isActive is not None:
        user.is_active = request.isActive

    db.commit()
    db.refresh(user)
    return Outcome.success(user)
