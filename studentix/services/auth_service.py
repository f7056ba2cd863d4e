"""Authentication service for accounts, sessions and JWT handling."""
import logging
import uuid
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session as DbSession

from studentix.config import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    ALGORITHM,
    BCRYPT_ROUNDS,
    SECRET_KEY,
    SESSION_EXTEND_MINUTES,
)
from studentix.models.db.user import Session, User, UserRole
from studentix.services.outcomes import Failure, Outcome

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return bcrypt.checkpw(
        plain_password.encode("utf-8"), hashed_password.encode("utf-8")
    )


def create_access_token(user: User, jti: str | None = None) -> tuple[str, str, datetime]:
    """Create a JWT access token carrying the user's role.

    Returns:
        Tuple of (token, jti, expires_at)
    """
    if jti is None:
        jti = str(uuid.uuid4())

    expire = datetime.now(timezone.utc) + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {
        "sub": str(user.id),
        "role": user.role,
        "exp": expire,
        "jti": jti,
    }
    encoded_jwt = jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)
    return encoded_jwt, jti, expire


def verify_token(token: str) -> dict | None:
    """Verify and decode a JWT token.

    Returns:
        Decoded token payload or None if invalid.
    """
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
    if not payload.get("role"):
        return None
    return payload


def get_user_by_email(db: DbSession, email: str) -> User | None:
    """Get user by email."""
    return db.execute(select(User).where(User.email == email)).scalar_one_or_none()


def get_user_by_id(db: DbSession, user_id: int) -> User | None:
    """Get user by ID."""
    return db.get(User, user_id)


def create_user(
    db: DbSession,
    email: str,
    password: str,
    full_name: str,
    role: UserRole,
    is_active: bool = False,
) -> Outcome[User]:
    """Create a new user. Accounts start inactive unless stated otherwise."""
    if get_user_by_email(db, email) is not None:
        return Outcome.fail(Failure.EMAIL_TAKEN)

    user = User(
        email=email,
        hashed_password=hash_password(password),
        full_name=full_name,
        role=role.value,
        is_active=is_active,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return Outcome.fail(Failure.EMAIL_TAKEN)
    db.refresh(user)
    logger.info(f"Registered {role.value} account {user.id} ({email})")
    return Outcome.success(user)


def authenticate(db: DbSession, email: str, password: str) -> User | None:
    """Return the user if the credentials match, regardless of activation."""
    user = get_user_by_email(db, email)
    if user is None:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


def create_session(
    db: DbSession, user_id: int, token_jti: str, expires_at: datetime
) -> Session:
    """Create a new session for user."""
    session = Session(
        user_id=user_id,
        token_jti=token_jti,
        expires_at=expires_at,
    )
    db.add(session)
    db.commit()
    db.refresh(session)
    return session


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def get_active_session(db: DbSession, token_jti: str) -> Session | None:
    """Get an active, unexpired session by token JTI."""
    session = db.execute(
        select(Session).where(
            Session.token_jti == token_jti,
            Session.is_active == True,  # noqa: E712
        )
    ).scalar_one_or_none()
    if session is None:
        return None
    if _as_utc(session.expires_at) <= datetime.now(timezone.utc):
        return None
    return session


def extend_session(db: DbSession, session: Session) -> Session:
    """Extend session expiration and update last activity."""
    now = datetime.now(timezone.utc)
    session.last_activity = now
    session.expires_at = max(
        _as_utc(session.expires_at), now + timedelta(minutes=SESSION_EXTEND_MINUTES)
    )
    db.commit()
    return session


def invalidate_session(db: DbSession, token_jti: str) -> None:
    """Invalidate a session by token JTI."""
    session = db.execute(
        select(Session).where(Session.token_jti == token_jti)
    ).scalar_one_or_none()
    if session:
        session.is_active = False
        db.commit()
