"""Authentication service for password handling, login and user lookup."""

import logging
from dataclasses import dataclass
from datetime import datetime

from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.config import get_settings
from src.exceptions import ConflictError, InvalidCredentials, NotFound, ValidationError
from src.models.user import User

logger = logging.getLogger(__name__)
settings = get_settings()

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


@dataclass(frozen=True)
class SessionGrant:
    """Result of a successful login."""

    user_id: str
    name: str
    email: str
    created_at: datetime
    session_id: str


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """Verify a password against its hash.

    A stored hash that passlib cannot parse counts as a mismatch.
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError) as e:
        logger.warning(f"Stored password hash could not be verified: {e}")
        return False


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


def resolve_user(db: Session, user_id: str) -> User:
    """Load the user behind a session id, or raise NotFound."""
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        logger.info(f"Session refers to missing user {user_id}")
        raise NotFound("User not found")
    return user


def login(db: Session, email: str | None, password: str | None) -> SessionGrant:
    """Verify credentials and return a session grant.

    Unknown email and wrong password raise the same InvalidCredentials error;
    only the server log tells them apart.
    """
    if not email or not password:
        logger.info("Login rejected: missing email or password")
        raise ValidationError("Email and password are required")

    user = get_user_by_email(db, email)
    if user is None:
        # Spend the same hashing work as a real comparison
        pwd_context.dummy_verify()
        logger.info(f"Login failed for {email}: no such user")
        raise InvalidCredentials()

    if not verify_password(password, user.password_hash):
        logger.info(f"Login failed for {email}: password mismatch")
        raise InvalidCredentials()

    logger.info(f"Login successful for user {user.id}")
    return SessionGrant(
        user_id=user.id,
        name=user.name,
        email=user.email,
        created_at=user.created_at,
        session_id=user.id,
    )


def register_user(db: Session, name: str, email: str, password: str) -> User:
    """Create a new user with a freshly hashed password."""
    if not name.strip() or not email.strip() or not password:
        raise ValidationError("Name, email and password are required")

    if get_user_by_email(db, email):
        raise ConflictError("Email already registered")

    user = User(name=name.strip(), email=email, password_hash=get_password_hash(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        db.rollback()
        raise ConflictError("Email already registered") from None
    db.refresh(user)
    logger.info(f"Registered user {user.id}")
    return user
