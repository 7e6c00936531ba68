"""User model."""

import uuid

from sqlalchemy import JSON, Column, String

from src.database import Base
from src.models.mixins import TimestampMixin


def generate_user_id() -> str:
    """Generate an opaque user identifier."""
    return uuid.uuid4().hex


class User(Base, TimestampMixin):
    """User model for authentication and portfolio ownership."""

    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=generate_user_id)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    # Free-form profile document; NULL until the first save
    portfolio = Column(JSON, nullable=True)
