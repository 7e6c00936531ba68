"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import (
    MessageResponse,
    UserCreatedResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from src.schemas.portfolio import PORTFOLIO_DEFAULTS

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserResponse",
    "UserCreatedResponse",
    "MessageResponse",
    "PORTFOLIO_DEFAULTS",
]
