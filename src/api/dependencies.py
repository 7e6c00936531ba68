"""FastAPI dependencies for authentication and database."""

from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from src.database import get_db
from src.exceptions import Unauthorized
from src.models.user import User
from src.services.auth import resolve_user
from src.services.portfolio_service import PortfolioService


def get_current_user_id(
    x_user_id: Annotated[str | None, Header()] = None,
) -> str:
    """Get the user id the request gate attached to the request."""
    if not x_user_id:
        raise Unauthorized()
    return x_user_id


def get_current_user(
    user_id: Annotated[str, Depends(get_current_user_id)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the full user record behind the gate-supplied id."""
    return resolve_user(db, user_id)


def get_portfolio_service(
    db: Annotated[Session, Depends(get_db)],
) -> PortfolioService:
    """Get portfolio service with dependencies."""
    return PortfolioService(db)
