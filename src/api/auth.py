"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_user_id
from src.database import get_db
from src.exceptions import Unauthorized
from src.schemas.auth import (
    MessageResponse,
    UserCreatedResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from src.services import session
from src.services.auth import login as authenticate, register_user, resolve_user

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=UserCreatedResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new user."""
    return register_user(db, user_data.name, user_data.email, user_data.password)


@router.post("/login", response_model=UserResponse)
def login(
    credentials: UserLogin,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with email and password and set the session cookie."""
    grant = authenticate(db, credentials.email, credentials.password)
    session.apply(response, session.issue(grant.session_id))
    return UserResponse(id=grant.user_id, name=grant.name, email=grant.email)


@router.get("/check", response_model=UserResponse)
def check(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
):
    """Return the user behind the session cookie."""
    user_id = session.read(request.cookies)
    if user_id is None:
        raise Unauthorized()
    return resolve_user(db, user_id)


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    user_id: Annotated[str, Depends(get_current_user_id)],
):
    """Logout by clearing the session cookie on the client."""
    session.clear(response)
    return MessageResponse(message="Logged out successfully")
