"""Debug API endpoints for development and troubleshooting."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.database import get_db
from src.exceptions import InternalError
from src.schemas.auth import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["debug"])


@router.get("/test-db", response_model=MessageResponse)
def test_db(db: Annotated[Session, Depends(get_db)]):
    """Check that the database answers a trivial query."""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Database connection check failed: {e}")
        raise InternalError("Database connection failed") from e
    return MessageResponse(message="Database connection successful")
