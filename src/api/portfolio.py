"""Portfolio API endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends

from src.api.dependencies import get_current_user, get_portfolio_service
from src.models.user import User
from src.services.portfolio_service import PortfolioService

router = APIRouter(prefix="/api/portfolio", tags=["portfolio"])


@router.get("")
def get_portfolio(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[PortfolioService, Depends(get_portfolio_service)],
) -> dict[str, Any]:
    """Get the current user's portfolio, or ``{}`` if nothing is saved yet."""
    return service.get_portfolio(current_user)


@router.post("")
def save_portfolio(
    document: Annotated[dict[str, Any], Body()],
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[PortfolioService, Depends(get_portfolio_service)],
) -> dict[str, Any]:
    """Replace the current user's portfolio with the posted document."""
    return service.save_portfolio(current_user, document)


@router.get("/form")
def get_portfolio_form(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[PortfolioService, Depends(get_portfolio_service)],
) -> dict[str, Any]:
    """Get the portfolio with every form field filled in.

    Fields the stored document lacks are populated from the form defaults.
    """
    return service.get_form(current_user)
