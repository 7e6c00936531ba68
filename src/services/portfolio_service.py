"""Portfolio document storage and form defaults."""

import copy
import logging
from typing import Any

from sqlalchemy.orm import Session

from src.models.user import User
from src.schemas.portfolio import PORTFOLIO_DEFAULTS

logger = logging.getLogger(__name__)


def _fill(value: Any, default: Any) -> Any:
    """Fill one field of a document from its default."""
    if value is None:
        return copy.deepcopy(default)

    if isinstance(default, dict):
        if not isinstance(value, dict):
            return copy.deepcopy(value)
        merged = {key: _fill(value.get(key), sub_default) for key, sub_default in default.items()}
        # Keys outside the form schema are carried through untouched
        for key, extra in value.items():
            if key not in default:
                merged[key] = copy.deepcopy(extra)
        return merged

    if isinstance(default, list) and default and isinstance(default[0], dict):
        if not isinstance(value, list):
            return copy.deepcopy(value)
        return [_fill(entry, default[0]) for entry in value]

    return copy.deepcopy(value)


def fill_defaults(document: dict[str, Any] | None) -> dict[str, Any]:
    """Merge a stored portfolio over the form defaults.

    Missing or null fields take their default, nested objects are merged key
    by key, and each entry of a list of objects is filled from the entry
    template. Lists given by the document, including empty ones, are kept.
    The input is never modified.
    """
    return _fill(document or {}, PORTFOLIO_DEFAULTS)


class PortfolioService:
    """Service for reading and replacing a user's portfolio."""

    def __init__(self, db: Session):
        self.db = db

    def get_portfolio(self, user: User) -> dict[str, Any]:
        """Get the stored portfolio, or an empty document when none exists."""
        return user.portfolio or {}

    def save_portfolio(self, user: User, document: dict[str, Any]) -> dict[str, Any]:
        """Replace the user's portfolio.

        The whole document is overwritten. Concurrent saves for the same user
        are last-write-wins.
        """
        user.portfolio = copy.deepcopy(document)
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"Saved portfolio for user {user.id} ({len(document)} top-level fields)")
        return user.portfolio or {}

    def get_form(self, user: User) -> dict[str, Any]:
        """Get the portfolio with every form field present."""
        return fill_defaults(user.portfolio)
