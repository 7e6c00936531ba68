"""Session cookie encoding and decoding.

By default the cookie value is the raw user id and is trusted as-is when it
has the right shape. With ``SESSION_SIGNING`` enabled the value becomes a
signed JWT whose subject is the user id.
"""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from starlette.responses import Response

from src.config import get_settings

logger = logging.getLogger(__name__)

COOKIE_NAME = "token"

_USER_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


@dataclass(frozen=True)
class CookieDescriptor:
    """Everything needed to set the session cookie on a response."""

    name: str
    value: str
    max_age: int
    httponly: bool = True
    secure: bool = False
    samesite: str = "strict"
    path: str = "/"


def is_valid_user_id(value: str | None) -> bool:
    """Check that a value has the shape of a user id."""
    return bool(value) and _USER_ID_PATTERN.match(value) is not None


def _encode_value(user_id: str) -> str:
    settings = get_settings()
    if not settings.session_signing:
        return user_id
    expire = datetime.now(UTC) + timedelta(seconds=settings.session_max_age_seconds)
    return jwt.encode(
        {"sub": user_id, "exp": expire},
        settings.session_secret,
        algorithm=settings.session_algorithm,
    )


def _decode_value(value: str) -> str | None:
    settings = get_settings()
    if not settings.session_signing:
        return value
    try:
        payload = jwt.decode(
            value, settings.session_secret, algorithms=[settings.session_algorithm]
        )
    except JWTError as e:
        logger.debug(f"Rejected session token: {e}")
        return None
    return payload.get("sub")


def issue(user_id: str) -> CookieDescriptor:
    """Build the session cookie for a user."""
    settings = get_settings()
    return CookieDescriptor(
        name=COOKIE_NAME,
        value=_encode_value(user_id),
        max_age=settings.session_max_age_seconds,
        secure=settings.is_production,
    )


def read(cookies: Mapping[str, str]) -> str | None:
    """Return the user id carried by the session cookie, if any."""
    value = cookies.get(COOKIE_NAME)
    if not value:
        return None
    user_id = _decode_value(value)
    if not is_valid_user_id(user_id):
        return None
    return user_id


def apply(response: Response, cookie: CookieDescriptor) -> None:
    """Set the session cookie on a response."""
    response.set_cookie(
        key=cookie.name,
        value=cookie.value,
        max_age=cookie.max_age,
        path=cookie.path,
        secure=cookie.secure,
        httponly=cookie.httponly,
        samesite=cookie.samesite,
    )


def clear(response: Response) -> None:
    """Remove the session cookie from the client."""
    settings = get_settings()
    response.delete_cookie(
        key=COOKIE_NAME,
        path="/",
        secure=settings.is_production,
        httponly=True,
        samesite="strict",
    )
