"""Request gate: per-request session check in front of every route."""

import logging
from collections.abc import Iterable, Mapping
from enum import StrEnum

from starlette.requests import HTTPConnection
from starlette.responses import JSONResponse, RedirectResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from src.exceptions import Unauthorized
from src.services import session

logger = logging.getLogger(__name__)

IDENTITY_HEADER = "x-user-id"

API_PREFIX = "/api/"

# API paths reachable without a session
EXEMPT_PATHS = frozenset(
    {
        "/api/auth/check",
        "/api/test-db",
        "/api/auth/register",
        "/api/auth/login",
    }
)

# Page paths that send anonymous visitors to the login page
PROTECTED_PREFIXES = ("/portfolio",)

LOGIN_PATH = "/login"


class GateDecision(StrEnum):
    """Outcome of evaluating a request at the gate."""

    PASS = "pass"
    AUTHORIZED = "authorized"
    REJECT = "reject"
    REDIRECT = "redirect"


def _normalize(path: str) -> str:
    return path.rstrip("/") or "/"


def _under_prefix(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix + "/")


class RequestGate:
    """ASGI middleware deciding whether a request may reach its handler.

    API requests outside the exemption list need a session cookie; the user id
    it carries is forwarded to handlers in the ``x-user-id`` header. Protected
    pages redirect to the login page when no cookie is present. Any inbound
    ``x-user-id`` header is dropped before the decision so clients cannot set
    it themselves.
    """

    def __init__(
        self,
        app: ASGIApp,
        exempt_paths: Iterable[str] = EXEMPT_PATHS,
        protected_prefixes: Iterable[str] = PROTECTED_PREFIXES,
        login_path: str = LOGIN_PATH,
    ):
        self.app = app
        self.exempt_paths = frozenset(_normalize(p) for p in exempt_paths)
        self.protected_prefixes = tuple(_normalize(p) for p in protected_prefixes)
        self.login_path = login_path

    def evaluate(self, path: str, cookies: Mapping[str, str]) -> tuple[GateDecision, str | None]:
        """Decide what to do with a request for ``path``.

        Returns the decision and, for authorized API requests, the user id.
        """
        path = _normalize(path)

        if path.startswith(API_PREFIX) or path == API_PREFIX.rstrip("/"):
            if path in self.exempt_paths:
                return GateDecision.PASS, None
            user_id = session.read(cookies)
            if user_id is None:
                return GateDecision.REJECT, None
            return GateDecision.AUTHORIZED, user_id

        if path in self.exempt_paths:
            return GateDecision.PASS, None

        if any(_under_prefix(path, prefix) for prefix in self.protected_prefixes):
            if session.read(cookies) is None:
                return GateDecision.REDIRECT, None

        return GateDecision.PASS, None

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        scope = dict(scope)
        scope["headers"] = [
            (key, value)
            for key, value in scope["headers"]
            if key.lower() != IDENTITY_HEADER.encode("latin-1")
        ]

        connection = HTTPConnection(scope)
        decision, user_id = self.evaluate(scope["path"], connection.cookies)

        if decision == GateDecision.REJECT:
            logger.debug(f"Rejected unauthenticated request to {scope['path']}")
            response = JSONResponse(
                {"error": Unauthorized.default_message},
                status_code=Unauthorized.status_code,
            )
            await response(scope, receive, send)
            return

        if decision == GateDecision.REDIRECT:
            logger.debug(f"Redirecting anonymous request for {scope['path']} to {self.login_path}")
            response = RedirectResponse(url=self.login_path, status_code=307)
            await response(scope, receive, send)
            return

        if decision == GateDecision.AUTHORIZED:
            scope["headers"].append(
                (IDENTITY_HEADER.encode("latin-1"), user_id.encode("latin-1"))
            )

        await self.app(scope, receive, send)
