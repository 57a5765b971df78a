"""Session guard: resolves the caller's identity from the signed session cookie.

The OAuth login flow (an external identity provider) stores ``{"id", "email"}``
under the ``user`` key of the session. Nothing here talks to the database.
"""

import logging
from dataclasses import dataclass

from fastapi import Request

from .errors import UnauthorizedError

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user"


@dataclass(frozen=True)
class CurrentUser:
    id: str
    email: str | None = None


def logout_user(request: Request) -> None:
    request.session.pop(SESSION_USER_KEY, None)


def get_current_user(request: Request) -> CurrentUser:
    """FastAPI dependency for guarded endpoints.

    Raises:
        UnauthorizedError: If the session carries no user id.
    """
    data = request.session.get(SESSION_USER_KEY)
    if not isinstance(data, dict) or not data.get("id"):
        logger.info(f"[session_guard] Rejected {request.method} {request.url.path}")
        raise UnauthorizedError()
    return CurrentUser(id=str(data["id"]), email=data.get("email"))
