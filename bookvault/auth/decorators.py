"""Authentication decorators for protected endpoints.

- @auth_required - Requires a valid JWT in the Authorization header

The AuthService is looked up on the current Flask app, where create_app()
registered it; the decorator holds no state of its own.
"""

import logging
from functools import wraps

from flask import current_app, g, request

from .service import AuthService

logger = logging.getLogger(__name__)


def get_auth_service() -> AuthService:
    """Return the AuthService registered on the current app."""
    return current_app.extensions["bookvault"]["auth"]


def _authenticate_request() -> None:
    """
    Verify the request's Authorization header.

    On success stores the user id in flask.g.user_id.

    Raises:
        MissingCredential: If no token was supplied
        InvalidToken: If the token is invalid or expired
    """
    auth_header = request.headers.get("Authorization")
    g.user_id = get_auth_service().verify_token(auth_header)
    logger.debug(f"JWT authentication successful for user {g.user_id}")


def auth_required(f):
    """
    Decorator to require authentication for endpoint access.

    Verification runs on every request; nothing is cached between requests.

    Example:
    ```python
    @auth_required
    def protected_endpoint():
        user_id = g.user_id
        ...
    ```
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        _authenticate_request()
        return f(*args, **kwargs)

    return wrapper
