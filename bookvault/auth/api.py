"""Authentication API endpoints for BookVault.

- POST /register - Create an account (no token issued)
- POST /login - Verify credentials and return a JWT
- GET /protected - Example endpoint requiring a valid token

Errors are raised as BookVaultError subclasses and rendered by the app's
error handlers.
"""

import logging

from flask import Blueprint, g, jsonify

from ..api.validation import validate_request
from .decorators import auth_required, get_auth_service
from .schemas import LoginResponse, MessageResponse, ProtectedResponse, UserCredentials

logger = logging.getLogger(__name__)


# Create blueprint
auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/register", methods=["POST"])
@validate_request
def register(data: UserCredentials):
    """
    Create an account.

    Example request:
    ```json
    {"username": "alice", "password": "pw123"}
    ```

    Returns:
        201: {"message": "User created"}
        400: ValidationError or UserAlreadyExists
        503: StoreUnavailable
    """
    get_auth_service().register(data.username, data.password)

    return jsonify(MessageResponse(message="User created").model_dump()), 201


@auth_bp.route("/login", methods=["POST"])
@validate_request
def login(data: UserCredentials):
    """
    Authenticate user and return JWT token.

    Example response:
    ```json
    {"message": "Login successful", "token": "eyJhbGciOiJIUzI1NiIs..."}
    ```

    Returns:
        200: LoginResponse
        400: ValidationError or InvalidCredentials
        503: StoreUnavailable
    """
    access_token = get_auth_service().login(data.username, data.password)

    return jsonify(
        LoginResponse(message="Login successful", token=access_token).model_dump()
    ), 200


@auth_bp.route("/protected", methods=["GET"])
@auth_required
def protected():
    """
    Example protected endpoint.

    Requires: Authorization: Bearer <token> (a bare token is also accepted)

    Returns:
        200: {"message": "Access granted", "userId": "<id>"}
        401: MissingCredential or InvalidToken
    """
    return jsonify(
        ProtectedResponse(message="Access granted", userId=g.user_id).model_dump()
    ), 200
