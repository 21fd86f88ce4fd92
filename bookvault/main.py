"""Flask application entry point."""

import logging

from flask import Flask, jsonify
from flask_cors import CORS
from pydantic import ValidationError as SettingsValidationError
from pydantic_settings import SettingsError

from .auth.service import AuthService
from .config import Settings
from .db import Store, init_db
from .exceptions import (
    AuthenticationError,
    BookVaultError,
    InvalidCredentials,
    ResourceNotFound,
    StoreUnavailable,
    UserAlreadyExists,
    ValidationError,
)

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the process."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


# Error handlers
def _error_response(error: BookVaultError, status: int):
    response = {
        "message": error.message,
        "error": {
            "type": error.__class__.__name__,
            "message": error.message
        }
    }
    if error.details:
        response["error"]["details"] = error.details
    return jsonify(response), status


def handle_validation_error(error):
    """Handle ValidationError exceptions."""
    return _error_response(error, 400)


def handle_user_already_exists(error):
    """Handle UserAlreadyExists exceptions."""
    return _error_response(error, 400)


def handle_invalid_credentials(error):
    """Handle InvalidCredentials exceptions."""
    return _error_response(error, 400)


def handle_authentication_error(error):
    """Handle MissingCredential and InvalidToken exceptions."""
    return _error_response(error, 401)


def handle_not_found(error):
    """Handle ResourceNotFound exceptions."""
    return _error_response(error, 404)


def handle_store_unavailable(error):
    """Handle StoreUnavailable exceptions."""
    return _error_response(error, 503)


def handle_bookvault_error(error):
    """Handle generic BookVaultError exceptions."""
    logger.error(f"Unhandled {error.__class__.__name__}: {error.message}")
    return _error_response(error, 500)


def handle_internal_error(error):
    """Handle internal server errors."""
    logger.error(f"Internal error: {error}")
    return jsonify({
        "message": "An internal error occurred",
        "error": {
            "type": "InternalServerError",
            "message": "An internal error occurred"
        }
    }), 500


def health():
    """Health check endpoint."""
    return jsonify({"status": "ok"})


def create_app(settings: Settings | None = None, store: Store | None = None) -> Flask:
    """
    Build the Flask application.

    Args:
        settings: Application settings; loaded from the environment if omitted
        store: Store handle; built from settings if omitted

    Returns:
        Configured Flask app with schema initialized
    """
    if settings is None:
        settings = Settings()
    if store is None:
        store = Store.from_settings(settings)

    app = Flask(__name__)

    # CORS configuration
    CORS(
        app,
        origins=settings.cors_origins,
        methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
        supports_credentials=True,
    )

    try:
        init_db(store)
        logger.info("Database initialized successfully")
    except StoreUnavailable as e:
        logger.error(f"Database initialization failed: {e.message}")
        raise

    app.extensions["bookvault"] = {
        "settings": settings,
        "store": store,
        "auth": AuthService(store.credentials, settings),
    }

    app.register_error_handler(ValidationError, handle_validation_error)
    app.register_error_handler(UserAlreadyExists, handle_user_already_exists)
    app.register_error_handler(InvalidCredentials, handle_invalid_credentials)
    app.register_error_handler(AuthenticationError, handle_authentication_error)
    app.register_error_handler(ResourceNotFound, handle_not_found)
    app.register_error_handler(StoreUnavailable, handle_store_unavailable)
    app.register_error_handler(BookVaultError, handle_bookvault_error)
    app.register_error_handler(500, handle_internal_error)

    app.add_url_rule("/health", view_func=health)

    # Register API blueprints
    from .api.books import books_bp
    from .auth.api import auth_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(books_bp)

    return app


def main() -> None:
    """Run the development server."""
    try:
        settings = Settings()
    except (SettingsValidationError, SettingsError) as e:
        configure_logging()
        logger.critical(f"Invalid configuration, refusing to start: {e}")
        raise SystemExit(1) from e

    configure_logging(settings.log_level)
    app = create_app(settings)
    logger.info(f"Server running on port {settings.port}")
    app.run(host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
