"""Tests for error handling and custom exceptions."""

import pytest
from flask import Flask

from bookvault.exceptions import (
    AuthenticationError,
    BookVaultError,
    DatabaseError,
    DuplicateKey,
    InvalidCredentials,
    InvalidToken,
    MissingCredential,
    ResourceNotFound,
    StoreUnavailable,
    UserAlreadyExists,
    ValidationError,
)
from bookvault.main import (
    handle_authentication_error,
    handle_bookvault_error,
    handle_internal_error,
    handle_invalid_credentials,
    handle_not_found,
    handle_store_unavailable,
    handle_user_already_exists,
    handle_validation_error,
)


@pytest.fixture
def error_app():
    """Create a test app with error testing routes."""
    test_app = Flask(__name__)
    test_app.config['TESTING'] = True
    test_app.config['PROPAGATE_EXCEPTIONS'] = False

    test_app.errorhandler(ValidationError)(handle_validation_error)
    test_app.errorhandler(UserAlreadyExists)(handle_user_already_exists)
    test_app.errorhandler(InvalidCredentials)(handle_invalid_credentials)
    test_app.errorhandler(AuthenticationError)(handle_authentication_error)
    test_app.errorhandler(ResourceNotFound)(handle_not_found)
    test_app.errorhandler(StoreUnavailable)(handle_store_unavailable)
    test_app.errorhandler(BookVaultError)(handle_bookvault_error)
    test_app.errorhandler(500)(handle_internal_error)

    @test_app.route('/test/not-found')
    def test_not_found():
        raise ResourceNotFound("Book not found", details={"id": "123"})

    @test_app.route('/test/not-found-no-details')
    def test_not_found_no_details():
        raise ResourceNotFound("Not found")

    @test_app.route('/test/validation')
    def test_validation():
        raise ValidationError("Invalid title", details={"field": "title"})

    @test_app.route('/test/user-exists')
    def test_user_exists():
        raise UserAlreadyExists("User already exists")

    @test_app.route('/test/invalid-credentials')
    def test_invalid_credentials():
        raise InvalidCredentials("Invalid username or password")

    @test_app.route('/test/missing-credential')
    def test_missing_credential():
        raise MissingCredential("Missing token")

    @test_app.route('/test/invalid-token')
    def test_invalid_token():
        raise InvalidToken("Invalid token")

    @test_app.route('/test/store-unavailable')
    def test_store_unavailable():
        raise StoreUnavailable("Store unavailable")

    @test_app.route('/test/database')
    def test_database():
        raise DatabaseError("Connection failed")

    @test_app.route('/test/internal')
    def test_internal():
        raise RuntimeError("Something went wrong")

    return test_app


@pytest.fixture
def error_client(error_app):
    """Create test client for error testing."""
    return error_app.test_client()


class TestExceptionClasses:
    """Test custom exception classes."""

    def test_base_error_with_message(self):
        """Base exception should accept message."""
        error = BookVaultError("Test error")
        assert str(error) == "Test error"
        assert error.message == "Test error"

    def test_base_error_with_details(self):
        """Base exception should accept details dict."""
        details = {"book_id": "123", "reason": "not found"}
        error = BookVaultError("Not found", details=details)
        assert error.details == details

    def test_base_error_without_details(self):
        """Base exception should have empty details dict by default."""
        error = BookVaultError("Test")
        assert error.details == {}

    @pytest.mark.parametrize("cls", [
        ValidationError,
        ResourceNotFound,
        DatabaseError,
        UserAlreadyExists,
        InvalidCredentials,
        AuthenticationError,
    ])
    def test_inherits_base(self, cls):
        assert issubclass(cls, BookVaultError)

    def test_store_errors_are_database_errors(self):
        assert issubclass(StoreUnavailable, DatabaseError)
        assert issubclass(DuplicateKey, DatabaseError)

    def test_token_errors_are_authentication_errors(self):
        assert issubclass(MissingCredential, AuthenticationError)
        assert issubclass(InvalidToken, AuthenticationError)


class TestErrorHandlers:
    """Test Flask error handlers."""

    @pytest.mark.parametrize("path, status, error_type", [
        ("/test/validation", 400, "ValidationError"),
        ("/test/user-exists", 400, "UserAlreadyExists"),
        ("/test/invalid-credentials", 400, "InvalidCredentials"),
        ("/test/missing-credential", 401, "MissingCredential"),
        ("/test/invalid-token", 401, "InvalidToken"),
        ("/test/not-found", 404, "ResourceNotFound"),
        ("/test/store-unavailable", 503, "StoreUnavailable"),
        ("/test/database", 500, "DatabaseError"),
    ])
    def test_status_and_type(self, error_client, path, status, error_type):
        response = error_client.get(path)
        data = response.get_json()

        assert response.status_code == status
        assert data["error"]["type"] == error_type
        assert data["message"] == data["error"]["message"]

    def test_not_found_includes_details(self, error_client):
        response = error_client.get('/test/not-found')
        data = response.get_json()

        assert data["error"]["message"] == "Book not found"
        assert data["error"]["details"] == {"id": "123"}

    def test_error_without_details(self, error_client):
        """Error without details should not include details key."""
        response = error_client.get('/test/not-found-no-details')
        data = response.get_json()

        assert response.status_code == 404
        assert "details" not in data["error"]

    def test_internal_server_error_handler(self, error_client):
        """Unhandled exceptions should return the internal error format."""
        response = error_client.get('/test/internal')
        data = response.get_json()

        assert response.status_code == 500
        assert data["error"]["type"] == "InternalServerError"
        assert data["error"]["message"] == "An internal error occurred"
