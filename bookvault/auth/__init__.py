"""Authentication module for BookVault.

This module provides authentication functionality:
- Schema validation for auth operations
- JWT token generation and validation
- Password hashing and verification
- AuthService orchestrating registration, login and token checks
- @auth_required decorator for protected endpoints

Auth endpoints (top-level routes):
- POST /register - Create an account
- POST /login - Authenticate and return a JWT token
- GET /protected - Example protected endpoint
"""

from . import schemas, token

__all__ = ["schemas", "token"]
