"""Configuration management using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    jwt_secret_key and database_path have no defaults: a process started
    without them fails validation before it serves a single request.
    """

    # Store configuration
    database_path: str
    store_timeout_seconds: float = 5.0

    # Server configuration
    port: int = 5000
    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"

    # JWT Configuration
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    jwt_expiry_seconds: int = 3600

    # Bcrypt work factor (log2 rounds, higher = slower hashing)
    # Tests use 4, the minimum bcrypt accepts
    bcrypt_work_factor: int = 10

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        frozen=True,
    )
