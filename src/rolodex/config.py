"""
Configuration management for Rolodex backend
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    mongodb_url: str = "mongodb://localhost:27017"
    mongodb_database: str = "rolodex"
    mongodb_timeout_ms: int = 5000  # server selection timeout

    # Contacts
    contacts_page_size: int = 10
    linkedin_domain: str = "linkedin.com/"
    # Phone format check (10 digits) is off until existing data is migrated
    validate_phone_format: bool = False

    # Auth
    auth_provider: str = "none"  # 'none', 'jwt'
    auth_config: dict = {}
    jwt_secret: str | None = None
    jwt_algorithm: str = "HS256"
    require_signed_in: bool = False  # gate write mutations on an authenticated caller

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_reload: bool = False
    cors_origins: list[str] = ["http://localhost:8000"]

    # Environment
    environment: str = "development"  # 'development', 'staging', 'production'
    debug: bool = True
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = "ROLODEX_"
        case_sensitive = False


# Global settings instance
settings = Settings()

# Debug: Log settings initialization (only in debug mode)
if settings.debug:
    from .logging import get_logger

    _logger = get_logger(__name__)
    _logger.debug(
        "Settings initialized",
        mongodb_database=settings.mongodb_database,
        environment=settings.environment,
    )
