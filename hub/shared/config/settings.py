# 📄 File: hub/shared/config/settings.py
#
# 🧭 Purpose (Layman Explanation):
# The main configuration center that reads all settings from environment variables
# and hands them to the rest of the back-office API in one organized place.
#
# 🧪 Purpose (Technical Summary):
# Pydantic-based settings management with environment variable loading,
# validation, and type safety for database, token signing, and logging parameters.
#
# 🔗 Dependencies:
# - pydantic-settings for configuration management
# - python-dotenv for .env file loading
#
# 🔄 Connected Modules / Calls From:
# - hub.main (application startup)
# - hub.shared.infrastructure.database.connection
# - hub.shared.core.security

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety. Settings are loaded
    from environment variables with fallback to .env file. Database
    variable names match the ones already used by existing deployments
    (DB_TYPE, DB_DATABASE, DB_STORAGE, ...), and the token signing key is
    read from API_KEY.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================

    APP_NAME: str = Field(default="Stexcore Hub Back-Office API", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")
    APP_DESCRIPTION: str = Field(
        default="Entities, accounts and session authentication for the Stexcore back office",
        description="Application description"
    )
    ENVIRONMENT: str = Field(default="development", description="Runtime environment")
    DEBUG: bool = Field(default=False, description="Debug mode flag")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: str = Field(default="text", description="Log output format (text or json)")

    # =========================================================================
    # SERVER CONFIGURATION
    # =========================================================================

    HOST: str = Field(default="0.0.0.0", description="Server host")
    PORT: int = Field(default=8000, description="Server port")
    RELOAD: bool = Field(default=False, description="Auto-reload on changes")

    # =========================================================================
    # DATABASE CONFIGURATION
    # =========================================================================

    DB_TYPE: str = Field(default="sqlite", description="Database dialect (sqlite or postgres)")
    DB_DATABASE: str = Field(default="stexcore_hub", description="Database name")
    DB_STORAGE: str = Field(default="database.sqlite", description="SQLite database file path")
    DB_USER: str = Field(default="postgres", description="Database user")
    DB_PASSWORD: str = Field(default="", description="Database password")
    DB_HOST: str = Field(default="localhost", description="Database host")
    DB_PORT: int = Field(default=5432, description="Database port")

    # Explicit URL wins over the pieces above
    DATABASE_URL: Optional[str] = Field(None, description="SQLAlchemy async connection URL")

    # Connection Pool Settings (server dialects only)
    DB_POOL_SIZE: int = Field(default=10, description="Database pool size")
    DB_MAX_OVERFLOW: int = Field(default=20, description="Database pool overflow")
    DB_POOL_TIMEOUT: int = Field(default=30, description="Database pool timeout")
    DB_POOL_RECYCLE: int = Field(default=3600, description="Database pool recycle time")
    DB_ECHO: bool = Field(default=False, description="Echo SQL statements")

    # =========================================================================
    # SECURITY SETTINGS
    # =========================================================================

    API_KEY: str = Field(default="", description="Symmetric session token signing key")
    JWT_ALGORITHM: str = Field(default="HS256", description="JWT algorithm")
    JWT_ISSUER: str = Field(default="stexcore-hub", description="JWT issuer claim")
    JWT_AUDIENCE: str = Field(default="stexcore-hub", description="JWT audience claim")
    AUTH_VERSION: str = Field(default="auth@1.0.0", description="Session token scheme version")
    SESSION_EXPIRE_MS: int = Field(
        default=864000000,
        description="Session and token lifetime in milliseconds"
    )
    BCRYPT_ROUNDS: int = Field(default=12, description="BCrypt hash rounds")

    # CORS Settings
    CORS_ORIGINS: str = Field(default="*", description="CORS allowed origins")
    CORS_ALLOW_CREDENTIALS: bool = Field(default=False, description="CORS allow credentials")

    # =========================================================================
    # VALIDATORS
    # =========================================================================

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed_environments = ["development", "staging", "production", "test"]
        if v.lower() not in allowed_environments:
            raise ValueError(f"Environment must be one of {allowed_environments}")
        return v.lower()

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level value."""
        allowed_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed_levels:
            raise ValueError(f"Log level must be one of {allowed_levels}")
        return v.upper()

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        allowed_formats = ["text", "json"]
        if v.lower() not in allowed_formats:
            raise ValueError(f"Log format must be one of {allowed_formats}")
        return v.lower()

    @field_validator("DB_TYPE")
    @classmethod
    def validate_db_type(cls, v: str) -> str:
        """Validate database dialect, accepting the usual postgres aliases."""
        dialect = v.lower()
        if dialect in ("postgresql", "postgres"):
            return "postgres"
        if dialect != "sqlite":
            raise ValueError("Database type must be one of ['sqlite', 'postgres']")
        return dialect

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        """Validate JWT algorithm. Session tokens are signed with a shared secret."""
        allowed_algorithms = ["HS256", "HS384", "HS512"]
        if v not in allowed_algorithms:
            raise ValueError(f"JWT algorithm must be one of {allowed_algorithms}")
        return v

    @field_validator("SESSION_EXPIRE_MS")
    @classmethod
    def validate_session_expiry(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Session expiry must be a positive number of milliseconds")
        return v

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================

    @property
    def database_url(self) -> str:
        """Get the database URL, preferring explicit DATABASE_URL."""
        if self.DATABASE_URL:
            return self.DATABASE_URL

        if self.DB_TYPE == "sqlite":
            return f"sqlite+aiosqlite:///{self.DB_STORAGE}"

        return (
            f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_DATABASE}"
        )

    @property
    def is_sqlite(self) -> bool:
        """Check if the configured database is SQLite."""
        return self.database_url.startswith("sqlite")

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
