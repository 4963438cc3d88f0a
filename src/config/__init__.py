# Configuration for Storefront Service
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "dev-jwt-secret-change-in-production"


class Config(BaseSettings):
    """Application configuration with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Service information
    service_name: str = "storefront-service"
    service_version: str = "1.0.0"
    environment: str = "development"

    # Server configuration
    host: str = "0.0.0.0"  # nosec B104
    port: int = Field(default=4000, gt=0, le=65535)

    # Database configuration
    mongodb_uri: Optional[str] = None
    mongodb_host: str = "localhost"
    mongodb_port: int = Field(default=27017, gt=0, le=65535)
    mongodb_username: Optional[str] = None
    mongodb_password: Optional[str] = None
    mongodb_database: str = "storefront"
    mongodb_auth_source: str = "admin"

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "console"
    log_to_file: bool = False
    log_to_console: bool = True
    log_file_path: str = "logs/storefront-service.log"
    correlation_id_header: str = "X-Correlation-ID"

    # JWT Authentication configuration
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    jwt_expiration_seconds: int = Field(default=7 * 24 * 3600, gt=0)  # 7 days
    password_hash_rounds: int = Field(default=10, ge=4, le=31)

    # Request handling
    request_timeout_seconds: float = Field(default=30.0, gt=0)
    default_page_size: int = Field(default=10, gt=0)
    max_page_size: int = Field(default=100, gt=0)
    max_category_depth: int = Field(default=32, gt=0)

    @property
    def mongodb_url(self) -> str:
        """Construct MongoDB connection URL"""
        if self.mongodb_uri:
            return self.mongodb_uri
        if self.mongodb_username and self.mongodb_password:
            return (
                f"mongodb://{self.mongodb_username}:{self.mongodb_password}"
                f"@{self.mongodb_host}:{self.mongodb_port}/{self.mongodb_database}"
                f"?authSource={self.mongodb_auth_source}"
            )
        return f"mongodb://{self.mongodb_host}:{self.mongodb_port}/{self.mongodb_database}"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @field_validator("environment")
    @classmethod
    def environment_valid(cls, v):
        v = v.lower()
        if v not in ("development", "test", "production"):
            raise ValueError("ENVIRONMENT must be one of development, test, production")
        return v

    @field_validator("log_level")
    @classmethod
    def log_level_valid(cls, v):
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid LOG_LEVEL: {v}")
        return v

    @field_validator("log_format")
    @classmethod
    def log_format_valid(cls, v):
        v = v.lower()
        if v not in ("json", "console"):
            raise ValueError("LOG_FORMAT must be 'json' or 'console'")
        return v

    @model_validator(mode="after")
    def production_requires_secret(self):
        if self.is_production and self.jwt_secret == DEFAULT_JWT_SECRET:
            raise ValueError("JWT_SECRET must be set in production")
        if self.default_page_size > self.max_page_size:
            raise ValueError("DEFAULT_PAGE_SIZE cannot exceed MAX_PAGE_SIZE")
        return self


# Global config instance
config = Config()
