"""
Configuration management system using Pydantic Settings.
Supports environment-based configuration for different deployment environments.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from typing import Optional, Dict, Any, List
from enum import Enum
from pathlib import Path


class Environment(str, Enum):
    """Supported deployment environments"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Supported log levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Supported log output formats"""
    JSON = "json"
    TEXT = "text"


class SecuritySettings(BaseSettings):
    """CORS, HSTS and transport security configuration"""

    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = Field(default=False)
    cors_allow_methods: List[str] = Field(default_factory=lambda: ["*"])
    cors_allow_headers: List[str] = Field(default_factory=lambda: ["*"])

    hsts_enabled: Optional[bool] = Field(
        default=None,
        description="Send Strict-Transport-Security; defaults to on outside development"
    )
    hsts_max_age_seconds: int = Field(default=60 * 24 * 3600, ge=0)
    hsts_include_subdomains: bool = Field(default=True)
    hsts_preload: bool = Field(default=True)
    https_redirect: Optional[bool] = Field(
        default=None,
        description="Redirect plain HTTP to HTTPS; defaults to on in staging and production"
    )

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from environment variable or list"""
        if isinstance(v, str):
            origin_list = v.split(",")
            return [origin.strip() for origin in origin_list if origin.strip()]
        return v or ["*"]

    model_config = {"env_prefix": "SECURITY_"}


class RateLimitSettings(BaseSettings):
    """Per-client rate limiting configuration"""

    enabled: bool = Field(default=True)

    # Token bucket applied to API routes
    token_limit: int = Field(default=100, ge=1, le=100000)
    tokens_per_period: int = Field(default=100, ge=1, le=100000)
    replenishment_period_seconds: float = Field(default=60.0, gt=0)

    # Fixed window applied to every route
    hourly_limit: int = Field(default=500, ge=1, le=1000000)
    window_seconds: float = Field(default=3600.0, gt=0)

    rejection_message: str = Field(
        default="Eish! You're going too fast there, boet! Slow down a bit and try again later."
    )

    model_config = {"env_prefix": "RATE_LIMIT_"}


class Settings(BaseSettings):
    """Main application settings"""

    # Application Configuration
    app_name: str = Field(default="Saffa as a Service")
    app_version: str = Field(default="1.0.0")
    environment: Environment = Field(default=Environment.DEVELOPMENT)
    debug: bool = Field(default=False)

    # Server Configuration
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1, le=65535)
    reload: bool = Field(default=False)
    workers: int = Field(default=1, ge=1, le=16)

    # Logging Configuration
    log_level: LogLevel = Field(default=LogLevel.INFO)
    log_format: LogFormat = Field(default=LogFormat.JSON)
    log_file: Optional[str] = Field(default=None)

    # Dataset Configuration
    phrases_file: str = Field(
        default="data/phrases.json",
        description="Path to the JSON phrase dataset, loaded once at startup"
    )
    random_seed: Optional[int] = Field(
        default=None,
        description="Seed for random phrase selection; unseeded when omitted"
    )

    # Nested Settings
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    rate_limit: RateLimitSettings = Field(default_factory=RateLimitSettings)

    @field_validator('environment', mode='before')
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment setting"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @field_validator('log_format', mode='before')
    @classmethod
    def validate_log_format(cls, v):
        if isinstance(v, str):
            return LogFormat(v.lower())
        return v

    def get_phrases_path(self) -> Path:
        """Get absolute path of the phrase dataset"""
        return Path(self.phrases_file).resolve()

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT

    def is_hsts_enabled(self) -> bool:
        if self.security.hsts_enabled is not None:
            return self.security.hsts_enabled
        return not self.is_development()

    def is_https_redirect_enabled(self) -> bool:
        if self.security.https_redirect is not None:
            return self.security.https_redirect
        return self.environment in (Environment.STAGING, Environment.PRODUCTION)

    def get_cors_config(self) -> Dict[str, Any]:
        """Get CORS configuration for FastAPI"""
        return {
            "allow_origins": self.security.cors_origins,
            "allow_credentials": self.security.cors_allow_credentials,
            "allow_methods": self.security.cors_allow_methods,
            "allow_headers": self.security.cors_allow_headers,
        }

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings instance"""
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment and files"""
    global settings
    settings = Settings()
    return settings
