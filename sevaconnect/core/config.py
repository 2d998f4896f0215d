"""
Configuration Management

Centralized configuration management using Pydantic Settings for type safety
and environment variable integration.
"""

from pathlib import Path
from typing import Optional
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file if it exists
env_path = Path('.') / '.env'
load_dotenv(dotenv_path=env_path)

_ENV_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    case_sensitive=True,
    extra="ignore",
)


class DatabaseSettings(BaseSettings):
    """Database configuration settings"""

    DATABASE_URL: str = Field(default="sqlite:///./sevaconnect.db")

    # Connection pool settings (ignored for SQLite)
    DB_POOL_SIZE: int = Field(default=10)
    DB_MAX_OVERFLOW: int = Field(default=20)
    DB_POOL_TIMEOUT: int = Field(default=30)
    DB_POOL_RECYCLE: int = Field(default=300)

    DB_ECHO: bool = Field(default=False)

    model_config = _ENV_CONFIG

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


class SecuritySettings(BaseSettings):
    """Security configuration settings"""

    JWT_SECRET: str = Field(default="INSECURE-DEV-KEY-CHANGE-IN-PRODUCTION", min_length=16)
    JWT_ALGORITHM: str = Field(default="HS256")
    ACCESS_TOKEN_EXPIRE_DAYS: int = Field(default=7, ge=1)

    # Password settings
    PASSWORD_BCRYPT_ROUNDS: int = Field(default=12, ge=4, le=31)
    INITIAL_PASSWORD_LENGTH: int = Field(default=8, ge=6)

    model_config = _ENV_CONFIG


class OtpSettings(BaseSettings):
    """Booking OTP settings"""

    # Operational bypass accepted for every booking phase and by the
    # verification provider boundary.
    MASTER_OTP: str = Field(default="1234", min_length=4)

    model_config = _ENV_CONFIG


class VerificationSettings(BaseSettings):
    """Phone verification provider (Twilio Verify) settings"""

    TWILIO_ACCOUNT_SID: Optional[str] = Field(default=None)
    TWILIO_AUTH_TOKEN: Optional[str] = Field(default=None)
    TWILIO_VERIFY_SERVICE_SID: Optional[str] = Field(default=None)
    TWILIO_DEMO_PHONE: Optional[str] = Field(default=None)
    TWILIO_BASE_URL: str = Field(default="https://verify.twilio.com/v2")
    VERIFICATION_TIMEOUT_SECONDS: float = Field(default=10.0, gt=0)

    DEFAULT_COUNTRY_CODE: str = Field(default="91")

    model_config = _ENV_CONFIG

    @property
    def is_configured(self) -> bool:
        return bool(
            self.TWILIO_ACCOUNT_SID
            and self.TWILIO_AUTH_TOKEN
            and self.TWILIO_VERIFY_SERVICE_SID
        )


class LoggingSettings(BaseSettings):
    """Logging configuration settings"""

    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="text")  # json or text
    LOG_FILE: Optional[str] = Field(default=None)

    # Structured logging
    ENABLE_STRUCTURED_LOGGING: bool = Field(default=True)
    LOG_SQL_QUERIES: bool = Field(default=False)

    model_config = _ENV_CONFIG

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'Log level must be one of {valid_levels}')
        return v.upper()

    @field_validator('LOG_FORMAT')
    @classmethod
    def validate_log_format(cls, v):
        if v.lower() not in ('json', 'text'):
            raise ValueError('Log format must be json or text')
        return v.lower()


class Settings(BaseSettings):
    """Main application settings"""

    # Environment
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)

    # Project information
    PROJECT_NAME: str = Field(default="SevaConnect")
    PROJECT_VERSION: str = Field(default="2.0.0")

    # Include all sub-settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    otp: OtpSettings = Field(default_factory=OtpSettings)
    verification: VerificationSettings = Field(default_factory=VerificationSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = _ENV_CONFIG

    @field_validator('ENVIRONMENT')
    @classmethod
    def validate_environment(cls, v):
        valid_envs = ['development', 'staging', 'production', 'testing']
        if v not in valid_envs:
            raise ValueError(f'Environment must be one of {valid_envs}')
        return v

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def is_testing(self) -> bool:
        return self.ENVIRONMENT == "testing"


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings"""
    return Settings()
