from typing import Optional
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
VALID_ENVIRONMENTS = ['development', 'staging', 'production']


def _normalize_log_level(v: str) -> str:
    if v.upper() not in VALID_LOG_LEVELS:
        raise ValueError(f"LOG_LEVEL must be one of: {', '.join(VALID_LOG_LEVELS)}")
    return v.upper()


def _normalize_environment(v: str) -> str:
    if v.lower() not in VALID_ENVIRONMENTS:
        raise ValueError(f"ENVIRONMENT must be one of: {', '.join(VALID_ENVIRONMENTS)}")
    return v.lower()


class DatabaseSettings(BaseModel):
    """Database configuration settings"""
    url: str = Field(..., description="Database connection URL")

    @field_validator('url')
    @classmethod
    def validate_database_url(cls, v):
        if not v:
            raise ValueError("DATABASE_URL is required")
        if not v.startswith(('postgresql://', 'sqlite://', 'mysql://')):
            raise ValueError("DATABASE_URL must be a valid database URL")
        return v


class YouTubeSettings(BaseModel):
    """Upstream YouTube Data API settings"""
    search_url: str = Field(
        default="https://www.googleapis.com/youtube/v3/search",
        description="YouTube Data API v3 search endpoint"
    )


class AppSettings(BaseModel):
    """General application settings"""
    environment: str = Field(default="development", description="Application environment")
    frontend_url: Optional[str] = Field(default=None, description="Frontend application URL")
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        return _normalize_log_level(v)

    @field_validator('environment')
    @classmethod
    def validate_environment(cls, v):
        return _normalize_environment(v)


class Settings(BaseSettings):
    """Main settings class that combines all configuration sections"""

    # Database settings
    database_url: str = Field(default="sqlite:///./tubedeck.db", alias="DATABASE_URL")

    # Upstream search API
    youtube_search_url: str = Field(
        default="https://www.googleapis.com/youtube/v3/search",
        alias="YOUTUBE_SEARCH_URL"
    )

    # Local state store
    state_reset_on_corruption: bool = Field(default=False, alias="STATE_RESET_ON_CORRUPTION")

    # App settings
    environment: str = Field(default="development", alias="ENVIRONMENT")
    frontend_url: Optional[str] = Field(default=None, alias="FRONTEND_URL")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    sentry_dsn: Optional[str] = Field(default=None, alias="SENTRY_DSN")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        return _normalize_log_level(v)

    @field_validator('environment')
    @classmethod
    def validate_environment(cls, v):
        return _normalize_environment(v)

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings as a structured object"""
        return DatabaseSettings(url=self.database_url)

    @property
    def youtube(self) -> YouTubeSettings:
        """Get upstream API settings as a structured object"""
        return YouTubeSettings(search_url=self.youtube_search_url)

    @property
    def app(self) -> AppSettings:
        """Get app settings as a structured object"""
        return AppSettings(
            environment=self.environment,
            frontend_url=self.frontend_url,
            log_level=self.log_level
        )

    @property
    def cors_origins(self) -> list[str]:
        """Get CORS origins based on environment"""
        base_origins = [
            "http://localhost:8000",
            "http://127.0.0.1:8000"
        ]

        if self.environment == "production" and self.frontend_url:
            base_origins.append(self.frontend_url)

        return base_origins

    @property
    def is_development(self) -> bool:
        """Check if running in development mode"""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode"""
        return self.environment == "production"


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance (singleton pattern)"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings

