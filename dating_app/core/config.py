"""
Application Configuration for the Dating App Backend
"""
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path

# Get the project root directory (where .env file is located)
PROJECT_ROOT = Path(__file__).parent.parent.parent

DEFAULT_JWT_SECRET = "dev-secret-key-change-in-production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Database Configuration
    DATABASE_HOST: str = "localhost"
    DATABASE_PORT: int = 5432
    DATABASE_NAME: str = "dating_app"
    DATABASE_USERNAME: str = "postgres"
    DATABASE_PASSWORD: str = "postgres"  # Default for development
    DATABASE_URI: Optional[str] = None  # Full URL, wins over the components above

    @property
    def DATABASE_URL(self) -> str:
        """Construct database URL from components"""
        if self.DATABASE_URI:
            return self.DATABASE_URI
        return (
            f"postgresql://{self.DATABASE_USERNAME}:{self.DATABASE_PASSWORD}"
            f"@{self.DATABASE_HOST}:{self.DATABASE_PORT}/{self.DATABASE_NAME}"
        )

    # JWT Configuration
    JWT_SECRET_KEY: str = DEFAULT_JWT_SECRET  # Default for development
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 300  # 5 hours

    # Cloudinary Configuration
    CLOUDINARY_CLOUD_NAME: str = ""
    CLOUDINARY_API_KEY: str = ""
    CLOUDINARY_API_SECRET: str = ""
    CLOUDINARY_FOLDER: str = "dating_app_images"

    # Uploads
    UPLOAD_MAX_BYTES: int = 5 * 1024 * 1024
    MEDIA_UPLOAD_TIMEOUT_SECONDS: float = 30.0

    # API Configuration
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 5000
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Dating App API"
    DEBUG: bool = True

    # CORS Configuration
    ALLOWED_ORIGINS: str = "*"

    @property
    def CORS_ORIGINS(self) -> List[str]:
        """Parse CORS origins from string"""
        if self.ALLOWED_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    # Environment
    ENVIRONMENT: str = "development"

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    @property
    def cloudinary_configured(self) -> bool:
        return bool(
            self.CLOUDINARY_CLOUD_NAME and self.CLOUDINARY_API_KEY and self.CLOUDINARY_API_SECRET
        )

    def check_required(self) -> None:
        """
        Fail fast on configuration the server cannot run without.

        Raises:
            RuntimeError: If a required setting is missing
        """
        if self.is_production and self.JWT_SECRET_KEY == DEFAULT_JWT_SECRET:
            raise RuntimeError("JWT_SECRET_KEY must be set in production")
        if not self.JWT_SECRET_KEY:
            raise RuntimeError("JWT_SECRET_KEY must not be empty")


# Global settings instance
settings = Settings()
