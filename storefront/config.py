"""Application configuration using Pydantic Settings."""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    app_name: str = Field(default="Storefront API", alias="APP_NAME")

    # Database
    database_url: str = Field(default="sqlite:///./storefront.db", alias="DATABASE_URL")

    # Security
    secret_key: str = Field(default="change-this-in-production", alias="SECRET_KEY")
    algorithm: str = Field(default="HS256", alias="ALGORITHM")
    access_token_expire_minutes: int = Field(default=1440, alias="ACCESS_TOKEN_EXPIRE_MINUTES")

    # Uploads
    upload_dir: str = Field(default="./uploads", alias="UPLOAD_DIR")
    max_file_size: int = Field(default=5 * 1024 * 1024, alias="MAX_FILE_SIZE")
    image_types: str = Field(default="jpeg,jpg,png,gif,webp", alias="IMAGE_TYPES")
    public_base_url: str = Field(default="http://localhost:5000", alias="PUBLIC_BASE_URL")

    # HTTP
    cors_origins: str = Field(default="http://localhost:5173,http://localhost:3000", alias="CORS_ORIGINS")

    # Observability
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @property
    def cors_origins_list(self) -> List[str]:
        """Get list of allowed CORS origins."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def allowed_image_types(self) -> List[str]:
        """Get list of accepted image extensions / MIME subtypes."""
        return [t.strip().lower() for t in self.image_types.split(",") if t.strip()]


settings = Settings()
