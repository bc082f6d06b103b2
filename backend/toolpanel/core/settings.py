from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration derived from environment variables."""

    model_config = SettingsConfigDict(
        env_file='backend/.env',
        env_file_encoding='utf-8',
        extra='ignore',
    )

    app_name: str = Field(default='Toolbox Panel')
    environment: str = Field(default='local')
    api_version: str = Field(default='0.1.0')
    log_level: str = Field(default='INFO')
    host: str = Field(default='127.0.0.1')
    port: int = Field(default=8000)

    document_exts: str = Field(default='.pdf,.doc,.docx,.txt,.md')
    target_formats: str = Field(default='pdf,docx,txt,md')

    max_image_side: int = Field(default=1920)
    default_quality: int = Field(default=80, ge=1, le=100)
    max_upload_mb: int = Field(default=50)


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings instance for dependency injection."""
    return Settings()
