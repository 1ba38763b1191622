"""
Runtime configuration read from environment variables and an optional .env file.

Field names map to upper-case environment keys (LOG_LEVEL, MODEL_NAME, ...).
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    log_level: str = Field(default="INFO")

    # Upload limits
    max_file_size_mb: int = Field(default=150, gt=0)

    # Generation backend
    api_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta/models"
    )
    model_name: str = Field(default="gemini-1.5-pro")
    request_timeout_seconds: float = Field(default=60.0, gt=0)
    temperature: float = Field(default=0.8)
    top_p: float = Field(default=0.8)
    top_k: int = Field(default=15)

    # Representative frame
    frame_width: int = Field(default=320, gt=0)
    frame_height: int = Field(default=180, gt=0)
    frame_jpeg_quality: int = Field(default=80, ge=1, le=95)
    frame_seek_fraction: float = Field(default=0.25, ge=0.0, le=1.0)
    frame_timeout_seconds: float = Field(default=20.0, gt=0)

    # Only read by the command line caller; services take the key per call.
    gemini_api_key: str | None = Field(default=None, repr=False)

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024

    @property
    def generate_content_url(self) -> str:
        return f"{self.api_base_url.rstrip('/')}/{self.model_name}:generateContent"


def load_settings(env_file: str | Path | None = None) -> Settings:
    if env_file is None:
        return Settings()
    return Settings(_env_file=env_file)  # type: ignore[call-arg]
