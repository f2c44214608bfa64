"""
Application configuration.

Values are read from the environment (optionally seeded from a local .env
file) once and cached for the lifetime of the process.
"""
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv


load_dotenv()

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10MB


def _split_csv(value: str) -> List[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


@dataclass(frozen=True)
class Settings:
    """Runtime settings resolved from environment variables."""
    database_url: str = "sqlite:///./recipes.db"
    openai_api_key: Optional[str] = None
    openai_text_model: str = "gpt-4o-mini"
    openai_vision_model: str = "gpt-4o"
    openai_image_model: str = "dall-e-3"
    openai_timeout_seconds: float = 60.0
    auth_jwt_secret: str = "change-me"
    auth_jwt_algorithm: str = "HS256"
    auth_jwt_audience: Optional[str] = None
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_url=os.getenv("DATABASE_URL", cls.database_url),
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            openai_text_model=os.getenv("OPENAI_TEXT_MODEL", cls.openai_text_model),
            openai_vision_model=os.getenv("OPENAI_VISION_MODEL", cls.openai_vision_model),
            openai_image_model=os.getenv("OPENAI_IMAGE_MODEL", cls.openai_image_model),
            openai_timeout_seconds=float(
                os.getenv("OPENAI_TIMEOUT_SECONDS", cls.openai_timeout_seconds)
            ),
            auth_jwt_secret=os.getenv("AUTH_JWT_SECRET", cls.auth_jwt_secret),
            auth_jwt_algorithm=os.getenv("AUTH_JWT_ALGORITHM", cls.auth_jwt_algorithm),
            auth_jwt_audience=os.getenv("AUTH_JWT_AUDIENCE") or None,
            max_upload_bytes=int(os.getenv("MAX_UPLOAD_BYTES", cls.max_upload_bytes)),
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
            cors_origins=_split_csv(os.getenv("CORS_ORIGINS", "*")),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()


def get_openai_api_key() -> str:
    """Return the OpenAI API key or fail loudly when it is not configured."""
    api_key = get_settings().openai_api_key
    if not api_key:
        raise RuntimeError("OPENAI_API_KEY is not set")
    return api_key
