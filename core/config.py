# ==================================================================================
# core/config.py — Showcase Backend Configuration (Pydantic v2 Settings)
# ==================================================================================
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import ValidationError, field_validator
from typing import List, Literal, Optional
import sys


class Settings(BaseSettings):
    # ------------------------
    # STORE CONFIG
    # ------------------------
    STORE_BACKEND: Literal["file", "kv"] = "file"

    # Flat-file backend: JSON document {"builds": [...]}
    BUILDS_FILE: str = "data/builds.json"

    # Static seed set bundled with the deployment (never rewritten)
    SEED_FILE: Optional[str] = "data/seed_builds.json"

    # ------------------------
    # KEY-VALUE BACKEND CONFIG
    # ------------------------
    DATABASE_URL: str = "sqlite:///./showcase.db"
    KV_KEY: str = "submissions"

    # ------------------------
    # FRONTEND CONFIG
    # ------------------------
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # ------------------------
    # ENVIRONMENT SETTINGS
    # ------------------------
    ENVIRONMENT: str = "development"  # 'development' | 'production'
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    @field_validator("SEED_FILE", mode="before")
    @classmethod
    def empty_seed_file_disables(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def IS_PRODUCTION(self) -> bool:
        """Convenience helper to check if running in production"""
        return self.ENVIRONMENT.lower() == "production"

    # ------------------------
    # Pydantic v2 Settings
    # ------------------------
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# ------------------------
# Global Settings Loader
# ------------------------
try:
    settings = Settings()
except ValidationError as e:
    print("❌ Environment configuration error — missing or invalid settings!")
    print(e)
    sys.exit(1)
