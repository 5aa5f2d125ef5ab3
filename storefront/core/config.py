# storefront/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - JWT_SECRET (signs access tokens)
      - JWT_REFRESH_SECRET (signs refresh tokens, must differ from JWT_SECRET)

    Missing secrets fail validation at import time, so the process
    never starts without them.

    Optional:
      - DATABASE_URL (defaults to a local SQLite file)
      - ADMIN_EMAIL / ADMIN_PASSWORD (admin bootstrap on startup)
      - SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY (image uploads)
      - RAZORPAY_KEY_ID / RAZORPAY_SECRET_KEY (payments)
    """

    PROJECT_NAME: str = "Storefront API"
    API_V1_STR: str = "/api/v1"

    DATABASE_URL: str = "sqlite:///./storefront.db"

    # Token signing
    JWT_SECRET: str
    JWT_REFRESH_SECRET: str
    JWT_ALG: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    # bcrypt work factor
    BCRYPT_ROUNDS: int = 10

    # Admin bootstrap
    ADMIN_EMAIL: str | None = None
    ADMIN_PASSWORD: str | None = None

    # Image hosting (Supabase Storage)
    SUPABASE_URL: str | None = None
    SUPABASE_SERVICE_ROLE_KEY: str | None = None
    STORAGE_BUCKET: str = "assets"

    # Payment gateway
    RAZORPAY_KEY_ID: str | None = None
    RAZORPAY_SECRET_KEY: str | None = None
    RAZORPAY_API_URL: str = "https://api.razorpay.com/v1"
    PAYMENT_CURRENCY: str = "INR"

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
