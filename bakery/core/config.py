from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    DATABASE_URL: str
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    FRONTEND_URL: str = "http://localhost:3000"

    # Object storage settings
    STORAGE_BACKEND: str = "local"  # or "s3"
    STORAGE_LOCAL_PATH: str = "./uploads"
    STORAGE_PUBLIC_BASE_URL: str = "http://localhost:8000/uploads"
    S3_BUCKET: Optional[str] = None
    S3_REGION: str = "us-east-1"
    S3_ENDPOINT_URL: Optional[str] = None
    S3_ACCESS_KEY: Optional[str] = None
    S3_SECRET_KEY: Optional[str] = None

    # Rate limiting ("memory://" or e.g. "redis://localhost:6379")
    RATE_LIMIT_STORAGE_URI: str = "memory://"

    # Checkout hand-off
    WHATSAPP_NUMBER: str = "5512982398984"

    # Back-office accounts bootstrapped by /auth/setup-roles
    ADMIN_EMAIL: Optional[str] = None
    SOCIAL_MEDIA_EMAIL: Optional[str] = None
    SETUP_TOKEN: Optional[str] = None

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

settings = Settings()
