from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    DATABASE_URL: str

    # JWT Security
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7 days
    COOKIE_NAME: str = "token"

    # Application
    PROJECT_NAME: str = "PACT API"
    API_PREFIX: str = ""
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Frontend (CORS origin and post-login redirect)
    FRONTEND_URL: str = "http://localhost:3000"

    # Google OAuth
    GOOGLE_CLIENT_ID: Optional[str] = None
    GOOGLE_CLIENT_SECRET: Optional[str] = None
    GOOGLE_CALLBACK_URL: str = "http://localhost:8000/auth/google/callback"

    # Same-origin proxy upstream
    PROXY_TARGET_URL: str = "http://localhost:8000"

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def secure_cookies(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def google_enabled(self) -> bool:
        return bool(self.GOOGLE_CLIENT_ID and self.GOOGLE_CLIENT_SECRET)


# Create a global settings instance
settings = Settings()
