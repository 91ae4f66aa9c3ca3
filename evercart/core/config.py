# evercart/core/config.py

from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    SECRET_KEY: str
    DATABASE_URL: str = "sqlite:///./evercart.db"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    ALGORITHM: str = "HS256"

    # Secret used by POST /api/admin/create to bootstrap admin accounts
    ADMIN_KEY: str = "EVERCART_ADMIN_2025"

    # Security Settings
    BCRYPT_ROUNDS: int = 12
    PASSWORD_MIN_LENGTH: int = 6

    ALLOWED_ORIGINS: str = "*"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    @property
    def allowed_origins(self) -> List[str]:
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

    class Config:
        env_file = ".env"
        case_sensitive = False  # Allow lowercase env vars
        extra = "ignore"

settings = Settings()
