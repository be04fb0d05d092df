from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./database.db"
    HOST: str = "127.0.0.1"
    PORT: int = 3000
    FRONTEND_ORIGINS: List[str] = ["http://localhost:3000"]
    STATIC_DIR: Optional[str] = None
    LOG_LEVEL: str = "INFO"

    AUTH_ENABLED: bool = True
    SESSION_TTL_SECONDS: int = 8 * 60 * 60
    SESSION_SWEEP_SECONDS: int = 60
    SESSION_COOKIE_NAME: str = "sid"
    SESSION_COOKIE_SECURE: bool = False

    # bootstrap account, inserted only when the users table is empty
    SEED_USER_EMAIL: str = "admin@example.com"
    SEED_USER_PASSWORD: str = "admin123"
    SEED_USER_NAME: Optional[str] = "Admin"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
