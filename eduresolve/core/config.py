# eduresolve/core/config.py
from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from typing import List, Optional

class Settings(BaseSettings):
    PROJECT_NAME: str = "EduResolve API"
    API_V1_STR: str = "/api/v1"

    # Security
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 # 24 hours

    # Record store
    DATABASE_URL_ASYNC: str = "sqlite+aiosqlite:///./eduresolve.db"
    STORE_LATENCY_MS: int = 0
    SEED_SAMPLE_COMPLAINTS: bool = True
    SEED_ADMIN_EMAIL: str = "admin@university.com"
    SEED_ADMIN_PASSWORD: str = "admin"

    # AI drafting (disabled when no key is set)
    GROQ_API_KEY: Optional[str] = None
    GROQ_MODEL: str = "llama-3.1-8b-instant"
    AI_TEMPERATURE: float = 0.3

    # CORS / hosts
    BACKEND_CORS_ORIGINS: List[str] = ["http://localhost:3000"]
    ALLOWED_HOSTS: List[str] = ["*"]

    # Logging
    LOG_FILE: Optional[str] = "app.log"

    model_config = ConfigDict(
        case_sensitive=True,
        env_file=".env",
        extra="ignore"
    )

settings = Settings()
