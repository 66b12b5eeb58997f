"""
Events ERP - Configuration
"""
from pydantic_settings import BaseSettings
from functools import lru_cache
import secrets
from pathlib import Path
from dotenv import load_dotenv

# Carrega .env com override para sobrescrever variáveis do sistema
env_file = Path(__file__).parent.parent.parent / ".env"
if env_file.exists():
    load_dotenv(env_file, override=True)


class Settings(BaseSettings):
    # App
    APP_NAME: str = "Events ERP API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3001

    # Database (sqlite+aiosqlite local, postgresql+asyncpg em produção)
    DATABASE_URL: str = "sqlite+aiosqlite:///./events.db"

    # Security
    SECRET_KEY: str = secrets.token_urlsafe(32)
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # Conta MASTER criada quando a tabela de usuários está vazia
    MASTER_EMAIL: str = "master@events-erp.com"
    MASTER_PASSWORD: str = "change-me-in-production"
    MASTER_NAME: str = "Master"

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    LOGIN_RATE_LIMIT: str = "10/minute"

    # Requisições
    REQUISITION_NUMBER_MIN: int = 100000
    REQUISITION_NUMBER_MAX: int = 999999
    REQUISITION_NUMBER_MAX_ATTEMPTS: int = 50

    # CORS
    CORS_ORIGINS: list = ["*"]

    # Admin CLI
    EVENTS_API_URL: str = "http://localhost:3001"
    CLI_TOKEN_FILE: str = ".events_token"

    class Config:
        extra = "ignore"
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
