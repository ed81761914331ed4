from pydantic_settings import BaseSettings
from typing import Optional

class Settings(BaseSettings):
    API_BASE_URL: str = "http://localhost:5000"
    AUTH_API_URL: str = "https://gtrafplusbac.vercel.app"
    API_TIMEOUT: int = 10

    DATABASE_URL: str = "sqlite+aiosqlite:///./gtraf_admin.db"

    REDIS_URL: str = "redis://localhost:6379/0"

    SECRET_KEY: str
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440  # 24 hours

    # Optional local admin, checked before the upstream login
    ADMIN_EMAIL: Optional[str] = None
    ADMIN_PASSWORD_HASH: Optional[str] = None

    RATE_LIMIT: int = 100
    RATE_LIMIT_WINDOW: int = 600  # 10 minutes

    PRICE_CACHE_TTL: int = 60   # 60 seconds

    STORAGE_KEY: str = "gtraf_dashboard_v1"
    RECENT_FETCH_LIMIT: int = 5
    RECENT_SHOWN: int = 3

    API_TITLE: str = "G-TRAF+ Admin"
    API_DESCRIPTION: str = "Back-office API for quote requests, vehicle reservations and portfolio"
    API_VERSION: str = "1.0.0"

    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
