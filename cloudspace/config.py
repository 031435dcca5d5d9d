from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Literal

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # App
    APP_NAME: str = "CloudSpace"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "production"
    DEBUG: bool = False
    API_PREFIX: str = "/api"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./cloudspace.db"
    DATABASE_POOL_SIZE: int = 20
    DATABASE_MAX_OVERFLOW: int = 10

    # Workspace passwords
    BCRYPT_ROUNDS: int = 10

    # Blob storage
    STORAGE_BACKEND: Literal["s3", "local"] = "local"
    LOCAL_STORAGE_DIR: str = "./storage"
    LOCAL_STORAGE_URL_PATH: str = "/files"

    # Backblaze B2 (any S3-compatible endpoint works)
    B2_KEY_ID: str | None = None
    B2_APP_KEY: str | None = None
    B2_BUCKET_NAME: str = "workspace-files"
    B2_ENDPOINT_URL: str | None = None
    STORAGE_PUBLIC_BASE_URL: str | None = None
    MAX_FILE_SIZE_MB: int = 100

    # Text record naming
    OPENAI_API_KEY: str | None = None
    OPENAI_BASE_URL: str | None = None
    NAMING_MODEL: str = "gpt-4o-mini"
    NAMING_TIMEOUT_SECONDS: float = 10.0

    # Folder tree
    FOLDER_DELETE_POLICY: Literal["cascade", "orphan", "reject"] = "cascade"
    FOLDER_MAX_DEPTH: int = 64

    # Security
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]
    RATE_LIMIT_ENABLED: bool = True
    AUTH_RATE_LIMIT: str = "20/minute"

    # Monitoring
    SENTRY_DSN: str = ""

    # Celery
    CELERY_BROKER_URL: str = "memory://"
    CELERY_RESULT_BACKEND: str | None = None

    @property
    def async_database_url(self) -> str:
        """DATABASE_URL rewritten to use an async driver"""
        url = self.DATABASE_URL
        if url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        elif url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql+asyncpg://", 1)
        return url

    @property
    def max_file_size_bytes(self) -> int:
        return self.MAX_FILE_SIZE_MB * 1024 * 1024

@lru_cache
def get_settings() -> Settings:
    return Settings()
