#config.py
import os
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict
from typing import Optional, List
from functools import lru_cache

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")
    # Application Settings
    APP_NAME: str = "Garage Catalog API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    DOCS_ENABLED: bool = True

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = int(os.environ.get("PORT", 3000))

    # Database Settings
    DATABASE_URL: str = "sqlite:///./garage.db"

    # CORS Settings (accept comma-separated strings to avoid JSON parsing in env)
    ALLOWED_ORIGINS: str = "*"

    # File Upload Settings
    MAX_FILE_SIZE: int = 5 * 1024 * 1024  # 5MB per image
    MAX_REQUEST_SIZE: int = 10 * 1024 * 1024  # whole request body, base64 inflates ~4/3
    UPLOAD_DIR: str = "uploads"
    DEFAULT_IMAGE_EXTENSION: str = ".jpg"

    # Catalog
    CATEGORIES: List[str] = ["Yamaha", "Suzuki", "Honda", "Piaggio"]

    # Middleware settings
    GZIP_MIN_SIZE: int = 500  # bytes

    # Built gallery front-end, served at / when set
    FRONTEND_DIR: Optional[str] = None

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    def _split_csv(self, value: str) -> List[str]:
        if value is None:
            return []
        value = value.strip()
        if value == "":
            return []
        return [item.strip() for item in value.split(",")]

    @property
    def allowed_origins_list(self) -> List[str]:
        return self._split_csv(self.ALLOWED_ORIGINS)


@lru_cache()
def get_settings() -> Settings:
    s = Settings()
    # Normalize ALLOWED_ORIGINS if provided as comma-separated string env var CORS_ORIGINS
    cors_env = os.environ.get("CORS_ORIGINS")
    if cors_env:
        s.ALLOWED_ORIGINS = cors_env
    return s
