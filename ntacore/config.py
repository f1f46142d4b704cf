from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    APP_NAME: str = "NTACore Tax Engine"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    # Tax rules
    TAX_YEAR: int = 2025
    STRICT_VALIDATION: bool = False

    # Logging
    LOG_LEVEL: str = "WARNING"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "NTACORE_"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
