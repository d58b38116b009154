"""
Application configuration using pydantic-settings.
All config is loaded from environment variables with sensible defaults.
Firebase credentials have no default: the client refuses to start without them.
"""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Random Concert API"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    FIREBASE_LOG_LEVEL: str = "WARNING"  # firebase_admin and its HTTP stack

    # Firebase Realtime Database
    FIREBASE_SERVICE_ACCOUNT_KEY: str = ""  # service account JSON, as a string
    FIREBASE_AUTH_UID: str = ""
    FIREBASE_DB_URL: str = "https://tiny-random-concert-default-rtdb.firebaseio.com/"
    FIREBASE_APP_NAME: str = "concert-db"

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
    }


@lru_cache()
def get_settings() -> Settings:
    return Settings()
