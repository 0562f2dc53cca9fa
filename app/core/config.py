from functools import lru_cache
from typing import Literal
import os
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["development", "production"]

def _env_file_for(app_env: EnvName) -> str:
    return ".env.development" if app_env == "development" else ".env.production"

class Settings(BaseSettings):

    # Core
    APP_ENV: EnvName = "development"
    APP_NAME: str = "ShopRecommendations"
    DEBUG: bool = False
    GIT_SHA: str = "unknown"

    # Mongo
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB: str = "shop"
    MONGO_TLS: bool = False                   # True for Atlas / managed clusters

    # Redis (optional, only used for trending/seasonal lists)
    REDIS_URL: str = ""

    # Cache config
    trending_cache_ttl: int = 5 * 60           # 5 minutes
    seasonal_cache_ttl: int = 60 * 60          # 1 hour

    # Result limits (default, max) per endpoint
    personalized_default_limit: int = 10
    product_default_limit: int = 8
    trending_default_limit: int = 12
    seasonal_default_limit: int = 12
    search_default_limit: int = 10
    max_limit: int = 100

    # API
    api_prefix: str = "/api"

    model_config = SettingsConfigDict(env_file=None, case_sensitive=True)

@lru_cache
def get_settings() -> Settings:
    """
    Factory that chooses the right .env file based on APP_ENV.
    Cache makes it cheap to inject via FastAPI dependencies.
    """
    app_env: EnvName = os.getenv("APP_ENV", "development")
    env_file = _env_file_for(app_env)
    return Settings(
                _env_file=env_file,  # load .env.development or .env.production
                _env_file_encoding="utf-8"
    )
