from functools import lru_cache
from typing import List, Literal, Optional
import os
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["development", "production"]
StoreBackend = Literal["memory", "mongo"]

def _env_file_for(app_env: EnvName) -> str:
    return ".env.development" if app_env == "development" else ".env.production"

class Settings(BaseSettings):

    # Core
    APP_ENV: EnvName = "development"
    APP_NAME: str = "Storefront"
    DEBUG: bool = False
    GIT_SHA: str = "unknown"

    # Persistence: "memory" keeps everything in-process, "mongo" uses motor
    STORE_BACKEND: StoreBackend = "memory"
    SEED_CATALOG: bool = True           # insert sample products/users when the store is empty

    # Mongo
    MONGO_URI: Optional[str] = None
    MONGO_DB: str = "storefront"

    # Redis (optional: recommendation cache + cross-worker cart locks)
    REDIS_URL: Optional[str] = None

    # Recommendations
    recommend_limit: int = 8
    recommendation_cache_ttl: int = 10 * 60     # 10 minutes
    recommendation_cache_prefix: str = "reco"   # redis key namespace

    # Cart locks
    cart_lock_ttl: int = 10                     # seconds; auto-expiry if a worker dies
    cart_lock_wait: int = 5                     # seconds to wait for a busy cart

    # API
    api_prefix: str = "/api"
    ALLOWED_ORIGINS: str = ""                   # CSV of CORS origins; empty -> http://localhost:3000

    # pydantic-settings config will be set dynamically in the factory below
    model_config = SettingsConfigDict(env_file=None, case_sensitive=True)

    @property
    def allowed_origins(self) -> List[str]:
        origins = [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]
        return origins or ["http://localhost:3000"]

@lru_cache
def get_settings() -> Settings:
    """
    Factory that chooses the right .env file based on APP_ENV.
    Cache makes it cheap to inject via FastAPI dependencies.
    """
    app_env: EnvName = os.getenv("APP_ENV", "development")  # earliest switch
    env_file = _env_file_for(app_env)
    return Settings(
                _env_file=env_file,  # load .env.development or .env.production
                _env_file_encoding="utf-8"
    )
