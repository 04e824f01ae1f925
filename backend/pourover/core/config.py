# Environment settings (.env)
from typing import List

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    MONGO_URI: str = "mongodb://localhost:27017"  # split per prod/staging as needed
    MONGO_DB: str = "pourover"

    # "mongo" | "memory" (memory = local dev without a database)
    STORAGE: str = "mongo"
    SEED_PRESETS: bool = True

    DB_INIT_RETRIES: int = 20
    DB_INIT_DELAY: float = 1.0
    MONGO_TIMEOUT_MS: int = 2000   # server selection; keep short, startup retries on top

    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"

settings = Settings()
