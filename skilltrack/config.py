from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # AI
    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-4o"
    OPENAI_BASE_URL: str = ""      # empty → SDK default endpoint
    OPENAI_TIMEOUT: float = 60.0

    # App
    APP_ENV: str = "development"
    DATABASE_URL: str = "sqlite:///./data/skilltrack.db"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]
    SEED_ON_STARTUP: bool = False

    # Sessions / identity provider
    SESSION_SECRET: str = "dev-secret"
    IDENTITY_SHARED_SECRET: str = ""  # /api/login requires X-Identity-Token; mandatory outside development

    # Ranking defaults
    LEADERBOARD_LIMIT: int = 10
    RECOMMENDATION_LIMIT: int = 6
    ACTIVE_USER_WINDOW_DAYS: int = 7

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
