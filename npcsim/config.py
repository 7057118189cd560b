"""Application configuration loaded from environment variables and .env file."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Values are loaded from environment variables first,
    then from a .env file in the project root as fallback.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    DATABASE_URL: str = "sqlite:///./npcsim.db"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # AI Provider settings
    AI_PROVIDER: str = "mock"
    AI_API_KEY: Optional[str] = None
    AI_MODEL: Optional[str] = None
    AI_TEMPERATURE: float = 0.8

    # 게임 시계
    MINUTES_PER_HOUR: int = 60
    HOURS_PER_DAY: int = 24
    DAYS_PER_WEEK: int = 7

    # 시뮬레이션 스로틀
    SCHEDULE_UPDATE_DEBOUNCE: int = 10  # 분
    INTERACTION_COOLDOWN: int = 60  # 분
    INTERACTION_VISIBILITY_CHANCE: float = 0.7

    # 기억
    CONVERSATION_HISTORY_CAP: int = 10
    RELATIONSHIP_DECAY_PER_DAY: int = 1

    # 시드 데이터
    SEED_NPC_PATH: Optional[str] = None


settings = Settings()
