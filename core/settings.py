from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CustomSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


class AppSettings(CustomSettings):
    ENVIRONMENT: Literal["local", "dev", "prod"] = Field(default="local")
    LOG_LEVEL: str = Field(default="INFO")
    JSON_LOGS: bool = Field(default=True)


class DatabaseSettings(CustomSettings):
    """Location of the conversation store.

    Env vars:
    - DATABASE_PATH
    - DATABASE_URL (takes precedence over DATABASE_PATH)
    - VERCEL (serverless deployments only have /tmp writable)
    """

    DATABASE_ENGINE: str = Field(default="sqlite+aiosqlite")
    DATABASE_PATH: str = Field(default=str(Path("data") / "chat.db"))
    VERCEL: str = Field(default="")
    DATABASE_URL: str = Field(default="")

    @model_validator(mode="before")
    def validate_database_url(cls, data: dict):
        if isinstance(data, dict) and not data.get("DATABASE_URL"):
            if data.get("VERCEL") == "1":
                path = "/tmp/chat.db"
            else:
                path = data.get("DATABASE_PATH") or str(Path("data") / "chat.db")
            engine = data.get("DATABASE_ENGINE", "sqlite+aiosqlite")
            data["DATABASE_URL"] = f"{engine}:///{path}"
        return data


class OpenAISettings(CustomSettings):
    OPENAI_API_KEY: SecretStr = Field(default="")
    OPENAI_MODEL: str = Field(default="gpt-4o-mini")
    OPENAI_BASE_URL: Optional[str] = Field(default=None)


class GenerationSettings(CustomSettings):
    """Reply generation parameters.

    Set via env vars (optional):
    - HISTORY_WINDOW
    - MAX_OUTPUT_TOKENS
    - TEMPERATURE
    """

    HISTORY_WINDOW: int = Field(default=10)
    MAX_OUTPUT_TOKENS: int = Field(default=500)
    TEMPERATURE: float = Field(default=0.7)


class ChatSettings(CustomSettings):
    MAX_MESSAGE_LENGTH: int = Field(default=5000)


class Settings(BaseModel):
    APP: AppSettings = Field(default_factory=AppSettings)
    DATABASE: DatabaseSettings = Field(default_factory=DatabaseSettings)
    OPENAI: OpenAISettings = Field(default_factory=OpenAISettings)
    GENERATION: GenerationSettings = Field(default_factory=GenerationSettings)
    CHAT: ChatSettings = Field(default_factory=ChatSettings)


@lru_cache
def get_settings() -> Settings:
    return Settings()


SETTINGS = get_settings()
