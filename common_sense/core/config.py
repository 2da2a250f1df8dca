from typing import List

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from common_sense.core.errors import ConfigurationError


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", str_strip_whitespace=True, extra="ignore")

    # JWT
    JWT_SECRET_KEY: str = Field(min_length=32)
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    # database
    DATABASE_URL: str = Field(min_length=1)
    DATABASE_POOL_SIZE: int = 5
    DATABASE_POOL_TIMEOUT: float = 10.0
    DATABASE_STATEMENT_TIMEOUT_MS: int = 15000
    DATABASE_ECHO: bool = False
    DATABASE_SSL: bool = False
    AUTO_CREATE_TABLES: bool = True
    SEED_OPINION_QUESTIONS: bool = True

    # matching
    MATCH_MIN_ORIENTATION_GAP: float = Field(default=0.5, ge=0)

    CORS_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"


def load_settings(**overrides) -> Settings:
    """Build and validate the settings once, at process start."""
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        fields = sorted({".".join(str(part) for part in error["loc"]) for error in exc.errors()})
        raise ConfigurationError(
            f"Invalid environment configuration: {', '.join(fields)}"
        ) from exc
