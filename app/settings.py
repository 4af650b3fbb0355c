from typing import Literal

from pydantic import Field, RedisDsn
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DATABASE_URL: str = Field(default="sqlite:///./tickets.db", alias="DATABASE_URL")
    DEBUG: bool = Field(default=False, alias="DEBUG")
    LOG_LEVEL: str = Field(default="INFO", alias="LOG_LEVEL")
    REDIS_URL: RedisDsn = Field(
        default="redis://localhost:6379/0", alias="REDIS_URL"
    )  # presence roster, notice channels and permission sets

    # Actor tokens for the HTTP surface
    JWT_SECRET: str = Field(..., alias="JWT_SECRET")
    JWT_ALGORITHM: str = Field(default="HS256", alias="JWT_ALGORITHM")
    ACTOR_TOKEN_EXPIRE_HOURS: int = Field(default=24, alias="ACTOR_TOKEN_EXPIRE_HOURS")

    # Access Configuration
    DEPLOYMENT_MODE: Literal["dedicated", "single_user"] = Field(
        default="dedicated", alias="DEPLOYMENT_MODE"
    )
    CHECK_PERMISSION: bool = Field(default=False, alias="CHECK_PERMISSION")
    PERMISSION_NODE: str = Field(default="tickets.manage", alias="PERMISSION_NODE")
    OPERATORS: list[str] = Field(default_factory=list, alias="OPERATORS")

    # Ticket Configuration
    NOTIFICATIONS: bool = Field(default=True, alias="NOTIFICATIONS")
    SERVER_NAME: str = Field(default="default", alias="SERVER_NAME")
    ACTIVE_USERS_WINDOW: int = Field(default=5, alias="ACTIVE_USERS_WINDOW")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
