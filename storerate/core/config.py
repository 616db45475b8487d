from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional


class Settings(BaseSettings):
    # Database
    DATABASE_URL: Optional[str] = Field(None)
    DB_HOST: str = Field("localhost")
    DB_PORT: int = Field(5432)
    DB_USER: str = Field("postgres")
    DB_PASSWORD: str = Field("postgres")
    DB_NAME: str = Field("postgres")

    # App
    APP_HOST: str = Field("0.0.0.0")
    APP_PORT: int = Field(8000)
    ENVIRONMENT: str = Field("development")
    LOG_LEVEL: str = Field("INFO")

    # Session / Auth
    SESSION_SECRET: str = Field("secret")
    ALGORITHM: str = Field("HS256")
    SESSION_COOKIE_NAME: str = Field("storerate.sid")
    SESSION_MAX_AGE_DAYS: int = Field(7)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow"
    )

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


settings = Settings()
