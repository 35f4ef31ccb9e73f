# dashboard/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///db.sqlite"  # file in project root
    LOG_LEVEL: str = "INFO"
    SQL_ECHO: bool = False  # True prints every statement to the terminal

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


settings = Settings()
