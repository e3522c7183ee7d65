"""Configuration management for HydroGuard.

Settings are read from environment variables with automatic `.env` loading
through Pydantic Settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import ClassVar
import os


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file.

    Attributes
    ----------
    APP_NAME : str
        Application name identifier (used as the FastAPI title).
    LOG_LEVEL : str
        Minimum level for the console log sink.
    DEFAULT_CITY : str
        City profile used when a caller does not name one.
    API_HOST : str
        Bind address for the uvicorn server.
    API_PORT : int
        Port for the uvicorn server.
    """
    APP_NAME: str = "hydroguard-core"
    LOG_LEVEL: str = "INFO"
    DEFAULT_CITY: str = "chennai"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8008

    env_path: ClassVar[str] = os.path.join(os.path.dirname(
        os.path.dirname(os.path.dirname(os.path.abspath(__file__)))), ".env")
    model_config = SettingsConfigDict(env_file=env_path, extra="ignore")


settings = Settings()
