"""
Application Configuration

Loads environment variables using pydantic-settings.
All settings can be overridden via a .env file or environment variables.
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENV_FILE = Path(__file__).resolve().parent.parent / ".env"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    GOOGLE_CLOUD_PROJECT: str = ""
    GOOGLE_CLOUD_LOCATION: str = "us-central1"
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_TEMPERATURE: float = 0.2

    # Outbound SMS alerts (Twilio REST API)
    TWILIO_ACCOUNT_SID: str = ""
    TWILIO_AUTH_TOKEN: str = ""
    TWILIO_FROM_NUMBER: str = ""
    TWILIO_API_BASE: str = "https://api.twilio.com/2010-04-01"
    EMERGENCY_CONTACT: str = ""

    DEFAULT_LANGUAGE: str = "English"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=str(_ENV_FILE), extra="ignore")


settings = Settings()
