"""Runtime settings, read from RSVPBOT_* environment variables or a .env file."""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # State persistence
    store_backend: str = "memory"  # "memory" or "sqlite"
    db_path: str = "data/conversations.db"

    # Validation
    culture: str = "en-us"  # Recognizers-Text culture code
    min_age: int = 18
    max_age: int = 120
    strict_friend_email: bool = False  # friend email is plain text unless enabled

    # Conversation content
    blocked_school: str = "Stanford"
    organizer_email: str = "v-dalhay@microsoft.com"
    welcome_message: str = "Welcome at the 2020 Microsoft AI Hackathon!"
    bot_id: str = "rsvpbot"

    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    model_config = SettingsConfigDict(env_prefix="RSVPBOT_", env_file=".env")


settings = Settings()
