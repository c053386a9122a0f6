from pydantic_settings import BaseSettings
from pathlib import Path

# Get the project root directory (parent of studycards folder)
PROJECT_ROOT = Path(__file__).parent.parent

class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""
    database_url: str = f"sqlite:///{PROJECT_ROOT / 'studycards.db'}"

    # Logging
    log_level: str = "INFO"

    # Progress policy: consecutive passing reviews before a card counts as mastered
    mastered_repetitions: int = 3

    class Config:
        env_file = str(PROJECT_ROOT / ".env")
        env_prefix = "STUDYCARDS_"
        extra = "ignore"

settings = Settings()
