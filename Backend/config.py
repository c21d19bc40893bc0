"""
GymTrack Configuration
Load environment variables and define app settings.
"""
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    APP_NAME: str = "GymTrack"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Storage: "mongo" or "memory"
    STORAGE_BACKEND: str = "mongo"

    # MongoDB
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DB_NAME: str = "gymtrack"

    # Google Gemini
    GOOGLE_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.0-flash"
    GEMINI_TEMPERATURE: float = 0.3

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Quick access
settings = get_settings()

# ============================================================
# Example .env file (create this in your project root):
# ============================================================
"""
# MongoDB
MONGODB_URI=mongodb+srv://<user>:<password>@cluster.mongodb.net/?retryWrites=true&w=majority
MONGODB_DB_NAME=gymtrack

# Use an in-process store instead of MongoDB
# STORAGE_BACKEND=memory

# Google Gemini
GOOGLE_API_KEY=your_google_api_key_here
"""
