"""Configuration settings for the weather trade analyzer service."""

import os
from typing import Final
from dotenv import load_dotenv

load_dotenv()

# Open-Meteo API configuration
OPEN_METEO_FORECAST_URL: Final[str] = "https://api.open-meteo.com/v1/forecast"
OPEN_METEO_ARCHIVE_URL: Final[str] = "https://archive-api.open-meteo.com/v1/archive"
OPEN_METEO_CLIMATE_URL: Final[str] = "https://climate-api.open-meteo.com/v1/climate"
CLIMATE_MODEL: Final[str] = "EC_Earth3P_HR"
CLIMATE_START_DATE: str = os.getenv("CLIMATE_START_DATE", "2024-01-01")
CLIMATE_END_DATE: str = os.getenv("CLIMATE_END_DATE", "2024-12-31")
WEATHER_TIMEOUT_SECONDS: float = float(os.getenv("WEATHER_TIMEOUT_SECONDS", "30"))
USER_AGENT: Final[str] = "WeatherTradeAnalyzer/0.1 (user@example.com)"

# Geocoding
GEOCODING_USER_AGENT: str = os.getenv("GEOCODING_USER_AGENT", USER_AGENT)
GEOCODING_RESULT_LIMIT: int = int(os.getenv("GEOCODING_RESULT_LIMIT", "5"))

# Server configuration
HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", "5002"))
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

# Redis cache configuration
REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379")
CACHE_EXPIRE_SECONDS: int = int(os.getenv("CACHE_EXPIRE_SECONDS", "300"))
CACHE_PREFIX: str = os.getenv("CACHE_PREFIX", "weather-trader")

# Favorites store
FAVORITES_KEY_PREFIX: str = os.getenv("FAVORITES_KEY_PREFIX", "favorites")

# Narrative generator (LLM) configuration
LLM_PROVIDER: str = os.getenv("LLM_PROVIDER", "gemini").lower()
LLM_API_KEY: str = (
    os.getenv("LLM_API_KEY")
    or os.getenv("GEMINI_API_KEY")
    or os.getenv("GOOGLE_API_KEY")
    or os.getenv("ANTHROPIC_API_KEY")
    or os.getenv("OPENAI_API_KEY")
    or ""
)
LLM_MODEL: str = os.getenv("LLM_MODEL", "gemini-2.0-flash")
LLM_TIMEOUT_SECONDS: float = float(os.getenv("LLM_TIMEOUT_SECONDS", "60"))
LLM_RETRY_DELAY_SECONDS: float = float(os.getenv("LLM_RETRY_DELAY_SECONDS", "0.5"))
