"""
Configuration settings for the Recipe API service.
Values can be overridden with RECIPE_* environment variables or a .env file.
"""

from pathlib import Path
from pydantic_settings import BaseSettings
from typing import Dict, List, Optional
from functools import lru_cache


PROJECT_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Application settings
    app_name: str = "Recipe API Server"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server settings
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: List[str] = ["*"]

    # Data paths
    data_dir: str = str(PROJECT_ROOT / "data")
    recipes_file: str = "recipes.json"

    # API keys
    api_key_prefix: str = "rapi_"
    api_key_bytes: int = 16
    seed_api_keys: Dict[str, str] = {
        "demo-key-123": "Demo User",
        "recipe-api-456": "Default User",
    }

    # Query settings
    random_sample_default: int = 3
    random_seed: Optional[int] = None

    # Cache settings
    cache_maxsize: int = 256
    cache_ttl: int = 3600

    @property
    def recipes_path(self) -> Path:
        return Path(self.data_dir) / self.recipes_file

    class Config:
        env_file = ".env"
        env_prefix = "RECIPE_"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Routes advertised on the service index
ENDPOINTS = {
    "GET /api/recipes": "Get all recipes",
    "GET /api/recipes/:id": "Get recipe by ID",
    "GET /api/recipes/search": "Search recipes by name (?name=)",
    "GET /api/recipes/cuisine/:cuisine": "Filter by cuisine",
    "GET /api/recipes/time": "Filter by cooking time (?max=)",
    "GET /api/recipes/ingredient": "Search by ingredient (?name=)",
    "GET /api/random": "Get random recipes (?count=)",
    "GET /api/cuisines": "Get all available cuisines",
    "POST /api/generate-key": "Generate a new API key ({\"name\": ...})",
}

API_KEY_HEADER = "x-api-key"
API_KEY_QUERY_PARAM = "api_key"
