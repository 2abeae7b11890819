from enum import Enum
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


ASSETS_DIR = Path(__file__).parent / "assets"


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    env: Env = Env.local
    html_dir: Path = ASSETS_DIR / "html"
    images_dir: Path = ASSETS_DIR / "img"
    db_url: str = "sqlite+aiosqlite:///mealremix.db"
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000

    mealdb_url: str = "https://www.themealdb.com/api/json/v1/1/"

    openai_url: str = "https://api.openai.com/v1/"
    openai_api_key: str | None = None
    remix_model: str = "gpt-4.1"
    remix_temperature: float = 0.8
    remix_max_tokens: int = 500

    default_theme: str = "Make it interesting"
    themes: list[str] = [
        "Make it interesting",
        "Make it vegetarian",
        "Make it vegan",
        "Make it gluten-free",
        "Make it spicy",
        "Make it healthier",
        "Make it kid-friendly",
        "Make it in 20 minutes",
        "Make it a dessert",
    ]
