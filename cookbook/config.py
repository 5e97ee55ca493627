from enum import Enum
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


PACKAGE_DIR = Path(__file__).resolve().parent


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="COOKBOOK_", env_file=".env")

    env: Env = Env.local
    assets_dir: Path = PACKAGE_DIR / "assets"
    html_dir: Path = PACKAGE_DIR / "assets" / "html"
    images_dir: Path = PACKAGE_DIR / "assets" / "img"
    db_url: str = "sqlite+aiosqlite:///cookbook.db"
    featured_count: int = 6
    calories_max: float = 5000
    protein_max: float = 500
    placeholder_image: str = "https://images.unsplash.com/photo-1546069901-ba9599a7e63c"
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000
