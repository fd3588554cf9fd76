import os
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

load_dotenv()

@dataclass
class Settings:
    # API settings
    api_host: str = os.getenv("API_HOST", "127.0.0.1")
    api_port: int = int(os.getenv("API_PORT", "3000"))

    # Application settings
    app_name: str = os.getenv("APP_NAME", "Book Store API")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "False").lower() in ("true", "1", "yes")
    log_level: str = os.getenv("LOG_LEVEL", "DEBUG" if debug else "INFO").upper()

    # Books loaded into the store at startup (JSON array); nothing is written back
    seed_file: Optional[str] = os.getenv("BOOKS_SEED_FILE") or None


settings = Settings()
