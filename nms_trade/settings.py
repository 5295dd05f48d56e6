# nms_trade/settings.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import List
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# This settings.py file is at <project>/nms_trade/settings.py
PROJECT_ROOT = Path(__file__).parent.parent.resolve()
DOTENV_PATH = PROJECT_ROOT / ".env"

if DOTENV_PATH.exists():
    logger.info(f"SETTINGS.PY: .env file FOUND at: {DOTENV_PATH}")
else:
    logger.debug(
        f"SETTINGS.PY: .env file NOT FOUND at: {DOTENV_PATH}. "
        "Will rely on OS env vars or defaults."
    )


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    app_name: str = "NMS Trade API"
    debug_mode: bool = False
    log_level: str = "INFO"

    # SQLite configuration
    sqlite_db_path: str = "./nms_trade_data.sqlite3"
    sqlite_timeout_seconds: float = 5.0

    # HTTP surface
    api_prefix: str = "/api"
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            "https://celeaxy.github.io",
            "https://upgraded-space-potato-xp95jr75jqrh6pw7-5173.app.github.dev",
        ],
        description="Origins allowed by the CORS middleware.",
    )

    model_config = SettingsConfigDict(
        env_file=DOTENV_PATH if DOTENV_PATH.exists() else None,
        extra="ignore",
        env_file_encoding='utf-8'
    )


settings = Settings()

logger.debug(
    f"SETTINGS.PY: debug_mode={settings.debug_mode}, "
    f"sqlite_db_path='{settings.sqlite_db_path}', api_prefix='{settings.api_prefix}'"
)
