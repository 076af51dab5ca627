from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv


load_dotenv()


class Settings:
    """Application settings loaded from environment variables.

    Keep all server and client config centralized here.
    """

    app_env: str = os.getenv("APP_ENV", "development")
    host: str = os.getenv("HOST", "127.0.0.1")
    port: int = int(os.getenv("PORT", "8000"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    chat_api_url: str = os.getenv("CHAT_API_URL", "http://127.0.0.1:8000/api/chat")
    chat_api_timeout: float = float(os.getenv("CHAT_API_TIMEOUT", "30"))
    templates_dir: Optional[str] = os.getenv("TEMPLATES_DIR") or None

    @property
    def is_dev(self) -> bool:
        return self.app_env.lower() in {"dev", "development", "local"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
