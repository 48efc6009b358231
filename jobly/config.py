"""
Runtime configuration.

Settings come from the environment, after loading .env from the working
directory when one exists.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_DATABASE_URL = "sqlite:///data/jobly.db"


def load_env() -> None:
    """Load .env from project root if present."""
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path)


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    secret_key: str = "secret-dev"
    log_level: str = "INFO"
    log_dir: Path = Path("logs")
    log_to_file: bool = False
    port: int = 3001

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
            secret_key=os.getenv("SECRET_KEY", "secret-dev"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_dir=Path(os.getenv("LOG_DIR", "logs")),
            log_to_file=_env_flag("LOG_TO_FILE"),
            port=int(os.getenv("PORT", "3001")),
        )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return process-wide settings, reading the environment on first use."""
    global _settings

    if _settings is None:
        load_env()
        _settings = Settings.from_env()

    return _settings


def reset_settings() -> None:
    """Forget cached settings (useful for testing)."""
    global _settings
    _settings = None
