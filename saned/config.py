"""
Runtime configuration.

Values come from the environment, with a project-root .env loaded first
(existing environment variables win).
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_DB_PATH = "data/saned.db"
DEFAULT_LOG_DIR = "logs"


@dataclass
class Settings:
    db_path: Path
    log_level: str = "INFO"
    log_dir: Path = Path(DEFAULT_LOG_DIR)
    log_to_file: bool = True


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def load_env() -> None:
    """Load .env from the current working directory if present."""
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path, override=False)


def load_settings() -> Settings:
    """
    Build settings from the environment.

    Recognised variables:
        SANED_DB_PATH: SQLite database file (default: data/saned.db)
        SANED_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL
        SANED_LOG_DIR: Directory for log files
        SANED_LOG_FILE: Set to 0 to disable the file handler
    """
    load_env()
    return Settings(
        db_path=Path(os.getenv("SANED_DB_PATH") or DEFAULT_DB_PATH),
        log_level=(os.getenv("SANED_LOG_LEVEL") or "INFO").upper(),
        log_dir=Path(os.getenv("SANED_LOG_DIR") or DEFAULT_LOG_DIR),
        log_to_file=_env_flag("SANED_LOG_FILE", True),
    )
