import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_DATABASE_URL = "sqlite:///data/jobly.db"
DEFAULT_TEST_DATABASE_URL = "sqlite:///data/jobly_test.db"


def load_env() -> None:
    """Load .env from the working directory if present.

    Variables already set in the process environment win.
    """
    env_path = Path.cwd() / ".env"
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path, override=False)


def is_test_env() -> bool:
    return os.getenv("JOBLY_ENV", "").lower() == "test"


def get_database_url() -> str:
    """Database URL for the current environment.

    JOBLY_ENV=test selects DATABASE_URL_TEST (or a separate SQLite file)
    so test runs never touch the development database.
    """
    if is_test_env():
        return os.getenv("DATABASE_URL_TEST", DEFAULT_TEST_DATABASE_URL)
    return os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_log_dir() -> Optional[Path]:
    value = os.getenv("LOG_DIR", "").strip()
    return Path(value) if value else None
