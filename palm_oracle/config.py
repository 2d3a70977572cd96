"""Environment-driven settings."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

REPO_ROOT = Path(__file__).resolve().parents[1]

# Load environment variables from .env file
load_dotenv(REPO_ROOT / ".env")

# Values shipped in .env templates; treated the same as a missing key.
PLACEHOLDER_API_KEYS = frozenset({
    "your_openai_api_key_here",
    "your_gemini_api_key_here",
})


@dataclass(frozen=True)
class Settings:
    api_key: Optional[str]
    reading_model: str
    chat_model: str
    max_attempts: int
    retry_delay: float
    request_timeout: float
    db_path: str
    log_level: str

    @property
    def offline(self) -> bool:
        """True when no usable credentials are configured."""
        key = (self.api_key or "").strip()
        return not key or key in PLACEHOLDER_API_KEYS


def load_settings() -> Settings:
    db_path = os.getenv("PALM_ORACLE_DB_PATH", str(REPO_ROOT / "data" / "palm_archive.db"))
    if not os.path.isabs(db_path):
        db_path = str(REPO_ROOT / db_path)

    return Settings(
        api_key=os.getenv("OPENAI_API_KEY"),
        reading_model=os.getenv("PALM_ORACLE_READING_MODEL", "gpt-4o-mini"),
        chat_model=os.getenv("PALM_ORACLE_CHAT_MODEL", "gpt-4o-mini"),
        max_attempts=int(os.getenv("PALM_ORACLE_MAX_ATTEMPTS", "2")),
        retry_delay=float(os.getenv("PALM_ORACLE_RETRY_DELAY", "0.5")),
        request_timeout=float(os.getenv("PALM_ORACLE_REQUEST_TIMEOUT", "30")),
        db_path=db_path,
        log_level=os.getenv("PALM_ORACLE_LOG_LEVEL", "INFO").upper(),
    )
