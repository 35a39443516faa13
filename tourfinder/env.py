import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_PER_PAGE = 6
DEFAULT_WHATSAPP = "+621234567890"


def load_env() -> None:
    """Load .env from the working directory if present.
    Existing environment variables win over the file.
    """
    env_path = Path.cwd() / ".env"
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path, override=False)


def get_path(name: str) -> Optional[Path]:
    value = os.getenv(name)
    return Path(value) if value else None


def get_int(name: str, default: int) -> int:
    """Read a positive integer setting; falls back to default when unset or invalid."""
    value = os.getenv(name)
    if not value:
        return default
    try:
        parsed = int(value)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def catalog_path() -> Optional[Path]:
    return get_path("TOURFINDER_CATALOG")


def db_path() -> Optional[Path]:
    return get_path("TOURFINDER_DB")


def per_page() -> int:
    return get_int("TOURFINDER_PER_PAGE", DEFAULT_PER_PAGE)


def whatsapp_number() -> str:
    return os.getenv("TOURFINDER_WHATSAPP") or DEFAULT_WHATSAPP
