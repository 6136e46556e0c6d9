"""
This module loads the application settings.
Values come from the environment, with a local .env file loaded first
and hardcoded fallbacks for a local development database.
movie_catalog.config.py
"""
import os
from typing import Optional
from urllib.parse import unquote_plus

from dotenv import load_dotenv
from pydantic import BaseModel

DEFAULT_PORT = 8000
DEFAULT_HOST = "0.0.0.0"
DEFAULT_MONGO_URL = "mongodb://localhost:27017/movies"
DEFAULT_DB_NAME = "movies"
DEFAULT_COLLECTION_NAME = "movies"
DEFAULT_TIMEOUT_MS = 5000


class Settings(BaseModel):
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    mongo_url: str = DEFAULT_MONGO_URL
    db_name: str = DEFAULT_DB_NAME
    collection_name: str = DEFAULT_COLLECTION_NAME
    mongo_timeout_ms: int = DEFAULT_TIMEOUT_MS
    log_level: str = "INFO"


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    # empty values count as unset
    value = os.getenv(key)
    if value is None or value == "":
        return default
    return value


def _int_env(key: str, default: int) -> int:
    raw = _env(key)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None


def database_from_url(url: str) -> Optional[str]:
    """Return the database named in a MongoDB URL, if any.

    Only the path is read, so mongodb+srv URLs need no DNS lookup here.
    """
    _, scheme_sep, rest = url.partition("://")
    if not scheme_sep:
        return None
    _, path_sep, path = rest.partition("/")
    if not path_sep:
        return None
    name = unquote_plus(path.split("?", 1)[0])
    return name or None


def load_settings() -> Settings:
    load_dotenv()

    mongo_url = _env("MONGO_URL") or _env("MONGO_URI", DEFAULT_MONGO_URL)
    db_name = _env("DB_NAME") or database_from_url(mongo_url) or DEFAULT_DB_NAME

    return Settings(
        host=_env("HOST", DEFAULT_HOST),
        port=_int_env("PORT", DEFAULT_PORT),
        mongo_url=mongo_url,
        db_name=db_name,
        collection_name=_env("COLLECTION_NAME", DEFAULT_COLLECTION_NAME),
        mongo_timeout_ms=_int_env("MONGO_TIMEOUT_MS", DEFAULT_TIMEOUT_MS),
        log_level=_env("LOG_LEVEL", "INFO").upper(),
    )
