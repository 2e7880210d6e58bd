from os import environ
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

load_dotenv()


class Config(BaseModel):
    model_config = ConfigDict(frozen=True)

    mongo_uri: str
    mongo_database: str
    mongo_collection: str
    api_host: str
    api_port: int
    api_prefix: str = ""
    default_page_size: int = 100
    log_level: str = "INFO"


_cached_config: Optional[Config] = None


def _reset_config() -> None:
    """Reset cached config, for tests."""
    global _cached_config
    _cached_config = None


def get_config() -> Config:
    global _cached_config
    if _cached_config is not None:
        return _cached_config

    _cached_config = Config(
        mongo_uri=environ.get("MONGO_URI", "mongodb://localhost:27017"),
        mongo_database=environ.get("MONGO_DATABASE", "natours"),
        mongo_collection=environ.get("MONGO_COLLECTION", "tours"),
        api_host=environ.get("API_HOST", "0.0.0.0"),
        api_port=int(environ.get("API_PORT", "3000")),
        api_prefix=environ.get("API_PREFIX", "").rstrip("/"),
        default_page_size=int(environ.get("DEFAULT_PAGE_SIZE", "100")),
        log_level=environ.get("LOG_LEVEL", "INFO").upper(),
    )
    return _cached_config
