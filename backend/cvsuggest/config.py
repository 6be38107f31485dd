# config.py
import os
from functools import lru_cache

from pydantic import BaseModel

from cvsuggest.env import env  # noqa: F401  (loads .env before the defaults below are read)


def _env_bool(name: str, default: str = "false") -> bool:
    return (os.getenv(name, default) or "").lower() in ("1", "true", "yes", "y", "on")


class Settings(BaseModel):
    env: str = os.getenv("ENV", "dev")
    openai_api_key: str | None = os.getenv("OPENAI_API_KEY")
    openai_model: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    openai_base_url: str = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
    llm_temperature: float = float(os.getenv("LLM_TEMPERATURE", "0.8"))
    llm_json_mode: bool = _env_bool("LLM_JSON_MODE", "true")
    llm_timeout_secs: float = float(os.getenv("LLM_TIMEOUT_SECS", "90"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


@lru_cache
def get_settings() -> Settings:
    return Settings()
