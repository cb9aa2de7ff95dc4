# config.py
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


ENV_FILE_NAME = "cited_answer.env"

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_SEARCH_ENGINE = "google"


@dataclass(frozen=True)
class Settings:
    """Explicit configuration handed to the search and LLM steps."""

    serpapi_key: str = ""
    openai_api_key: str = ""
    default_model: str = DEFAULT_MODEL
    search_engine: str = DEFAULT_SEARCH_ENGINE
    max_results: int = 10
    max_tokens: int = 4000
    temperature: float = 0.0
    request_timeout: float = 15.0
    log_level: str = "INFO"
    # empty string disables the file handler
    log_file: str = "app.log"


def _load_env_if_needed(env_file: Optional[str] = None) -> None:
    if env_file:
        load_dotenv(env_file, override=False)
        return

    if os.path.exists(ENV_FILE_NAME):
        load_dotenv(ENV_FILE_NAME, override=False)
        return

    here = os.path.dirname(os.path.abspath(__file__))
    candidate = os.path.join(here, ENV_FILE_NAME)
    if os.path.exists(candidate):
        load_dotenv(candidate, override=False)


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def load_settings(env_file: Optional[str] = None) -> Settings:
    """
    Read settings from the dotenv file (if any) and the environment.

    Missing API keys are allowed here; search/LLM calls fail later instead.
    """
    _load_env_if_needed(env_file)

    return Settings(
        serpapi_key=(os.getenv("SERPAPI_KEY") or "").strip(),
        openai_api_key=(os.getenv("OPENAI_API_KEY") or "").strip(),
        default_model=(os.getenv("CAF_MODEL") or DEFAULT_MODEL).strip(),
        search_engine=(os.getenv("CAF_SEARCH_ENGINE") or DEFAULT_SEARCH_ENGINE).strip(),
        max_results=_env_int("CAF_MAX_RESULTS", 10),
        max_tokens=_env_int("CAF_MAX_TOKENS", 4000),
        temperature=_env_float("CAF_TEMPERATURE", 0.0),
        request_timeout=_env_float("CAF_TIMEOUT", 15.0),
        log_level=(os.getenv("CAF_LOG_LEVEL") or "INFO").strip().upper(),
        log_file=os.getenv("CAF_LOG_FILE", "app.log").strip(),
    )
