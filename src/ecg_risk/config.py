from __future__ import annotations

import os
from typing import Optional

from pydantic import BaseModel, ConfigDict

from .errors import ConfigError

DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_TIMEOUT_S = 60.0
DEFAULT_MAX_RETRIES = 0
DEFAULT_MAX_FILES = 4


class Settings(BaseModel):
    """
    Process-wide configuration for a batch run.

    openai_api_key: bearer credential for the inference service
    openai_base_url: optional OpenAI-compatible endpoint override
    model: chat model named in every request
    request_timeout_s: per-request timeout in seconds
    max_retries: SDK-level retries; 0 means one attempt per sample
    max_files: uploads beyond this count are ignored
    """
    model_config = ConfigDict(frozen=True)

    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None
    model: str = DEFAULT_MODEL
    request_timeout_s: float = DEFAULT_TIMEOUT_S
    max_retries: int = DEFAULT_MAX_RETRIES
    max_files: int = DEFAULT_MAX_FILES


def _getenv_str(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _getenv_float(name: str, default: float) -> float:
    value = _getenv_str(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {value!r}.") from None


def _getenv_int(name: str, default: int) -> int:
    value = _getenv_str(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {value!r}.") from None


def load_settings(**overrides) -> Settings:
    """
    Read settings from the environment at call time.

    Keyword overrides win over the environment; None overrides are ignored
    so callers can pass optional CLI flags straight through.
    """
    values = {
        "openai_api_key": _getenv_str("OPENAI_API_KEY"),
        "openai_base_url": _getenv_str("OPENAI_BASE_URL"),
        "model": _getenv_str("ECG_RISK_LLM_MODEL") or DEFAULT_MODEL,
        "request_timeout_s": _getenv_float("ECG_RISK_REQUEST_TIMEOUT", DEFAULT_TIMEOUT_S),
        "max_retries": _getenv_int("ECG_RISK_MAX_RETRIES", DEFAULT_MAX_RETRIES),
        "max_files": _getenv_int("ECG_RISK_MAX_FILES", DEFAULT_MAX_FILES),
    }
    values.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**values)
