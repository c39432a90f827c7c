"""
Centralized settings and path configuration for the discount tool.

Environment variables:
    OPENAI_API_KEY              → required for live deal analysis
    DEAL_ADVISOR_MODEL          → chat model used for the verdict
    DEAL_ADVISOR_MAX_TOKENS     → token limit for the verdict
    DEAL_ADVISOR_TEMPERATURE    → sampling temperature
    DEAL_ADVISOR_TIMEOUT_S      → client timeout in seconds
    HISTORY_LIMIT               → number of calculations retained
    HISTORY_CSV                 → optional file the history is mirrored to
    DEFAULT_CURRENCY            → currency code preselected in the UI
    LOG_LEVEL                   → root log level for the API
"""
import logging
import os
from pathlib import Path
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


def get_project_root() -> Path:
    """Get the project root directory (where pyproject.toml lives)."""
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / 'pyproject.toml').exists():
            return parent
    # Fallback to 3 levels up from this file
    return Path(__file__).resolve().parent.parent.parent.parent


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning("Invalid int for %s=%s; falling back to %s", name, value, default)
        return default


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning("Invalid float for %s=%s; falling back to %s", name, value, default)
        return default


@dataclass
class Settings:
    """Application settings with sensible defaults."""

    # Project paths
    project_root: Path

    # Deal advisor (text generation)
    openai_api_key: str = ""
    advisor_model: str = "gpt-4o-mini"
    advisor_max_tokens: int = 200
    advisor_temperature: float = 0.7
    advisor_timeout_s: float = 20.0

    # Calculation history
    history_limit: int = 50
    history_csv: Optional[Path] = None

    # Presentation
    default_currency: str = "USD"

    log_level: str = "INFO"

    @classmethod
    def load(cls, project_root: Optional[Path] = None) -> 'Settings':
        """Load settings from environment variables."""
        root = project_root or get_project_root()

        api_key = (os.getenv("OPENAI_API_KEY") or "").strip()
        if not api_key:
            logger.warning("OPENAI_API_KEY not configured; deal analysis will be unavailable")

        history_csv = os.getenv("HISTORY_CSV")

        return cls(
            project_root=root,
            openai_api_key=api_key,
            advisor_model=os.getenv("DEAL_ADVISOR_MODEL", "gpt-4o-mini"),
            advisor_max_tokens=_env_int("DEAL_ADVISOR_MAX_TOKENS", 200),
            advisor_temperature=_env_float("DEAL_ADVISOR_TEMPERATURE", 0.7),
            advisor_timeout_s=_env_float("DEAL_ADVISOR_TIMEOUT_S", 20.0),
            history_limit=_env_int("HISTORY_LIMIT", 50),
            history_csv=(root / history_csv) if history_csv else None,
            default_currency=os.getenv("DEFAULT_CURRENCY", "USD").upper(),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings
