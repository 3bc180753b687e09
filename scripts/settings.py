"""
Runtime settings for merch generation.

Secrets and overrides come from the environment, loaded from ~/.env and
then a project-local .env (local values do not override ~/.env or the
process environment).

Environment:
    ANTHROPIC_API_KEY / CLAUDE_API_KEY   Claude collaborators
    PERPLEXITY_API_KEY                   niche style research
    MERCH_CLAUDE_MODEL                   Claude model override
    MERCH_PERPLEXITY_MODEL               Perplexity model override
    MERCH_DB_PATH                        SQLite path (default data/merch.db)
    MERCH_TIME_BUDGET_SECONDS            wall-clock budget per generation
    MERCH_LOG_LEVEL                      logging level (default INFO)
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).parent.parent
DEFAULT_DB_PATH = PROJECT_ROOT / "data" / "merch.db"
DEFAULT_TIME_BUDGET_SECONDS = 180.0
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Resolved runtime settings."""
    anthropic_api_key: Optional[str] = None
    perplexity_api_key: Optional[str] = None
    claude_model: Optional[str] = None
    perplexity_model: Optional[str] = None
    db_path: str = str(DEFAULT_DB_PATH)
    time_budget_seconds: float = DEFAULT_TIME_BUDGET_SECONDS
    log_level: str = "INFO"

    @property
    def has_claude(self) -> bool:
        return bool(self.anthropic_api_key)

    @property
    def has_perplexity(self) -> bool:
        return bool(self.perplexity_api_key)


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r", name, raw)
        return default


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """
    Load settings from the environment.

    Args:
        env_file: Extra .env file to load (default: <project>/.env)
    """
    load_dotenv(Path.home() / ".env")
    load_dotenv(env_file or PROJECT_ROOT / ".env")

    return Settings(
        anthropic_api_key=os.environ.get("ANTHROPIC_API_KEY") or os.environ.get("CLAUDE_API_KEY"),
        perplexity_api_key=os.environ.get("PERPLEXITY_API_KEY"),
        claude_model=os.environ.get("MERCH_CLAUDE_MODEL"),
        perplexity_model=os.environ.get("MERCH_PERPLEXITY_MODEL"),
        db_path=os.environ.get("MERCH_DB_PATH") or str(DEFAULT_DB_PATH),
        time_budget_seconds=_float_env("MERCH_TIME_BUDGET_SECONDS", DEFAULT_TIME_BUDGET_SECONDS),
        log_level=(os.environ.get("MERCH_LOG_LEVEL") or "INFO").upper()
    )


def configure_logging(level: str = "INFO"):
    """Root logging setup for the CLI."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT
    )
