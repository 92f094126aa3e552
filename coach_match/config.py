from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


DEFAULT_MODEL = "gpt-5-mini"
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_ATTEMPTS = 1

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    val = raw.strip().lower()
    if val in _TRUE_VALUES:
        return True
    if val in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


@dataclass(frozen=True)
class MatchSettings:
    """Runtime knobs for the matcher.

    max_attempts counts generative calls per request; 1 means no retry. Retries only
    ever apply to an unavailable backend.
    """

    model: str = DEFAULT_MODEL
    timeout: float = DEFAULT_TIMEOUT
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    catalog_path: Optional[Path] = None
    approved_only: bool = True
    catalog_limit: Optional[int] = None

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.catalog_limit is not None and self.catalog_limit < 1:
            raise ValueError("catalog_limit must be at least 1 when set")

    @classmethod
    def from_env(cls) -> "MatchSettings":
        """Build settings from the process environment (and a .env file if present)."""
        load_dotenv()
        catalog = os.environ.get("COACH_MATCH_CATALOG")
        return cls(
            model=os.environ.get("OPENAI_MODEL", DEFAULT_MODEL),
            timeout=_env_float("COACH_MATCH_TIMEOUT", DEFAULT_TIMEOUT),
            max_attempts=_env_int("COACH_MATCH_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS),  # type: ignore[arg-type]
            catalog_path=Path(catalog) if catalog else None,
            approved_only=_env_bool("COACH_MATCH_APPROVED_ONLY", True),
            catalog_limit=_env_int("COACH_MATCH_CATALOG_LIMIT", None),
        )
