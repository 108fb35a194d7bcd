"""Environment-driven settings for the period service."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

DEFAULT_CACHE_DIR = Path.home() / ".riseset" / "kernels"
DEFAULT_CORS_ORIGINS: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Settings:
    """Runtime configuration resolved from environment variables."""

    ephemeris_override: Optional[Path] = None
    cache_dir: Path = DEFAULT_CACHE_DIR
    twilight: str = "official"
    log_level: str = "INFO"
    cors_origins: Tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)

    @classmethod
    def from_env(cls) -> "Settings":
        override = os.environ.get("DE_BSP")
        origins = os.environ.get("PERIODS_CORS_ORIGINS")
        return cls(
            ephemeris_override=Path(override).expanduser() if override else None,
            cache_dir=Path(
                os.environ.get("DE_BSP_CACHE_DIR", str(DEFAULT_CACHE_DIR))
            ).expanduser(),
            twilight=os.environ.get("PERIODS_TWILIGHT", "official"),
            log_level=os.environ.get("PERIODS_LOG_LEVEL", "INFO").upper(),
            cors_origins=(
                tuple(item.strip() for item in origins.split(",") if item.strip())
                if origins
                else DEFAULT_CORS_ORIGINS
            ),
        )
