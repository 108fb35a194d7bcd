"""Locating, and if needed downloading, the DE kernel used by the sun provider."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import httpx

from .config import Settings

LOGGER = logging.getLogger(__name__)

DEFAULT_EPHEMERIS_URL = (
    "https://naif.jpl.nasa.gov/pub/naif/generic_kernels/spk/planets/de442.bsp"
)
DEFAULT_EPHEMERIS_FILENAME = "de442.bsp"


class EphemerisAcquisitionError(RuntimeError):
    """Raised when the default ephemeris cannot be acquired."""


def download_kernel(url: str, destination: Path) -> None:
    destination.parent.mkdir(parents=True, exist_ok=True)
    LOGGER.info(
        json.dumps({"event": "ephemeris_downloading", "url": url, "destination": str(destination)})
    )
    received = 0
    try:
        with httpx.stream("GET", url, timeout=httpx.Timeout(120.0, connect=30.0)) as response:
            response.raise_for_status()
            total = int(response.headers.get("Content-Length", "0")) or None
            with destination.open("wb") as handle:
                for chunk in response.iter_bytes(chunk_size=1 << 20):
                    handle.write(chunk)
                    received += len(chunk)
    except (httpx.HTTPError, OSError) as exc:
        destination.unlink(missing_ok=True)
        raise EphemerisAcquisitionError(f"Failed to download ephemeris from {url}: {exc}") from exc
    LOGGER.info(
        json.dumps(
            {
                "event": "ephemeris_downloaded",
                "url": url,
                "destination": str(destination),
                "bytes": received,
                "total": total,
            }
        )
    )


def ensure_kernel(path: Path, url: str = DEFAULT_EPHEMERIS_URL) -> Path:
    """Return *path* once it names a ``.bsp`` file or a directory holding one.

    Missing kernels are downloaded from *url*: to *path* itself when it ends in
    ``.bsp``, otherwise into the directory under the default file name.
    """

    if path.is_file():
        if path.suffix.lower() != ".bsp":
            raise EphemerisAcquisitionError(f"Ephemeris file must have .bsp extension: {path}")
        return path
    if path.exists() and not path.is_dir():
        raise EphemerisAcquisitionError(f"Ephemeris path is not a file or directory: {path}")
    if path.is_dir() and any(path.glob("*.bsp")):
        return path

    if path.suffix.lower() == ".bsp":
        download_kernel(url, path)
    else:
        path.mkdir(parents=True, exist_ok=True)
        download_kernel(url, path / DEFAULT_EPHEMERIS_FILENAME)
    return path


def resolve_ephemeris_source(settings: Optional[Settings] = None) -> Path:
    """Kernel location from ``DE_BSP``, else the cached default kernel."""

    settings = settings or Settings.from_env()
    if settings.ephemeris_override is not None:
        return ensure_kernel(settings.ephemeris_override)
    return ensure_kernel(settings.cache_dir / DEFAULT_EPHEMERIS_FILENAME)
