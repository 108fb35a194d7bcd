"""Sunrise and sunset from JPL DE ephemerides, exposed as a :class:`SunEventProvider`."""

from __future__ import annotations

import json
import logging
import math
from collections import OrderedDict
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta, timezone
from pathlib import Path
from threading import Lock
from typing import Dict, List, Optional, Tuple

import erfa
import numpy as np
import spiceypy as spice
from spiceypy.utils.exceptions import SpiceyError

from .provider import GeoLocation, SunriseSunset

__all__ = [
    "EphemerisError",
    "EphemerisSunProvider",
    "TWILIGHT_ANGLES",
    "compute_sun_times",
    "load_ephemeris",
    "loaded_files",
    "unload_ephemeris",
]

LOGGER = logging.getLogger(__name__)

TWILIGHT_ANGLES: Dict[str, float] = {
    "official": -0.833,
    "civil": -6.0,
    "nautical": -12.0,
    "astronomical": -18.0,
}

EARTH_EQUATORIAL_RADIUS_KM = 6378.137  # WGS84
EARTH_EQUATORIAL_RADIUS_M = EARTH_EQUATORIAL_RADIUS_KM * 1000.0
EARTH_FLATTENING = 1.0 / 298.257223563  # WGS84

SAMPLE_STEP = timedelta(minutes=5)
PROVIDER_CACHE_SIZE = 4096

_LOADED_FILES: Optional[List[str]] = None
_LOAD_LOCK = Lock()


class EphemerisError(RuntimeError):
    """Raised when ephemeris loading or computation fails."""


@dataclass(frozen=True)
class _TimeScales:
    ut1: Tuple[float, float]
    tt: Tuple[float, float]
    et: float


def load_ephemeris(source: str | Path) -> List[str]:
    """Furnish SPK kernels from a ``.bsp`` file or a directory of them.

    Loading happens once per process; later calls return the cached file list.
    """

    global _LOADED_FILES

    if _LOADED_FILES is not None:
        return _LOADED_FILES

    path = Path(source).expanduser()
    if path.is_file():
        kernels = [path]
    elif path.is_dir():
        kernels = sorted(
            item for item in path.iterdir() if item.is_file() and item.suffix.lower() == ".bsp"
        )
    else:
        raise EphemerisError(f"Ephemeris source not found: {path}")
    if not kernels:
        raise EphemerisError(f"No .bsp ephemeris files found in directory: {path}")

    with _LOAD_LOCK:
        if _LOADED_FILES is not None:
            return _LOADED_FILES
        loaded: List[str] = []
        for kernel in kernels:
            try:
                spice.furnsh(str(kernel))
            except SpiceyError as exc:
                spice.kclear()
                raise EphemerisError(f"Failed to load ephemeris file '{kernel}': {exc}") from exc
            loaded.append(kernel.name)
        _LOADED_FILES = loaded

    LOGGER.info(json.dumps({"event": "ephemeris_loaded", "files": loaded}))
    return loaded


def loaded_files() -> List[str]:
    return list(_LOADED_FILES or [])


def unload_ephemeris() -> None:
    """Drop every furnished kernel so that :func:`load_ephemeris` starts over."""

    global _LOADED_FILES

    with _LOAD_LOCK:
        spice.kclear()
        _LOADED_FILES = None


def _timescales(dt: datetime) -> _TimeScales:
    if dt.tzinfo is None:
        raise ValueError("datetime must be timezone-aware")
    dt_utc = dt.astimezone(UTC)
    utc1, utc2 = erfa.dtf2d(
        "UTC",
        dt_utc.year,
        dt_utc.month,
        dt_utc.day,
        dt_utc.hour,
        dt_utc.minute,
        dt_utc.second + dt_utc.microsecond / 1_000_000,
    )
    tai1, tai2 = erfa.utctai(utc1, utc2)
    tt1, tt2 = erfa.taitt(tai1, tai2)
    ut11, ut12 = erfa.utcut1(utc1, utc2, 0.0)
    et = (tt1 - erfa.DJ00) * erfa.DAYSEC + tt2 * erfa.DAYSEC
    return _TimeScales(ut1=(ut11, ut12), tt=(tt1, tt2), et=et)


@dataclass(frozen=True)
class _Observer:
    """Geocentric ITRF position (km) and local zenith of a site."""

    position: np.ndarray
    zenith: np.ndarray

    @classmethod
    def at(cls, latitude: float, longitude: float, elev_m: float) -> "_Observer":
        position = np.array(
            spice.georec(
                math.radians(longitude),
                math.radians(latitude),
                elev_m / 1000.0,
                EARTH_EQUATORIAL_RADIUS_KM,
                EARTH_FLATTENING,
            ),
            dtype=float,
        )
        return cls(position=position, zenith=position / np.linalg.norm(position))

    def sun_altitude(self, dt: datetime) -> float:
        """Apparent solar altitude in degrees above the geometric horizon."""

        times = _timescales(dt)
        sun_vector, _ = spice.spkpos("SUN", times.et, "J2000", "LT+S", "EARTH")
        rotation = np.array(erfa.c2t06a(*times.tt, *times.ut1, 0.0, 0.0), dtype=float)
        topocentric = rotation @ np.array(sun_vector, dtype=float) - self.position
        norm = np.linalg.norm(topocentric)
        if norm == 0:
            raise EphemerisError("Degenerate topocentric vector encountered")
        return math.degrees(
            math.asin(float(np.clip(np.dot(topocentric / norm, self.zenith), -1.0, 1.0)))
        )


def _horizon_dip_degrees(elev_m: float) -> float:
    if elev_m <= 0:
        return 0.0
    # Small-angle approximation valid for h << R.
    return math.degrees(math.sqrt(2.0 * elev_m / EARTH_EQUATORIAL_RADIUS_M))


def _threshold_degrees(twilight: str, elev_m: float) -> float:
    try:
        base_altitude = TWILIGHT_ANGLES[twilight]
    except KeyError as exc:
        raise ValueError(f"Unsupported twilight selector: {twilight}") from exc
    return base_altitude - _horizon_dip_degrees(elev_m)


def _bisect_crossing(
    observer: _Observer,
    low_dt: datetime,
    high_dt: datetime,
    threshold: float,
    max_iterations: int = 24,
) -> datetime:
    low_val = observer.sun_altitude(low_dt) - threshold
    if low_val == 0:
        return low_dt
    for _ in range(max_iterations):
        if high_dt - low_dt <= timedelta(seconds=1):
            break
        mid_dt = low_dt + (high_dt - low_dt) / 2
        mid_val = observer.sun_altitude(mid_dt) - threshold
        if abs(mid_val) < 1e-4:
            return mid_dt
        if low_val * mid_val <= 0:
            high_dt = mid_dt
        else:
            low_dt, low_val = mid_dt, mid_val
    return low_dt + (high_dt - low_dt) / 2


def _day_status(has_sunrise: bool, has_sunset: bool, samples: np.ndarray) -> str:
    if has_sunrise and has_sunset:
        return "ok"
    if has_sunrise or has_sunset:
        return "partial"
    if samples.max() < 0:
        return "polar_night"
    if samples.min() > 0:
        return "polar_day"
    return "indeterminate"


def compute_sun_times(
    day: date,
    lat: float,
    lon: float,
    elev_m: float = 0.0,
    twilight: str = "official",
    utc_offset_hours: float = 0.0,
) -> SunriseSunset:
    """Sunrise and sunset of the local civil *day*.

    The civil day runs from local midnight to the next local midnight, local
    time being UTC shifted by *utc_offset_hours*. Returned instants carry that
    fixed offset. Days without a crossing report ``polar_day`` or
    ``polar_night``; days with a single crossing report ``partial``.
    """

    if _LOADED_FILES is None:
        raise EphemerisError("Ephemeris kernels have not been loaded")

    threshold = _threshold_degrees(twilight, elev_m)
    observer = _Observer.at(lat, lon, elev_m)
    local_tz = timezone(timedelta(hours=utc_offset_hours))

    window_start = datetime.combine(day, datetime.min.time(), tzinfo=local_tz)
    steps = int(timedelta(days=1) / SAMPLE_STEP)
    times = [window_start + SAMPLE_STEP * k for k in range(steps + 1)]
    samples = np.array([observer.sun_altitude(dt) for dt in times]) - threshold

    sunrise: Optional[datetime] = None
    sunset: Optional[datetime] = None
    rising = np.flatnonzero((samples[:-1] < 0) & (samples[1:] >= 0))
    setting = np.flatnonzero((samples[:-1] >= 0) & (samples[1:] < 0))
    if rising.size:
        idx = int(rising[0])
        sunrise = _bisect_crossing(observer, times[idx], times[idx + 1], threshold)
    if setting.size:
        idx = int(setting[0])
        sunset = _bisect_crossing(observer, times[idx], times[idx + 1], threshold)

    status = _day_status(sunrise is not None, sunset is not None, samples)
    return SunriseSunset(
        sunrise=sunrise.astimezone(local_tz) if sunrise else None,
        sunset=sunset.astimezone(local_tz) if sunset else None,
        status=status,
    )


class EphemerisSunProvider:
    """:class:`SunEventProvider` backed by the loaded SPK kernels.

    Results are cached per ``(day, location)``; the rollover and next-night
    lookups of neighbouring queries hit the same days repeatedly. The cache
    keeps the *cache_size* most recently used entries.
    """

    def __init__(self, twilight: str = "official", cache_size: int = PROVIDER_CACHE_SIZE) -> None:
        if twilight not in TWILIGHT_ANGLES:
            raise ValueError(f"Unsupported twilight selector: {twilight}")
        self.twilight = twilight
        if cache_size < 1:
            raise ValueError("cache_size must be positive")
        self.cache_size = cache_size
        self._cache: OrderedDict[Tuple[date, GeoLocation], SunriseSunset] = OrderedDict()
        self._lock = Lock()

    def get_sunrise_sunset(self, day: date, location: GeoLocation) -> SunriseSunset:
        key = (day, location)
        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                self._cache.move_to_end(key)
        if cached is not None:
            return cached
        result = compute_sun_times(
            day,
            location.latitude,
            location.longitude,
            location.elevation_m,
            self.twilight,
            location.utc_offset_hours,
        )
        with self._lock:
            self._cache[key] = result
            self._cache.move_to_end(key)
            while len(self._cache) > self.cache_size:
                self._cache.popitem(last=False)
        return result
