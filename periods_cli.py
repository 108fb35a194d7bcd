"""Command-line access to planetary hours, Choghadiya and inauspicious periods.

Usage::

    python periods_cli.py hora --lat 28.61 --lon 77.21 --tz 5.5 --at 2025-10-25T12:00
    python periods_cli.py choghadiya --lat 28.61 --lon 77.21 --tz 5.5 --date 2025-10-25
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional, Sequence

from periods import (
    GeoLocation,
    MissingAstronomicalDataError,
    Period,
    SunEventProvider,
    current_eight_fold_period,
    current_planetary_hour,
    eight_fold_periods_for_day,
    inauspicious_periods,
    planetary_hours_for_day,
)
from periods.astro import TWILIGHT_ANGLES, EphemerisError, EphemerisSunProvider, load_ephemeris
from periods.config import Settings
from periods.ephemeris import EphemerisAcquisitionError, resolve_ephemeris_source

LOGGER = logging.getLogger("periods-cli")


def _period_payload(period: Period) -> dict:
    return {
        "label": period.label.value,
        "ordinal": period.ordinal,
        "start": period.start.isoformat(),
        "end": period.end.isoformat(),
        "is_daytime": period.is_daytime,
        "is_auspicious": period.is_auspicious,
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="periods", description="Sunrise-anchored planetary hours and day periods"
    )
    parser.add_argument(
        "system",
        choices=("hora", "choghadiya", "inauspicious", "sun"),
        help="Period system to compute",
    )
    parser.add_argument("--lat", type=float, required=True)
    parser.add_argument("--lon", type=float, required=True)
    parser.add_argument("--elev", type=float, default=0.0)
    parser.add_argument(
        "--tz", type=float, default=None, help="UTC offset in hours (default: round(lon/15))"
    )
    when = parser.add_mutually_exclusive_group()
    when.add_argument("--at", type=str, default=None, help="ISO instant for the current period")
    when.add_argument("--date", type=str, default=None, help="YYYY-MM-DD for a full listing")
    parser.add_argument(
        "--twilight", choices=sorted(TWILIGHT_ANGLES), default=None, help="Horizon definition"
    )
    return parser


def _parse_instant(raw: Optional[str], tz: timezone) -> datetime:
    if raw is None:
        return datetime.now(tz)
    instant = datetime.fromisoformat(raw)
    if instant.tzinfo is None:
        return instant.replace(tzinfo=tz)
    return instant.astimezone(tz)


def run(args: argparse.Namespace, provider: SunEventProvider) -> dict:
    offset = args.tz if args.tz is not None else float(round(args.lon / 15.0))
    location = GeoLocation(
        latitude=args.lat, longitude=args.lon, elevation_m=args.elev, utc_offset_hours=offset
    )
    tz = timezone(timedelta(hours=offset))

    if args.system == "sun":
        day = date.fromisoformat(args.date) if args.date else _parse_instant(args.at, tz).date()
        result = provider.get_sunrise_sunset(day, location)
        return {
            "date": day.isoformat(),
            "status": result.status,
            "sunrise": result.sunrise.isoformat() if result.sunrise else None,
            "sunset": result.sunset.isoformat() if result.sunset else None,
        }

    if args.date is not None or args.system == "inauspicious":
        day = date.fromisoformat(args.date) if args.date else _parse_instant(args.at, tz).date()
        listing = {
            "hora": planetary_hours_for_day,
            "choghadiya": eight_fold_periods_for_day,
            "inauspicious": inauspicious_periods,
        }[args.system]
        periods: List[Period] = listing(day, location, provider)
        return {
            "system": args.system,
            "date": day.isoformat(),
            "periods": [_period_payload(period) for period in periods],
        }

    instant = _parse_instant(args.at, tz)
    current = current_planetary_hour if args.system == "hora" else current_eight_fold_period
    return {
        "system": args.system,
        "at": instant.isoformat(),
        "period": _period_payload(current(instant, location, provider)),
    }


def _default_provider(twilight: Optional[str]) -> SunEventProvider:
    settings = Settings.from_env()
    load_ephemeris(resolve_ephemeris_source(settings))
    return EphemerisSunProvider(twilight or settings.twilight)


def main(argv: Optional[Sequence[str]] = None, provider: Optional[SunEventProvider] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=Settings.from_env().log_level, format="%(message)s")
    try:
        provider = provider or _default_provider(args.twilight)
        payload = run(args, provider)
    except MissingAstronomicalDataError as exc:
        LOGGER.error(
            json.dumps(
                {"event": "error", "code": "missing_astronomical_data", "message": str(exc)}
            )
        )
        return 2
    except (EphemerisError, EphemerisAcquisitionError, ValueError) as exc:
        LOGGER.error(
            json.dumps({"event": "error", "code": "invalid_request", "message": str(exc)})
        )
        return 1
    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
