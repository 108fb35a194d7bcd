"""Pydantic models for API requests and responses."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from periods import GeoLocation, Period


class PeriodSystem(str, Enum):
    hora = "hora"
    choghadiya = "choghadiya"
    inauspicious = "inauspicious"


class LocationParams(BaseModel):
    """Observer location shared by every query."""

    model_config = ConfigDict(populate_by_name=True)

    lat: float = Field(..., ge=-90.0, le=90.0, description="Latitude in degrees")
    lon: float = Field(..., ge=-180.0, le=180.0, description="Longitude in degrees")
    elev_m: float = Field(0.0, ge=-500.0, description="Observer elevation in meters")
    offset_hours: float = Field(
        0.0,
        ge=-24.0,
        le=24.0,
        description="Fixed UTC offset in hours defining the local civil day",
    )

    def location(self) -> GeoLocation:
        return GeoLocation(
            latitude=self.lat,
            longitude=self.lon,
            elevation_m=self.elev_m,
            utc_offset_hours=self.offset_hours,
        )


class DayQueryParams(LocationParams):
    """Query parameters for per-day endpoints."""

    day: date = Field(..., alias="date", description="Local calendar date (YYYY-MM-DD)")


class InstantQueryParams(LocationParams):
    """Query parameters for current-period lookups."""

    at: datetime = Field(
        ...,
        description="ISO-8601 instant; naive values are read in the location's offset",
    )

    def instant(self) -> datetime:
        local_tz = timezone(timedelta(hours=self.offset_hours))
        if self.at.tzinfo is None:
            return self.at.replace(tzinfo=local_tz)
        return self.at.astimezone(local_tz)


class PeriodModel(BaseModel):
    label: str
    ordinal: int = Field(..., ge=1, description="1-based position within its half-day")
    start: datetime
    end: datetime
    is_daytime: bool
    is_auspicious: bool

    @classmethod
    def from_period(cls, period: Period) -> "PeriodModel":
        return cls(
            label=period.label.value,
            ordinal=period.ordinal,
            start=period.start,
            end=period.end,
            is_daytime=period.is_daytime,
            is_auspicious=period.is_auspicious,
        )


class CurrentPeriodResponse(BaseModel):
    ok: bool = True
    system: PeriodSystem
    at: datetime
    period: PeriodModel


class DayPeriodsResponse(BaseModel):
    ok: bool = True
    system: PeriodSystem
    day: date = Field(..., serialization_alias="date")
    periods: List[PeriodModel]


class SunResponse(BaseModel):
    """Successful sunrise/sunset response payload."""

    ok: bool = True
    status: str = Field(..., description="Computation status")
    day: date = Field(..., serialization_alias="date", description="Requested local date")
    latitude: float
    longitude: float
    elevation_m: float
    offset_hours: float
    sunrise: Optional[datetime] = Field(None, description="Sunrise in the local offset")
    sunset: Optional[datetime] = Field(None, description="Sunset in the local offset")
    source: Literal["CSPICE-DE"] = Field(
        "CSPICE-DE", description="Ephemeris source identifier"
    )


class HealthResponse(BaseModel):
    """Health-check response."""

    ok: bool = True
    ephemeris_loaded: bool
    files: List[str]


class ErrorResponse(BaseModel):
    """Error payload."""

    ok: bool = False
    code: str
    error: str
