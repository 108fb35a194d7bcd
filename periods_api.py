"""FastAPI application exposing planetary hours and eight-fold day periods."""

from __future__ import annotations

import json
import logging
import time
from contextlib import asynccontextmanager
from typing import Callable, List, Optional, TypeVar

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from models import (
    CurrentPeriodResponse,
    DayPeriodsResponse,
    DayQueryParams,
    ErrorResponse,
    HealthResponse,
    InstantQueryParams,
    PeriodModel,
    PeriodSystem,
    SunResponse,
)
from periods import (
    MissingAstronomicalDataError,
    Period,
    SunEventProvider,
    current_eight_fold_period,
    current_planetary_hour,
    eight_fold_periods_for_day,
    inauspicious_periods,
    planetary_hours_for_day,
)
from periods.astro import EphemerisError, EphemerisSunProvider, load_ephemeris, loaded_files
from periods.config import Settings
from periods.ephemeris import EphemerisAcquisitionError, resolve_ephemeris_source

SETTINGS = Settings.from_env()

logging.basicConfig(level=SETTINGS.log_level, format="%(message)s")
LOGGER = logging.getLogger("periods-api")

APP_DESCRIPTION = (
    "Planetary hours (Hora) and Choghadiya periods derived from local sunrise and sunset"
)

T = TypeVar("T")


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    payload = ErrorResponse(code=code, error=message)
    LOGGER.error(json.dumps({"event": "error", "code": code, "message": message}))
    return JSONResponse(status_code=status_code, content=payload.model_dump())


def _log_request(event: str, started: float, **fields: object) -> None:
    duration_ms = (time.perf_counter() - started) * 1000.0
    LOGGER.info(json.dumps({"event": event, **fields, "duration_ms": round(duration_ms, 3)}))


def _compute(fn: Callable[[], T]) -> T:
    try:
        return fn()
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except EphemerisError as exc:
        raise HTTPException(status_code=500, detail=str(exc))


def get_provider(request: Request) -> SunEventProvider:
    return request.app.state.provider


def create_app(
    provider: Optional[SunEventProvider] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Build the application.

    Without an explicit *provider* the ephemeris kernel is resolved and loaded
    at startup and an :class:`EphemerisSunProvider` serves the lookups.
    """

    settings = settings or SETTINGS

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if provider is not None:
            app.state.provider = provider
            yield
            return
        try:
            source_path = resolve_ephemeris_source(settings)
        except EphemerisAcquisitionError as exc:
            LOGGER.error(json.dumps({"event": "ephemeris_acquire_failed", "error": str(exc)}))
            raise
        LOGGER.info(json.dumps({"event": "startup", "ephemeris_source": str(source_path)}))
        try:
            load_ephemeris(source_path)
        except EphemerisError as exc:
            LOGGER.error(json.dumps({"event": "ephemeris_load_failed", "error": str(exc)}))
            raise
        app.state.provider = EphemerisSunProvider(settings.twilight)
        yield

    app = FastAPI(
        title="Riseset Periods API",
        description=APP_DESCRIPTION,
        version="1.0.0",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    _register_handlers(app)
    _register_routes(app)
    return app


def _register_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        messages = ", ".join(error["msg"] for error in exc.errors())
        return _error_response(422, "validation_error", messages)

    @app.exception_handler(MissingAstronomicalDataError)
    async def missing_data_handler(
        request: Request, exc: MissingAstronomicalDataError
    ) -> JSONResponse:
        return _error_response(422, "missing_astronomical_data", str(exc))

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        detail = exc.detail
        if isinstance(detail, dict):
            message = detail.get("error") or detail.get("message") or str(detail)
        elif isinstance(detail, list):
            message = ", ".join(str(item) for item in detail)
        else:
            message = str(detail)
        return _error_response(exc.status_code, f"http_{exc.status_code}", message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        LOGGER.exception("Unhandled exception", exc_info=exc)
        return _error_response(500, "internal_error", "Unhandled server error")


_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _day_response(
    system: PeriodSystem, params: DayQueryParams, periods: List[Period], started: float
) -> DayPeriodsResponse:
    _log_request(
        "periods",
        started,
        system=system.value,
        lat=params.lat,
        lon=params.lon,
        date=params.day.isoformat(),
        count=len(periods),
    )
    return DayPeriodsResponse(
        system=system,
        day=params.day,
        periods=[PeriodModel.from_period(period) for period in periods],
    )


def _current_response(
    system: PeriodSystem, params: InstantQueryParams, period: Period, started: float
) -> CurrentPeriodResponse:
    _log_request(
        "period",
        started,
        system=system.value,
        lat=params.lat,
        lon=params.lon,
        at=params.instant().isoformat(),
        label=period.label.value,
    )
    return CurrentPeriodResponse(
        system=system, at=params.instant(), period=PeriodModel.from_period(period)
    )


def _register_routes(app: FastAPI) -> None:
    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        files = loaded_files()
        return HealthResponse(ok=True, ephemeris_loaded=bool(files), files=files)

    @app.get("/sun", response_model=SunResponse, responses=_ERROR_RESPONSES)
    def sun_endpoint(
        params: DayQueryParams = Depends(),
        provider: SunEventProvider = Depends(get_provider),
    ) -> SunResponse:
        started = time.perf_counter()
        result = _compute(lambda: provider.get_sunrise_sunset(params.day, params.location()))
        _log_request(
            "sun",
            started,
            lat=params.lat,
            lon=params.lon,
            date=params.day.isoformat(),
            status=result.status,
        )
        return SunResponse(
            status=result.status,
            day=params.day,
            latitude=params.lat,
            longitude=params.lon,
            elevation_m=params.elev_m,
            offset_hours=params.offset_hours,
            sunrise=result.sunrise,
            sunset=result.sunset,
        )

    @app.get("/hora/current", response_model=CurrentPeriodResponse, responses=_ERROR_RESPONSES)
    def hora_current(
        params: InstantQueryParams = Depends(),
        provider: SunEventProvider = Depends(get_provider),
    ) -> CurrentPeriodResponse:
        started = time.perf_counter()
        period = _compute(
            lambda: current_planetary_hour(params.instant(), params.location(), provider)
        )
        return _current_response(PeriodSystem.hora, params, period, started)

    @app.get("/hora/day", response_model=DayPeriodsResponse, responses=_ERROR_RESPONSES)
    def hora_day(
        params: DayQueryParams = Depends(),
        provider: SunEventProvider = Depends(get_provider),
    ) -> DayPeriodsResponse:
        started = time.perf_counter()
        periods = _compute(
            lambda: planetary_hours_for_day(params.day, params.location(), provider)
        )
        return _day_response(PeriodSystem.hora, params, periods, started)

    @app.get(
        "/choghadiya/current", response_model=CurrentPeriodResponse, responses=_ERROR_RESPONSES
    )
    def choghadiya_current(
        params: InstantQueryParams = Depends(),
        provider: SunEventProvider = Depends(get_provider),
    ) -> CurrentPeriodResponse:
        started = time.perf_counter()
        period = _compute(
            lambda: current_eight_fold_period(params.instant(), params.location(), provider)
        )
        return _current_response(PeriodSystem.choghadiya, params, period, started)

    @app.get("/choghadiya/day", response_model=DayPeriodsResponse, responses=_ERROR_RESPONSES)
    def choghadiya_day(
        params: DayQueryParams = Depends(),
        provider: SunEventProvider = Depends(get_provider),
    ) -> DayPeriodsResponse:
        started = time.perf_counter()
        periods = _compute(
            lambda: eight_fold_periods_for_day(params.day, params.location(), provider)
        )
        return _day_response(PeriodSystem.choghadiya, params, periods, started)

    @app.get("/inauspicious", response_model=DayPeriodsResponse, responses=_ERROR_RESPONSES)
    def inauspicious_day(
        params: DayQueryParams = Depends(),
        provider: SunEventProvider = Depends(get_provider),
    ) -> DayPeriodsResponse:
        started = time.perf_counter()
        periods = _compute(lambda: inauspicious_periods(params.day, params.location(), provider))
        return _day_response(PeriodSystem.inauspicious, params, periods, started)


app = create_app()
