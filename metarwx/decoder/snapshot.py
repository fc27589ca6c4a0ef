# metarwx/decoder/snapshot.py
"""
Weather snapshot: the decoded report as handed to calculation and display.

to_snapshot() attaches the caller's issue timestamp, source tag and a
freshness window to a ParsedReport. It does no decoding of its own.
"""

from dataclasses import dataclass, fields, is_dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .fields import METERS_PER_STATUTE_MILE
from .models import (
    CloudLayer,
    IssuanceTime,
    ParsedReport,
    PressureField,
    RunwayVisualRange,
    TemperatureDewpoint,
    VisibilityField,
    WeatherPhenomenon,
    WindField,
)
from .codes import ReportType

DEFAULT_TTL_SECONDS = 3600  # 1 hour
DEFAULT_STALE_AFTER_SECONDS = 6 * 3600


class Freshness(Enum):
    """
    Age band of a snapshot.

    FRESH: within its TTL
    STALE: past TTL, still usable with caution
    EXPIRED: too old to use
    """
    FRESH = "FRESH"
    STALE = "STALE"
    EXPIRED = "EXPIRED"


class FlightCategory(Enum):
    VFR = "VFR"
    MVFR = "MVFR"
    IFR = "IFR"
    LIFR = "LIFR"


def flight_category_for(
    ceiling_ft: Optional[int], visibility_sm: Optional[float]
) -> FlightCategory:
    """LIFR < 500 ft / 1 SM, IFR < 1000 ft / 3 SM, MVFR <= 3000 ft / 5 SM."""
    def below(value, limit):
        return value is not None and value < limit

    def at_most(value, limit):
        return value is not None and value <= limit

    if below(ceiling_ft, 500) or below(visibility_sm, 1.0):
        return FlightCategory.LIFR
    if below(ceiling_ft, 1000) or below(visibility_sm, 3.0):
        return FlightCategory.IFR
    if at_most(ceiling_ft, 3000) or at_most(visibility_sm, 5.0):
        return FlightCategory.MVFR
    return FlightCategory.VFR


def _utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.name.lower()
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, WeatherPhenomenon):
        data = {f.name: _jsonable(getattr(value, f.name)) for f in fields(value)}
        data["code"] = value.code
        return data
    if is_dataclass(value):
        return {f.name: _jsonable(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


@dataclass(frozen=True)
class WeatherSnapshot:
    """Normalized weather for one station at one point in time."""
    station_id: str
    report_type: ReportType
    metar_raw: str
    issued_at: datetime
    source: str
    ttl_seconds: int = DEFAULT_TTL_SECONDS
    issuance_time: Optional[IssuanceTime] = None
    wind: Optional[WindField] = None
    visibility: Optional[VisibilityField] = None
    runway_visual_range: Tuple[RunwayVisualRange, ...] = ()
    weather: Tuple[WeatherPhenomenon, ...] = ()
    clouds: Tuple[CloudLayer, ...] = ()
    temperature: Optional[TemperatureDewpoint] = None
    pressure: Optional[PressureField] = None
    remarks: Optional[str] = None

    @property
    def expires_at(self) -> datetime:
        return self.issued_at + timedelta(seconds=self.ttl_seconds)

    def age_minutes(self, now: Optional[datetime] = None) -> float:
        now = _utc(now) if now else datetime.now(timezone.utc)
        return (now - self.issued_at).total_seconds() / 60.0

    def is_valid(self, now: Optional[datetime] = None) -> bool:
        """
        True while strictly inside the TTL window.

        At exactly expires_at the snapshot is no longer valid, although
        freshness() still reports FRESH: its band includes the boundary.
        """
        now = _utc(now) if now else datetime.now(timezone.utc)
        return now < self.expires_at

    def freshness(
        self,
        now: Optional[datetime] = None,
        stale_after_seconds: int = DEFAULT_STALE_AFTER_SECONDS,
    ) -> Freshness:
        age_seconds = self.age_minutes(now) * 60.0
        if age_seconds <= self.ttl_seconds:
            return Freshness.FRESH
        if age_seconds <= stale_after_seconds:
            return Freshness.STALE
        return Freshness.EXPIRED

    @property
    def ceiling_ft(self) -> Optional[int]:
        """Lowest broken/overcast layer or vertical visibility."""
        heights = [c.base_altitude_ft for c in self.clouds if c.is_ceiling]
        return min(heights) if heights else None

    @property
    def flight_category(self) -> Optional[FlightCategory]:
        """
        FAA flight category from ceiling and visibility.

        None when neither visibility nor any sky condition was reported.
        """
        if self.visibility is None and not self.clouds:
            return None
        visibility_sm = (
            round(self.visibility.distance_m / METERS_PER_STATUTE_MILE, 3)
            if self.visibility is not None
            else None
        )
        return flight_category_for(self.ceiling_ft, visibility_sm)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready representation, including derived values."""
        data = {f.name: _jsonable(getattr(self, f.name)) for f in fields(self)}
        data["report_type"] = self.report_type.value
        data["expires_at"] = self.expires_at.isoformat()
        data["ceiling_ft"] = self.ceiling_ft
        category = self.flight_category
        data["flight_category"] = category.value if category else None
        return data


def to_snapshot(
    parsed: ParsedReport,
    issued_at: datetime,
    source: str,
    ttl_seconds: int = DEFAULT_TTL_SECONDS,
) -> WeatherSnapshot:
    """
    Build the snapshot for a decoded report.

    Args:
        parsed: Result of parse()
        issued_at: Absolute issue time, resolved by the caller (naive values
            are taken as UTC)
        source: Where the report came from, e.g. "AVWX"
        ttl_seconds: Freshness window

    Returns:
        WeatherSnapshot
    """
    return WeatherSnapshot(
        station_id=parsed.station_id,
        report_type=parsed.report_type,
        metar_raw=parsed.raw,
        issued_at=_utc(issued_at),
        source=source,
        ttl_seconds=ttl_seconds,
        issuance_time=parsed.issuance_time,
        wind=parsed.wind,
        visibility=parsed.visibility,
        runway_visual_range=parsed.runway_visual_range,
        weather=parsed.weather,
        clouds=parsed.clouds,
        temperature=parsed.temperature,
        pressure=parsed.pressure,
        remarks=parsed.remarks,
    )
