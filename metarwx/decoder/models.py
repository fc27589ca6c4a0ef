# metarwx/decoder/models.py
"""
Decoded report models.

Every value here is created fresh by a single parse call and is frozen
afterwards.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Tuple

from .codes import (
    CEILING_COVERAGE,
    CloudCoverage,
    CloudType,
    Descriptor,
    Intensity,
    Obscuration,
    OtherPhenomenon,
    Precipitation,
    ReportType,
)


@dataclass(frozen=True)
class IssuanceTime:
    """
    Report day/time (UTC), without year or month.

    Values are decoded positionally and not calendar-validated.
    """
    day: int
    hour: int
    minute: int

    def resolve(self, reference: datetime) -> datetime:
        """
        Anchor to the most recent month, at or before a reference
        timestamp, that contains the report day.

        A day later than the reference day belongs to the previous month,
        so a report from the 31st fetched on the 1st resolves backwards.

        Raises ValueError if the decoded values are not a real time
        in that month.
        """
        if reference.tzinfo is None:
            reference = reference.replace(tzinfo=timezone.utc)
        reference = reference.astimezone(timezone.utc)

        year, month = reference.year, reference.month
        if self.day > reference.day:
            year, month = (year - 1, 12) if month == 1 else (year, month - 1)

        return datetime(
            year, month, self.day, self.hour, self.minute, tzinfo=timezone.utc
        )


@dataclass(frozen=True)
class WindField:
    """Surface wind. direction_degrees is None when variable."""
    direction_degrees: Optional[int]
    speed_kt: int
    gust_kt: Optional[int] = None
    variable: bool = False
    variable_from: Optional[int] = None
    variable_to: Optional[int] = None

    @property
    def is_calm(self) -> bool:
        return not self.variable and self.direction_degrees == 0 and self.speed_kt == 0


@dataclass(frozen=True)
class VisibilityField:
    distance_m: float
    variable: bool = False


@dataclass(frozen=True)
class RunwayVisualRange:
    runway: str  # designator incl. L/C/R suffix, e.g. "28L"
    visual_range_ft: int
    variable_range_ft: Optional[int] = None


@dataclass(frozen=True)
class WeatherPhenomenon:
    """One present-weather group, e.g. -SHRA or VCFG."""
    intensity: Intensity = Intensity.MODERATE
    descriptor: Optional[Descriptor] = None
    precipitation: Tuple[Precipitation, ...] = ()
    obscuration: Tuple[Obscuration, ...] = ()
    other: Tuple[OtherPhenomenon, ...] = ()

    @property
    def code(self) -> str:
        """Re-encode as the report group text."""
        parts = [self.intensity.value]
        if self.descriptor:
            parts.append(self.descriptor.value)
        parts.extend(c.value for c in self.precipitation)
        parts.extend(c.value for c in self.obscuration)
        parts.extend(c.value for c in self.other)
        return "".join(parts)


@dataclass(frozen=True)
class CloudLayer:
    coverage: CloudCoverage
    base_altitude_ft: Optional[int] = None
    type: Optional[CloudType] = None

    @property
    def is_ceiling(self) -> bool:
        return self.coverage in CEILING_COVERAGE and self.base_altitude_ft is not None


@dataclass(frozen=True)
class TemperatureDewpoint:
    temperature_c: int
    dewpoint_c: int

    @property
    def spread_c(self) -> int:
        return self.temperature_c - self.dewpoint_c


@dataclass(frozen=True)
class PressureField:
    qnh_hpa: float


@dataclass(frozen=True)
class ParsedReport:
    """
    Intermediate result of decoding one report.

    Only report_type and station_id are guaranteed; every other field is
    absent (None or an empty tuple) when the report did not carry it.
    """
    report_type: ReportType
    station_id: str
    raw: str
    issuance_time: Optional[IssuanceTime] = None
    wind: Optional[WindField] = None
    visibility: Optional[VisibilityField] = None
    runway_visual_range: Tuple[RunwayVisualRange, ...] = field(default_factory=tuple)
    weather: Tuple[WeatherPhenomenon, ...] = field(default_factory=tuple)
    clouds: Tuple[CloudLayer, ...] = field(default_factory=tuple)
    temperature: Optional[TemperatureDewpoint] = None
    pressure: Optional[PressureField] = None
    remarks: Optional[str] = None
