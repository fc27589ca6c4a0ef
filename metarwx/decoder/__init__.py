# METAR/SPECI decoder - raw report text to typed weather snapshot
from .codes import (
    CloudCoverage,
    CloudType,
    Descriptor,
    Intensity,
    Obscuration,
    OtherPhenomenon,
    Precipitation,
    ReportType,
)
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
from .errors import MetarError, RejectReason, ReportRejectedError
from .tokens import Cursor, tokenize
from .assembler import STAGES, assemble, parse, parse_or_raise
from .snapshot import (
    DEFAULT_TTL_SECONDS,
    FlightCategory,
    Freshness,
    WeatherSnapshot,
    to_snapshot,
)

__all__ = [
    "CloudCoverage",
    "CloudType",
    "Descriptor",
    "Intensity",
    "Obscuration",
    "OtherPhenomenon",
    "Precipitation",
    "ReportType",
    "CloudLayer",
    "IssuanceTime",
    "ParsedReport",
    "PressureField",
    "RunwayVisualRange",
    "TemperatureDewpoint",
    "VisibilityField",
    "WeatherPhenomenon",
    "WindField",
    "MetarError",
    "RejectReason",
    "ReportRejectedError",
    "Cursor",
    "tokenize",
    "STAGES",
    "assemble",
    "parse",
    "parse_or_raise",
    "DEFAULT_TTL_SECONDS",
    "FlightCategory",
    "Freshness",
    "WeatherSnapshot",
    "to_snapshot",
]
