# metarwx/decoder/fields.py
"""
Field decoders.

Each public decode_* function is a Decoder: given (tokens, position) it
returns (value, new_position) when its group is present at position, or
None with nothing consumed. Most fields are a single token and are written
as token -> value functions lifted with one_token(); the repeating groups
(RVR, present weather, clouds) are lifted with repeated().

Wind and remarks look beyond the current token and are written as
Decoders directly.
"""

import re
from functools import wraps
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from .codes import (
    CLOUD_TYPES,
    DESCRIPTORS,
    INTENSITY_PREFIXES,
    LAYER_COVERAGE,
    PHENOMENON_CODE_LENGTH,
    PHENOMENON_CODES,
    REPORT_TYPES,
    SKY_CLEAR_TOKENS,
    CloudCoverage,
    Intensity,
    Obscuration,
    OtherPhenomenon,
    Precipitation,
    ReportType,
)
from .models import (
    CloudLayer,
    IssuanceTime,
    PressureField,
    RunwayVisualRange,
    TemperatureDewpoint,
    VisibilityField,
    WeatherPhenomenon,
    WindField,
)
from .tokens import Decoder, Match, token_at

T = TypeVar("T")

# Unit conversions
METERS_PER_STATUTE_MILE = 1609.34
INHG_PER_HPA = 0.02953

# "M1/4SM" means less than 1/4 SM. There is no exact value to report, so
# the fraction is scaled down. This is an approximation, not an ICAO rule.
LESS_THAN_FACTOR = 0.9

# Metre visibility at or above the threshold is reported as the sentinel
UNLIMITED_VISIBILITY_THRESHOLD_M = 9999
UNLIMITED_VISIBILITY_M = 10000.0

CLOUD_HEIGHT_UNIT_FT = 100
REMARKS_MARKER = "RMK"
MINUS_MARKER = "M"

STATION_PATTERN = re.compile(r"[A-Za-z]{4}")
ISSUANCE_TIME_PATTERN = re.compile(r"(\d{2})(\d{2})(\d{2})Z")
WIND_PATTERN = re.compile(
    r"(?P<direction>VRB|\d{3})(?P<speed>\d{2,3})(?:G(?P<gust>\d{2,3}))?KT"
)
VARIABLE_WIND_PATTERN = re.compile(r"(\d{3})V(\d{3})")
VARIABLE_WIND_SENTINEL = "VRB"
RVR_PATTERN = re.compile(r"R(\d{2}[LCR]?)/(\d{4})(?:V(\d{4}))?FT")
VERTICAL_VISIBILITY_PATTERN = re.compile(r"VV(\d{3})")
CLOUD_LAYER_PATTERN = re.compile(
    r"(%s)(\d{3})(%s)?" % ("|".join(LAYER_COVERAGE), "|".join(CLOUD_TYPES))
)
TEMPERATURE_PATTERN = re.compile(r"(M?\d{2})/(M?\d{2})")
PRESSURE_PATTERN = re.compile(r"([AQ])(\d{4})")


# ---------------------------------------------------------------------------
# Combinators
# ---------------------------------------------------------------------------

def one_token(decode_token: Callable[[str], Optional[T]]) -> Decoder:
    """Lift a token -> value function into a single-token Decoder."""

    @wraps(decode_token)
    def decoder(tokens: Sequence[str], position: int) -> Optional[Match]:
        token = token_at(tokens, position)
        if token is None:
            return None
        value = decode_token(token)
        if value is None:
            return None
        return value, position + 1

    return decoder


def repeated(decode_token: Callable[[str], Optional[T]]) -> Decoder:
    """
    Lift a token -> value function into a list Decoder.

    Consumes tokens while they decode; the first token that does not stops
    the list and is left for the next stage. Yields None when not even the
    first token decodes.
    """

    @wraps(decode_token)
    def decoder(tokens: Sequence[str], position: int) -> Optional[Match]:
        values: List[T] = []
        while True:
            token = token_at(tokens, position)
            if token is None:
                break
            value = decode_token(token)
            if value is None:
                break
            values.append(value)
            position += 1
        if not values:
            return None
        return tuple(values), position

    return decoder


# ---------------------------------------------------------------------------
# Mandatory fields
# ---------------------------------------------------------------------------

@one_token
def decode_header(token: str) -> Optional[ReportType]:
    return REPORT_TYPES.get(token)


@one_token
def decode_station(token: str) -> Optional[str]:
    """Four-letter ICAO identifier, upper-cased."""
    if STATION_PATTERN.fullmatch(token):
        return token.upper()
    return None


# ---------------------------------------------------------------------------
# Optional single fields
# ---------------------------------------------------------------------------

@one_token
def decode_issuance_time(token: str) -> Optional[IssuanceTime]:
    m = ISSUANCE_TIME_PATTERN.fullmatch(token)
    if not m:
        return None
    day, hour, minute = (int(g) for g in m.groups())
    return IssuanceTime(day=day, hour=hour, minute=minute)


def _variable_range(token: Optional[str]) -> Optional[Tuple[int, int]]:
    if token is None:
        return None
    m = VARIABLE_WIND_PATTERN.fullmatch(token)
    if not m:
        return None
    return int(m.group(1)), int(m.group(2))


def decode_wind(tokens: Sequence[str], position: int) -> Optional[Match]:
    """
    Wind group, plus the variable-direction group when it follows.

    27008G15KT -> 270 deg, 8 kt, gusting 15
    VRB03KT    -> variable, 3 kt
    27008KT 240V300 -> both tokens consumed
    """
    token = token_at(tokens, position)
    if token is None:
        return None
    m = WIND_PATTERN.fullmatch(token)
    if not m:
        return None

    variable = m.group("direction") == VARIABLE_WIND_SENTINEL
    direction = None if variable else int(m.group("direction"))
    gust = m.group("gust")
    position += 1

    variable_from = variable_to = None
    var_range = _variable_range(token_at(tokens, position))
    if var_range is not None:
        variable_from, variable_to = var_range
        position += 1

    wind = WindField(
        direction_degrees=direction,
        speed_kt=int(m.group("speed")),
        gust_kt=int(gust) if gust else None,
        variable=variable,
        variable_from=variable_from,
        variable_to=variable_to,
    )
    return wind, position


def _fraction(numerator: str, denominator: str) -> Optional[float]:
    den = int(denominator)
    if den == 0:
        return None
    return int(numerator) / den


def _less_than_miles(m: "re.Match[str]") -> Optional[float]:
    fraction = _fraction(m.group(1), m.group(2))
    if fraction is None:
        return None
    return fraction * METERS_PER_STATUTE_MILE * LESS_THAN_FACTOR


def _fractional_miles(m: "re.Match[str]") -> Optional[float]:
    fraction = _fraction(m.group(1), m.group(2))
    if fraction is None:
        return None
    return fraction * METERS_PER_STATUTE_MILE


def _whole_miles(m: "re.Match[str]") -> Optional[float]:
    return int(m.group(1)) * METERS_PER_STATUTE_MILE


def _meters(m: "re.Match[str]") -> Optional[float]:
    meters = int(m.group(0))
    if meters >= UNLIMITED_VISIBILITY_THRESHOLD_M:
        return UNLIMITED_VISIBILITY_M
    return float(meters)


# Tried in order; first pattern that matches decides the encoding
VISIBILITY_ENCODINGS: List[Tuple["re.Pattern[str]", Callable[["re.Match[str]"], Optional[float]]]] = [
    (re.compile(r"M(\d+)/(\d+)SM"), _less_than_miles),
    (re.compile(r"(\d+)/(\d+)SM"), _fractional_miles),
    (re.compile(r"(\d+)SM"), _whole_miles),
    (re.compile(r"\d+"), _meters),
]


@one_token
def decode_visibility(token: str) -> Optional[VisibilityField]:
    for pattern, to_meters in VISIBILITY_ENCODINGS:
        m = pattern.fullmatch(token)
        if m:
            distance = to_meters(m)
            if distance is None:
                return None
            return VisibilityField(distance_m=distance)
    return None


def _signed(value: str) -> int:
    if value.startswith(MINUS_MARKER):
        return -int(value[len(MINUS_MARKER):])
    return int(value)


@one_token
def decode_temperature(token: str) -> Optional[TemperatureDewpoint]:
    """TT/DD with an M prefix for negative values, e.g. M05/M10."""
    m = TEMPERATURE_PATTERN.fullmatch(token)
    if not m:
        return None
    return TemperatureDewpoint(temperature_c=_signed(m.group(1)), dewpoint_c=_signed(m.group(2)))


PRESSURE_ENCODINGS = {
    "A": lambda value: (value / 100.0) / INHG_PER_HPA,  # inHg x 100
    "Q": lambda value: float(value),  # hPa
}


@one_token
def decode_pressure(token: str) -> Optional[PressureField]:
    m = PRESSURE_PATTERN.fullmatch(token)
    if not m:
        return None
    to_hpa = PRESSURE_ENCODINGS[m.group(1)]
    return PressureField(qnh_hpa=to_hpa(int(m.group(2))))


def decode_remarks(tokens: Sequence[str], position: int) -> Optional[Match]:
    """
    Everything after RMK, joined with single spaces.

    Consumes to the end of the report. A trailing RMK with nothing after it
    yields no remarks.
    """
    for index in range(position, len(tokens)):
        if tokens[index] == REMARKS_MARKER:
            rest = tokens[index + 1:]
            if not rest:
                return None
            return " ".join(rest), len(tokens)
    return None


# ---------------------------------------------------------------------------
# Repeating groups
# ---------------------------------------------------------------------------

def parse_runway_visual_range(token: str) -> Optional[RunwayVisualRange]:
    m = RVR_PATTERN.fullmatch(token)
    if not m:
        return None
    runway, visual_range, variable_range = m.groups()
    return RunwayVisualRange(
        runway=runway,
        visual_range_ft=int(visual_range),
        variable_range_ft=int(variable_range) if variable_range else None,
    )


def parse_weather_phenomenon(token: str) -> Optional[WeatherPhenomenon]:
    """
    Decode one present-weather group.

    Order: intensity prefix, at most one descriptor, then one or more
    two-letter phenomenon codes. Any leftover text rejects the token, as
    does a group with no phenomenon code (e.g. a bare "TS" or "VCSH").
    """
    rest = token
    intensity = Intensity.MODERATE
    for prefix, value in INTENSITY_PREFIXES.items():
        if rest.startswith(prefix):
            intensity = value
            rest = rest[len(prefix):]
            break

    descriptor = DESCRIPTORS.get(rest[:2])
    if descriptor is not None:
        rest = rest[2:]

    precipitation: List[Precipitation] = []
    obscuration: List[Obscuration] = []
    other: List[OtherPhenomenon] = []
    buckets = {
        Precipitation: precipitation,
        Obscuration: obscuration,
        OtherPhenomenon: other,
    }

    while rest:
        code = PHENOMENON_CODES.get(rest[:PHENOMENON_CODE_LENGTH])
        if code is None:
            return None
        buckets[type(code)].append(code)
        rest = rest[PHENOMENON_CODE_LENGTH:]

    if not (precipitation or obscuration or other):
        return None

    return WeatherPhenomenon(
        intensity=intensity,
        descriptor=descriptor,
        precipitation=tuple(precipitation),
        obscuration=tuple(obscuration),
        other=tuple(other),
    )


def parse_cloud_layer(token: str) -> Optional[CloudLayer]:
    clear = SKY_CLEAR_TOKENS.get(token)
    if clear is not None:
        return CloudLayer(coverage=clear)

    m = VERTICAL_VISIBILITY_PATTERN.fullmatch(token)
    if m:
        return CloudLayer(
            coverage=CloudCoverage.VERTICAL_VISIBILITY,
            base_altitude_ft=int(m.group(1)) * CLOUD_HEIGHT_UNIT_FT,
        )

    m = CLOUD_LAYER_PATTERN.fullmatch(token)
    if m:
        coverage, height, cloud_type = m.groups()
        return CloudLayer(
            coverage=LAYER_COVERAGE[coverage],
            base_altitude_ft=int(height) * CLOUD_HEIGHT_UNIT_FT,
            type=CLOUD_TYPES[cloud_type] if cloud_type else None,
        )

    return None


decode_runway_visual_range = repeated(parse_runway_visual_range)
decode_weather = repeated(parse_weather_phenomenon)
decode_clouds = repeated(parse_cloud_layer)
