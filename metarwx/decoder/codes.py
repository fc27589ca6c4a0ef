# metarwx/decoder/codes.py
"""
METAR code tables.

Every shorthand code the decoder understands lives here as an enum member
whose value is the code as it appears in a report. Decoders look codes up
in the mapping tables below rather than branching on string prefixes, so
supporting another code is a one-line data change.
"""

from enum import Enum
from typing import Dict, Type, TypeVar


class ReportType(Enum):
    """Report header: routine or special observation."""
    METAR = "METAR"
    SPECI = "SPECI"


class Intensity(Enum):
    """Phenomenon intensity / proximity qualifier."""
    LIGHT = "-"
    MODERATE = ""
    HEAVY = "+"
    IN_VICINITY = "VC"


class Descriptor(Enum):
    SHALLOW = "MI"
    PATCHES = "BC"
    PARTIAL = "PR"
    DRIFTING = "DR"
    BLOWING = "BL"
    SHOWERS = "SH"
    THUNDERSTORM = "TS"
    FREEZING = "FZ"


class Precipitation(Enum):
    DRIZZLE = "DZ"
    RAIN = "RA"
    SNOW = "SN"
    SNOW_GRAINS = "SG"
    ICE_CRYSTALS = "IC"
    ICE_PELLETS = "PL"
    HAIL = "GR"
    SNOW_PELLETS = "GS"
    UNKNOWN = "UP"


class Obscuration(Enum):
    MIST = "BR"
    FOG = "FG"
    SMOKE = "FU"
    VOLCANIC_ASH = "VA"
    DUST = "DU"
    SAND = "SA"
    HAZE = "HZ"
    SPRAY = "PY"


class OtherPhenomenon(Enum):
    SQUALLS = "SQ"
    FUNNEL_CLOUD = "FC"  # tornado / waterspout
    DUST_STORM = "DS"
    SANDSTORM = "SS"


class CloudCoverage(Enum):
    """
    Sky cover.

    CLEAR and NO_SIGNIFICANT_CLOUD never carry a base altitude.
    VERTICAL_VISIBILITY carries an indicative ceiling, not a cloud base.
    """
    CLEAR = "CLR"
    NO_SIGNIFICANT_CLOUD = "NSC"
    VERTICAL_VISIBILITY = "VV"
    FEW = "FEW"
    SCATTERED = "SCT"
    BROKEN = "BKN"
    OVERCAST = "OVC"


class CloudType(Enum):
    CUMULONIMBUS = "CB"
    TOWERING_CUMULUS = "TCU"


E = TypeVar("E", bound=Enum)


def code_table(enum_cls: Type[E]) -> Dict[str, E]:
    """Build a code -> member mapping from an enum whose values are codes."""
    return {member.value: member for member in enum_cls if member.value}


REPORT_TYPES: Dict[str, ReportType] = code_table(ReportType)

# Intensity prefixes are checked in this order; MODERATE is the default
INTENSITY_PREFIXES: Dict[str, Intensity] = code_table(Intensity)

DESCRIPTORS: Dict[str, Descriptor] = code_table(Descriptor)

# All phenomenon codes are two letters; the value says which bucket it fills
PHENOMENON_CODES: Dict[str, Enum] = {
    **code_table(Precipitation),
    **code_table(Obscuration),
    **code_table(OtherPhenomenon),
}

PHENOMENON_CODE_LENGTH = 2

# Sky-cover tokens that stand alone with no altitude
SKY_CLEAR_TOKENS: Dict[str, CloudCoverage] = {
    "CLR": CloudCoverage.CLEAR,
    "SKC": CloudCoverage.CLEAR,
    "NSC": CloudCoverage.NO_SIGNIFICANT_CLOUD,
    "NCD": CloudCoverage.NO_SIGNIFICANT_CLOUD,
}

LAYER_COVERAGE: Dict[str, CloudCoverage] = {
    c.value: c
    for c in (
        CloudCoverage.FEW,
        CloudCoverage.SCATTERED,
        CloudCoverage.BROKEN,
        CloudCoverage.OVERCAST,
    )
}

CLOUD_TYPES: Dict[str, CloudType] = code_table(CloudType)

# Coverage that constitutes a ceiling
CEILING_COVERAGE = frozenset(
    {CloudCoverage.BROKEN, CloudCoverage.OVERCAST, CloudCoverage.VERTICAL_VISIBILITY}
)
