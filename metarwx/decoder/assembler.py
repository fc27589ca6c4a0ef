# metarwx/decoder/assembler.py
"""
Report assembler.

Runs the field decoders in fixed report order over one cursor:

HEADER -> STATION -> TIME -> WIND -> VISIBILITY -> RVR -> WEATHER
-> CLOUDS -> TEMPERATURE -> PRESSURE -> REMARKS

A stage that does not match leaves its field absent and the next stage
runs at the same position. HEADER and STATION are mandatory: if either
does not match, the whole report is rejected. The pass is forward-only;
a skipped stage is never retried.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from ..logging import get_decoder_logger
from .errors import RejectReason, ReportRejectedError
from .fields import (
    decode_clouds,
    decode_header,
    decode_issuance_time,
    decode_pressure,
    decode_remarks,
    decode_runway_visual_range,
    decode_station,
    decode_temperature,
    decode_visibility,
    decode_weather,
    decode_wind,
)
from .models import ParsedReport
from .tokens import Cursor, Decoder, tokenize

logger = get_decoder_logger()


@dataclass(frozen=True)
class Stage:
    """One step of the report grammar."""
    field: str  # ParsedReport attribute the value is stored under
    decoder: Decoder
    reject_reason: Optional[RejectReason] = None  # set => mandatory

    @property
    def mandatory(self) -> bool:
        return self.reject_reason is not None


STAGES: Tuple[Stage, ...] = (
    Stage("report_type", decode_header, RejectReason.UNKNOWN_REPORT_TYPE),
    Stage("station_id", decode_station, RejectReason.INVALID_STATION),
    Stage("issuance_time", decode_issuance_time),
    Stage("wind", decode_wind),
    Stage("visibility", decode_visibility),
    Stage("runway_visual_range", decode_runway_visual_range),
    Stage("weather", decode_weather),
    Stage("clouds", decode_clouds),
    Stage("temperature", decode_temperature),
    Stage("pressure", decode_pressure),
    Stage("remarks", decode_remarks),
)


def assemble(raw: str) -> Tuple[Optional[ParsedReport], Optional[RejectReason]]:
    """
    Decode a report, reporting why when it is rejected.

    Args:
        raw: Raw report text

    Returns:
        (report, None) on success, (None, reason) when rejected
    """
    tokens = tokenize(raw)
    if tokens is None:
        return None, RejectReason.EMPTY

    cursor = Cursor(tokens)
    values: Dict[str, Any] = {}

    for stage in STAGES:
        value = cursor.apply(stage.decoder)
        if value is None:
            if stage.mandatory:
                return None, stage.reject_reason
            continue
        values[stage.field] = value

    logger.debug(
        "metar_decoded",
        station_id=values["station_id"],
        fields=sorted(values),
        tokens=len(tokens),
        consumed=cursor.position,
    )
    return ParsedReport(raw=raw, **values), None


def parse(raw: str) -> Optional[ParsedReport]:
    """
    Decode a raw METAR/SPECI report.

    Never raises on malformed data. Fields the report does not carry (or
    carries in a form not understood) are left absent.

    Args:
        raw: Raw report text, e.g.
            "METAR KSFO 010953Z 28010KT 10SM FEW020 18/12 A3012 RMK AO2"

    Returns:
        ParsedReport, or None if the input is empty or its report type or
        station identifier cannot be decoded
    """
    report, reason = assemble(raw)
    if report is None:
        logger.debug("metar_rejected", reason=reason.value, raw=raw)
    return report


def parse_or_raise(raw: str) -> ParsedReport:
    """
    Like parse(), but raise instead of returning None.

    Raises:
        ReportRejectedError: With the reason the report was rejected
    """
    report, reason = assemble(raw)
    if report is None:
        raise ReportRejectedError(reason, raw)
    return report
