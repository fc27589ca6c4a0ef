# metarwx/decoder/errors.py
"""
Decoder exceptions.

The decoder itself never raises on bad data: parse() returns None. These
exist for callers that want a reason attached, via parse_or_raise().
"""

from enum import Enum
from typing import Optional


class RejectReason(Enum):
    """Why a report could not be decoded at all."""
    EMPTY = "EMPTY"
    UNKNOWN_REPORT_TYPE = "UNKNOWN_REPORT_TYPE"
    INVALID_STATION = "INVALID_STATION"


class MetarError(Exception):
    """Base exception for metarwx."""
    pass


class ReportRejectedError(MetarError):
    """Raised when a report is missing its report type or station."""

    def __init__(self, reason: RejectReason, raw: Optional[str] = None):
        self.reason = reason
        self.raw = raw
        super().__init__(f"Report rejected ({reason.value}): {raw!r}")
