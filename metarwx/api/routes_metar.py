# metarwx/api/routes_metar.py
"""
METAR decode API routes.

Endpoints for decoding raw report text into weather snapshots.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from ..decoder import ReportRejectedError, WeatherSnapshot, parse_or_raise, to_snapshot
from ..logging import get_api_logger
from ..settings import settings

router = APIRouter(prefix="/metar", tags=["metar"])

logger = get_api_logger()


class DecodeRequest(BaseModel):
    """Request to decode one report."""
    raw: str
    issued_at: Optional[datetime] = None  # defaults to now (UTC)
    source: Optional[str] = None  # defaults to settings.default_source


class SnapshotResponse(BaseModel):
    """Decoded weather snapshot."""
    station_id: str
    report_type: str
    metar_raw: str
    issued_at: datetime
    expires_at: datetime
    source: str
    ttl_seconds: int
    freshness: str
    flight_category: Optional[str]
    ceiling_ft: Optional[int]
    issuance_time: Optional[Dict[str, int]]
    wind: Optional[Dict[str, Any]]
    visibility: Optional[Dict[str, Any]]
    runway_visual_range: List[Dict[str, Any]]
    weather: List[Dict[str, Any]]
    clouds: List[Dict[str, Any]]
    temperature: Optional[Dict[str, int]]
    pressure: Optional[Dict[str, float]]
    remarks: Optional[str]


class BatchDecodeRequest(BaseModel):
    """Request to decode several reports with a shared source tag."""
    reports: List[str]
    source: Optional[str] = None


class RejectedReport(BaseModel):
    """A report that could not be decoded."""
    index: int
    raw: str
    reason: str


class BatchDecodeResponse(BaseModel):
    """Response from batch decode."""
    total: int
    decoded: int
    rejected: int
    snapshots: List[SnapshotResponse]
    rejections: List[RejectedReport]


def _snapshot_response(snapshot: WeatherSnapshot, now: datetime) -> SnapshotResponse:
    data = snapshot.to_dict()
    data["freshness"] = snapshot.freshness(
        now, stale_after_seconds=settings.stale_after_seconds
    ).value
    return SnapshotResponse(**data)


def _decode(raw: str, issued_at: Optional[datetime], source: Optional[str]) -> WeatherSnapshot:
    """Decode and map; raises ReportRejectedError."""
    parsed = parse_or_raise(raw)
    return to_snapshot(
        parsed,
        issued_at=issued_at or datetime.now(timezone.utc),
        source=source or settings.default_source,
        ttl_seconds=settings.snapshot_ttl_seconds,
    )


@router.post("/decode", response_model=SnapshotResponse)
async def decode_report(request: DecodeRequest) -> SnapshotResponse:
    """
    Decode a single METAR/SPECI report.

    Args:
        request: Raw report plus optional issue time and source tag

    Returns:
        Weather snapshot

    Raises:
        HTTPException 422: If the report type or station cannot be decoded
    """
    try:
        snapshot = _decode(request.raw, request.issued_at, request.source)
    except ReportRejectedError as e:
        logger.info("metar_decode_rejected", reason=e.reason.value, raw=request.raw)
        raise HTTPException(
            status_code=422,
            detail={"reason": e.reason.value, "raw": request.raw},
        )

    logger.info(
        "metar_decode_request",
        station_id=snapshot.station_id,
        source=snapshot.source,
    )
    return _snapshot_response(snapshot, datetime.now(timezone.utc))


@router.post("/decode/batch", response_model=BatchDecodeResponse)
async def decode_batch(request: BatchDecodeRequest) -> BatchDecodeResponse:
    """
    Decode several reports.

    Rejected reports do not fail the request; they are listed with their
    position and reason.
    """
    now = datetime.now(timezone.utc)
    snapshots: List[SnapshotResponse] = []
    rejections: List[RejectedReport] = []

    for index, raw in enumerate(request.reports):
        try:
            snapshot = _decode(raw, now, request.source)
        except ReportRejectedError as e:
            rejections.append(RejectedReport(index=index, raw=raw, reason=e.reason.value))
            continue
        snapshots.append(_snapshot_response(snapshot, now))

    logger.info(
        "metar_decode_batch",
        total=len(request.reports),
        decoded=len(snapshots),
        rejected=len(rejections),
    )
    return BatchDecodeResponse(
        total=len(request.reports),
        decoded=len(snapshots),
        rejected=len(rejections),
        snapshots=snapshots,
        rejections=rejections,
    )
