# tests/test_snapshot.py
"""
Test the domain mapper and snapshot helpers.
"""

import json
from datetime import datetime, timedelta, timezone

import pytest

from metarwx.decoder import (
    DEFAULT_TTL_SECONDS,
    FlightCategory,
    Freshness,
    IssuanceTime,
    parse,
    to_snapshot,
)
from metarwx.decoder.snapshot import flight_category_for


def snapshot_of(raw, issued_at=None, **kwargs):
    issued_at = issued_at or datetime(2024, 3, 1, 9, 53, tzinfo=timezone.utc)
    return to_snapshot(parse(raw), issued_at=issued_at, source="unit", **kwargs)


class TestToSnapshot:
    """Tests for copying a ParsedReport into a snapshot."""

    def test_fields_copied(self, ksfo_report, issued_at):
        parsed = parse(ksfo_report)
        snapshot = to_snapshot(parsed, issued_at=issued_at, source="AVWX")

        assert snapshot.station_id == "KSFO"
        assert snapshot.metar_raw == ksfo_report
        assert snapshot.source == "AVWX"
        assert snapshot.issued_at == issued_at
        assert snapshot.wind is parsed.wind
        assert snapshot.visibility is parsed.visibility
        assert snapshot.clouds == parsed.clouds
        assert snapshot.temperature is parsed.temperature
        assert snapshot.pressure is parsed.pressure
        assert snapshot.remarks == "AO2"

    def test_default_ttl_one_hour(self, ksfo_report, issued_at):
        snapshot = to_snapshot(parse(ksfo_report), issued_at, "AVWX")
        assert DEFAULT_TTL_SECONDS == 3600
        assert snapshot.ttl_seconds == 3600
        assert snapshot.expires_at == issued_at + timedelta(hours=1)

    def test_naive_issue_time_taken_as_utc(self, ksfo_report):
        snapshot = to_snapshot(parse(ksfo_report), datetime(2024, 3, 1, 9, 53), "AVWX")
        assert snapshot.issued_at.tzinfo == timezone.utc

    def test_minimal_report(self):
        snapshot = snapshot_of("METAR KSFO")
        assert snapshot.wind is None
        assert snapshot.clouds == ()
        assert snapshot.ceiling_ft is None
        assert snapshot.flight_category is None


class TestFreshness:
    """Tests for validity and age bands."""

    def test_valid_inside_ttl(self, ksfo_report, issued_at):
        snapshot = snapshot_of(ksfo_report, issued_at)
        assert snapshot.is_valid(issued_at + timedelta(minutes=59))
        assert not snapshot.is_valid(issued_at + timedelta(minutes=60))

    def test_age_minutes(self, ksfo_report, issued_at):
        snapshot = snapshot_of(ksfo_report, issued_at)
        assert snapshot.age_minutes(issued_at + timedelta(minutes=30)) == pytest.approx(30.0)

    def test_bands(self, ksfo_report, issued_at):
        snapshot = snapshot_of(ksfo_report, issued_at)
        assert snapshot.freshness(issued_at + timedelta(minutes=1)) == Freshness.FRESH
        assert snapshot.freshness(issued_at + timedelta(minutes=61)) == Freshness.STALE
        assert snapshot.freshness(issued_at + timedelta(hours=7)) == Freshness.EXPIRED

    def test_ttl_boundary(self, ksfo_report, issued_at):
        """At exactly the TTL: no longer valid, still in the fresh band."""
        snapshot = snapshot_of(ksfo_report, issued_at)
        boundary = issued_at + timedelta(seconds=snapshot.ttl_seconds)

        assert boundary == snapshot.expires_at
        assert not snapshot.is_valid(boundary)
        assert snapshot.freshness(boundary) == Freshness.FRESH

    def test_custom_ttl(self, ksfo_report, issued_at):
        snapshot = snapshot_of(ksfo_report, issued_at, ttl_seconds=600)
        assert snapshot.freshness(issued_at + timedelta(minutes=11)) == Freshness.STALE


class TestCeilingAndCategory:
    """Tests for derived ceiling and flight category."""

    def test_lowest_broken_or_overcast(self):
        snapshot = snapshot_of("METAR KSFO 010953Z 28010KT 10SM FEW020 SCT030 BKN045 OVC100")
        assert snapshot.ceiling_ft == 4500
        assert snapshot.flight_category == FlightCategory.VFR

    def test_vertical_visibility_is_ceiling(self):
        snapshot = snapshot_of("METAR KSFO 010953Z 00000KT M1/4SM FG VV002")
        assert snapshot.ceiling_ft == 200
        assert snapshot.flight_category == FlightCategory.LIFR

    def test_few_and_scattered_are_not_ceilings(self, ksfo_report):
        snapshot = snapshot_of(ksfo_report)
        assert snapshot.ceiling_ft is None
        assert snapshot.flight_category == FlightCategory.VFR

    @pytest.mark.parametrize("raw, category", [
        ("METAR KSFO 010953Z 28010KT 10SM BKN025", FlightCategory.MVFR),
        ("METAR KSFO 010953Z 28010KT 4SM CLR", FlightCategory.MVFR),
        ("METAR KSFO 010953Z 28010KT 2SM OVC050", FlightCategory.IFR),
        ("METAR KSFO 010953Z 28010KT 10SM OVC008", FlightCategory.IFR),
        ("METAR KSFO 010953Z 28010KT 1/2SM OVC050", FlightCategory.LIFR),
        ("METAR EGLL 011250Z 24015KT 9999 NSC", FlightCategory.VFR),
    ])
    def test_category(self, raw, category):
        assert snapshot_of(raw).flight_category == category

    def test_category_thresholds(self):
        assert flight_category_for(3000, None) == FlightCategory.MVFR
        assert flight_category_for(3100, None) == FlightCategory.VFR
        assert flight_category_for(None, 5.0) == FlightCategory.MVFR
        assert flight_category_for(999, 10.0) == FlightCategory.IFR
        assert flight_category_for(None, None) == FlightCategory.VFR


class TestToDict:
    def test_json_ready(self, kjfk_speci, issued_at):
        data = snapshot_of(kjfk_speci, issued_at).to_dict()

        json.dumps(data)
        assert data["station_id"] == "KJFK"
        assert data["report_type"] == "SPECI"
        assert data["issued_at"] == issued_at.isoformat()
        assert data["wind"]["gust_kt"] == 20
        assert data["weather"][0]["code"] == "+RA"
        assert data["weather"][0]["intensity"] == "heavy"
        assert data["weather"][0]["precipitation"] == ["rain"]
        assert data["clouds"][0]["coverage"] == "overcast"
        assert data["runway_visual_range"][0]["runway"] == "04R"
        assert data["ceiling_ft"] == 400
        assert data["flight_category"] == "LIFR"


class TestIssuanceTimeResolve:
    """Anchoring day/hour/minute to an absolute timestamp is the caller's job."""

    def test_resolve_against_reference_month(self):
        reference = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)
        assert IssuanceTime(1, 9, 53).resolve(reference) == datetime(
            2024, 3, 1, 9, 53, tzinfo=timezone.utc
        )

    def test_invalid_values_raise_on_resolve(self):
        reference = datetime(2024, 3, 15, tzinfo=timezone.utc)
        with pytest.raises(ValueError):
            IssuanceTime(31, 24, 61).resolve(reference)

    def test_later_day_resolves_to_previous_month(self):
        """A report from the 31st fetched just after midnight on the 1st."""
        reference = datetime(2024, 4, 1, 0, 5, tzinfo=timezone.utc)
        assert IssuanceTime(31, 23, 55).resolve(reference) == datetime(
            2024, 3, 31, 23, 55, tzinfo=timezone.utc
        )

    def test_never_resolves_after_reference(self):
        reference = datetime(2024, 3, 1, 0, 5, tzinfo=timezone.utc)
        resolved = IssuanceTime(29, 23, 55).resolve(reference)

        assert resolved == datetime(2024, 2, 29, 23, 55, tzinfo=timezone.utc)
        assert resolved <= reference

    def test_previous_month_wraps_year(self):
        reference = datetime(2024, 1, 1, 0, 10, tzinfo=timezone.utc)
        assert IssuanceTime(31, 23, 50).resolve(reference) == datetime(
            2023, 12, 31, 23, 50, tzinfo=timezone.utc
        )

    def test_day_missing_from_previous_month_raises(self):
        reference = datetime(2024, 5, 1, tzinfo=timezone.utc)
        with pytest.raises(ValueError):
            IssuanceTime(31, 12, 0).resolve(reference)
