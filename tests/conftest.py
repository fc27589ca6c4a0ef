# tests/conftest.py
"""
Pytest configuration and fixtures.

Decoder tests are pure and need nothing but report strings. API tests use
FastAPI's TestClient against the in-process app.
"""

from datetime import datetime, timezone

import pytest

KSFO_REPORT = "METAR KSFO 010953Z 28010KT 10SM FEW020 18/12 A3012 RMK AO2"
KJFK_SPECI = (
    "SPECI KJFK 011251Z 04012G20KT 1/2SM R04R/2000V3000FT +RA BR OVC004 "
    "08/07 A2985 RMK AO2 P0012"
)
EGLL_REPORT = "METAR EGLL 011250Z 24015KT 200V280 9999 -RA BKN008 OVC015 12/11 Q1002"


@pytest.fixture
def ksfo_report() -> str:
    return KSFO_REPORT


@pytest.fixture
def kjfk_speci() -> str:
    return KJFK_SPECI


@pytest.fixture
def egll_report() -> str:
    return EGLL_REPORT


@pytest.fixture
def issued_at() -> datetime:
    """Absolute issue time matching the KSFO report's 010953Z."""
    return datetime(2024, 3, 1, 9, 53, tzinfo=timezone.utc)


@pytest.fixture
def client():
    """TestClient with app lifespan running."""
    from fastapi.testclient import TestClient
    from metarwx.main import app

    with TestClient(app) as test_client:
        yield test_client
