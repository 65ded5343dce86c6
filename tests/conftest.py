"""
Shared pytest fixtures for all tests.

This module provides common fixtures including:
- Raw surface-area records
- Water-quality readings
- A lake registry
- Mock loaders and service
- FastAPI test client
"""
import pytest
from typing import Optional
from unittest.mock import AsyncMock, Mock
from fastapi.testclient import TestClient

from lake_analytics.main import app
from lake_analytics.domain.models import (
    RawAreaRecord,
    WaterQualityParameter,
    WaterQualityReading,
)
from lake_analytics.infrastructure.bhuvan_client import BhuvanLakeData, BhuvanWBISClient
from lake_analytics.infrastructure.lake_registry import LakeRegistry
from lake_analytics.infrastructure.water_quality_loader import WaterQualityLoader
from lake_analytics.services.application.lake_service import LakeService


# ============================================================
# Builders
# ============================================================

def make_record(timestamp: str, area: Optional[float], sensor: str = "S2") -> RawAreaRecord:
    """Build a raw Bhuvan record using the published field names."""
    return RawAreaRecord.model_validate({
        "st": timestamp,
        "a": area,
        "s": sensor,
        "clf": 0.05,
        "c": 0.9,
    })


def make_reading(date: str, lake_name: str = "Hussain Sagar", **parameters) -> WaterQualityReading:
    """Build a reading; keyword names are parameter keys such as do=5.0 or pH=7.1."""
    return WaterQualityReading(
        date=date,
        lake_name=lake_name,
        station_name="Test Station",
        station_code="TS-1",
        parameters={WaterQualityParameter(key): value for key, value in parameters.items()},
    )


# ============================================================
# Sample Data Fixtures
# ============================================================

@pytest.fixture
def sample_records() -> list[RawAreaRecord]:
    """Two years of records, out of order, with some no-water artifacts."""
    return [
        make_record("2020-07-14", 120.0),
        make_record("2019-01-05", 100.0),
        make_record("2019-01-20", 110.0),
        make_record("2019-04-02", 0.0),  # No water detected
        make_record("2019-07-11", 90.0),
        make_record("2020-01-08", -3.0),  # Sensor noise
        make_record("2020-12-30", 140.0),
        make_record("2019-11-25", None),
    ]


@pytest.fixture
def sample_readings() -> list[WaterQualityReading]:
    """Chronological readings for one lake."""
    return [
        make_reading("January 2018", pH=6.0, do=5.0, bod=2.0, cod=8.0, turbidity=4.0,
                     temperature=24.0, totalColiform=40.0),
        make_reading("June 2018", pH=7.0, do=6.0, bod=3.0, cod=9.0, turbidity=None,
                     temperature=26.0),
        make_reading("December 2018", pH=7.4, do=7.0, bod=4.0, cod=8.2, turbidity=4.1,
                     temperature=28.0, totalColiform=30.0),
    ]


@pytest.fixture
def registry() -> LakeRegistry:
    return LakeRegistry()


# ============================================================
# Mock Fixtures
# ============================================================

@pytest.fixture
def mock_bhuvan_client(sample_records):
    """Mock surface-area loader returning the sample records."""
    mock_client = AsyncMock(spec=BhuvanWBISClient)
    mock_client.load_lake.return_value = BhuvanLakeData(
        bhuvan_id="1007878045612624311",
        lake_name="Hussain Sagar",
        records=sample_records,
    )
    return mock_client


@pytest.fixture
def mock_water_quality_loader(sample_readings):
    """Mock CSV loader with readings for hussain-sagar only."""
    mock_loader = Mock(spec=WaterQualityLoader)
    mock_loader.load_lake_readings.side_effect = (
        lambda lake_id: sample_readings if lake_id == "hussain-sagar" else []
    )
    return mock_loader


@pytest.fixture
def lake_service(registry, mock_bhuvan_client, mock_water_quality_loader) -> LakeService:
    return LakeService(
        registry=registry,
        bhuvan_client=mock_bhuvan_client,
        water_quality_loader=mock_water_quality_loader,
    )


# ============================================================
# FastAPI Test Client Fixtures
# ============================================================

@pytest.fixture
def test_client() -> TestClient:
    """Create a synchronous test client for FastAPI."""
    return TestClient(app)
