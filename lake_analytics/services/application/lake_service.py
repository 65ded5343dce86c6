"""
Application service: Orchestration layer for lake analytics.
"""
import logging
from typing import List, Optional

from starlette.concurrency import run_in_threadpool

from lake_analytics.config import settings
from lake_analytics.domain.models import (
    DataAvailability,
    HistoricalBoundary,
    LakeTemporalReport,
    LakeWaterQualityReport,
    YearRange,
)
from lake_analytics.infrastructure.bhuvan_client import BhuvanWBISClient
from lake_analytics.infrastructure.lake_registry import LakeRegistry
from lake_analytics.infrastructure.water_quality_loader import WaterQualityLoader
from lake_analytics.services.domain.temporal_aggregator import aggregate_temporal
from lake_analytics.services.domain.water_quality_analyzer import (
    compute_water_quality_trends,
    determine_overall_quality,
)

logger = logging.getLogger(__name__)


def historical_boundaries() -> List[HistoricalBoundary]:
    """
    Yearly lake boundary layers available to the client.

    Returns:
        One entry per published year, oldest first
    """
    return [
        HistoricalBoundary(
            year=year,
            url=settings.boundary_url_template.format(year=year),
            note="Fetch this URL from the client to get boundary data",
        )
        for year in range(settings.boundary_start_year, settings.boundary_end_year + 1)
    ]


class LakeService:
    """
    Application service for lake analytics.

    Resolves lake identifiers, loads source data and hands it to the pure
    domain pipelines. No analytics happen here, only coordination between
    infrastructure and domain layers.
    """

    def __init__(
        self,
        registry: LakeRegistry,
        bhuvan_client: BhuvanWBISClient,
        water_quality_loader: WaterQualityLoader,
    ):
        """
        Initialize the service with dependencies.

        Args:
            registry: Lake identifier registry
            bhuvan_client: Surface-area data loader
            water_quality_loader: Water-quality CSV loader
        """
        self.registry = registry
        self.bhuvan_client = bhuvan_client
        self.water_quality_loader = water_quality_loader

    async def get_temporal_data(self, lake_id: str) -> Optional[LakeTemporalReport]:
        """
        Build the surface-area report of a lake.

        Args:
            lake_id: Public lake identifier

        Returns:
            LakeTemporalReport, or None if the lake has no surface-area
            source. A mapped lake whose files cannot be read yields a
            report with temporal_data set to None.
        """
        bhuvan_id = self.registry.bhuvan_id_for(lake_id)
        if bhuvan_id is None:
            logger.info(f"No Bhuvan ID mapping found for lake: {lake_id}")
            return None

        temporal_data = None
        lake_data = await self.bhuvan_client.load_lake(bhuvan_id)
        if lake_data is not None:
            temporal_data = aggregate_temporal(lake_data.records, lake_data.lake_name or lake_id)

        boundaries = historical_boundaries()
        statistics = temporal_data.statistics if temporal_data else None

        if statistics is not None:
            year_range = YearRange(
                start=statistics.date_range.start.year,
                end=statistics.date_range.end.year,
            )
        elif boundaries:
            year_range = YearRange(start=boundaries[0].year, end=boundaries[-1].year)
        else:
            year_range = YearRange()

        return LakeTemporalReport(
            lake_id=lake_id,
            temporal_data=temporal_data,
            historical_boundaries=boundaries,
            data_available=DataAvailability(
                has_daily_data=bool(temporal_data and temporal_data.daily_data),
                has_historical_boundaries=bool(boundaries),
                year_range=year_range,
            ),
        )

    async def get_water_quality(self, lake_id: str) -> Optional[LakeWaterQualityReport]:
        """
        Build the water-quality report of a lake.

        Args:
            lake_id: Public lake identifier

        Returns:
            LakeWaterQualityReport, or None if the lake has no readings
        """
        # pandas parsing is blocking
        readings = await run_in_threadpool(self.water_quality_loader.load_lake_readings, lake_id)
        if not readings:
            logger.info(f"No water quality data found for lake: {lake_id}")
            return None

        latest = readings[-1]
        return LakeWaterQualityReport(
            lake_id=lake_id,
            lake_name=latest.lake_name,
            readings=readings,
            latest_reading=latest,
            overall_quality=determine_overall_quality(latest),
            trends=compute_water_quality_trends(readings),
        )
