"""
Dependency injection for FastAPI.
"""
from typing import Annotated
from fastapi import Depends

from lake_analytics.infrastructure.bhuvan_client import (
    BhuvanWBISClient,
    get_bhuvan_client,
)
from lake_analytics.infrastructure.lake_registry import LakeRegistry, get_lake_registry
from lake_analytics.infrastructure.water_quality_loader import (
    WaterQualityLoader,
    get_water_quality_loader,
)
from lake_analytics.services.application.lake_service import LakeService


def get_lake_service(
    registry: Annotated[LakeRegistry, Depends(get_lake_registry)],
    bhuvan_client: Annotated[BhuvanWBISClient, Depends(get_bhuvan_client)],
    water_quality_loader: Annotated[WaterQualityLoader, Depends(get_water_quality_loader)],
) -> LakeService:
    """
    Dependency factory for LakeService.

    Args:
        registry: Lake identifier registry (injected)
        bhuvan_client: Surface-area data loader (injected)
        water_quality_loader: Water-quality CSV loader (injected)

    Returns:
        LakeService instance
    """
    return LakeService(
        registry=registry,
        bhuvan_client=bhuvan_client,
        water_quality_loader=water_quality_loader,
    )


# Type aliases for cleaner route signatures
LakeServiceDep = Annotated[LakeService, Depends(get_lake_service)]
