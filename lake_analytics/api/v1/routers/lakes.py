"""
API router for lake endpoints.
"""
import logging
from fastapi import APIRouter, HTTPException, Path, Request
from typing import Annotated

from lake_analytics.api.dependencies import LakeServiceDep
from lake_analytics.api.rate_limit import LAKE_ENDPOINT_LIMIT, limiter
from lake_analytics.api.v1.models.responses import (
    ErrorResponse,
    TemporalDataResponse,
    WaterQualityResponse,
)
from lake_analytics.infrastructure.bhuvan_client import DataSourceError

logger = logging.getLogger(__name__)


router = APIRouter(
    prefix="/lakes",
    tags=["lakes"],
)

LakeIdPath = Annotated[str, Path(description="Lake identifier, e.g. 'hussain-sagar'")]


def _not_found(message: str, lake_id: str) -> HTTPException:
    return HTTPException(
        status_code=404,
        detail=ErrorResponse(error=message, lake_id=lake_id).model_dump(by_alias=True),
    )


@router.get(
    "/{lake_id}/temporal-data",
    response_model=TemporalDataResponse,
    summary="Get surface-area time series and statistics",
    description="""
    Aggregate the satellite-derived water surface area of a lake.

    This endpoint:
    1. Resolves the lake to its Bhuvan WBIS water body
    2. Drops non-positive-area records and sorts the rest by date
    3. Rolls observations up by month and by year
    4. Computes area range, first-to-last-year trend and seasonal means
    5. Lists the yearly boundary layers the client can fetch
    """,
    responses={
        404: {"description": "Lake has no surface-area data source"},
        429: {"description": "Rate limit exceeded"},
        500: {"description": "Internal server error"},
        502: {"description": "Data source unavailable"},
    }
)
@limiter.limit(LAKE_ENDPOINT_LIMIT)
async def get_temporal_data(
    request: Request,
    lake_id: LakeIdPath,
    lake_service: LakeServiceDep,
):
    """
    Get the surface-area report of a lake.

    Raises:
        HTTPException: 404 if the lake is not mapped, 500 on unexpected failure
        DataSourceError: Propagated to the error middleware (502)
    """
    try:
        # Delegate to service layer (no business logic here)
        report = await lake_service.get_temporal_data(lake_id)
    except DataSourceError:
        # Mapped to 502 by ErrorHandlerMiddleware
        raise
    except Exception as e:
        logger.exception(f"Failed to build temporal data for {lake_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch temporal data")

    if report is None:
        raise _not_found("No temporal data found for this lake", lake_id)

    return report


@router.get(
    "/{lake_id}/water-quality",
    response_model=WaterQualityResponse,
    summary="Get water-quality readings, trends and overall verdict",
    description="""
    Analyze the laboratory water-quality history of a lake.

    This endpoint:
    1. Loads every reading of the lake, ordered by sampling date
    2. Classifies the trend of pH, DO, BOD, COD, turbidity, temperature
       and total coliform, according to whether a rise is good or bad
    3. Scores the latest reading against ideal bounds (Good/Moderate/Poor)
    """,
    responses={
        404: {"description": "No water-quality readings for this lake"},
        429: {"description": "Rate limit exceeded"},
        500: {"description": "Internal server error"},
        502: {"description": "Data source unavailable"},
    }
)
@limiter.limit(LAKE_ENDPOINT_LIMIT)
async def get_water_quality(
    request: Request,
    lake_id: LakeIdPath,
    lake_service: LakeServiceDep,
):
    """
    Get the water-quality report of a lake.

    Raises:
        HTTPException: 404 if the lake has no readings, 500 on unexpected failure
    """
    try:
        report = await lake_service.get_water_quality(lake_id)
    except DataSourceError:
        raise
    except Exception as e:
        logger.exception(f"Failed to build water quality report for {lake_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch water quality data")

    if report is None:
        raise _not_found("No water quality data found for this lake", lake_id)

    return report
