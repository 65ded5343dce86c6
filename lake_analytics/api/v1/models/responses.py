"""
API response models using Pydantic.
"""
from pydantic import BaseModel, ConfigDict, Field

from lake_analytics.domain.models import LakeTemporalReport, LakeWaterQualityReport


class ErrorResponse(BaseModel):
    """Body of a 404 response for an unknown lake."""
    error: str = Field(description="Human-readable error message")
    lake_id: str = Field(alias="lakeId", description="Requested lake identifier")

    model_config = ConfigDict(populate_by_name=True)


class TemporalDataResponse(LakeTemporalReport):
    """Response model for the temporal-data endpoint."""

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "lakeId": "hussain-sagar",
            "temporalData": {
                "lakeName": "Hussain Sagar",
                "source": "ISRO Bhuvan WBIS",
                "dailyData": [
                    {"date": "2019-01-05", "area": 412.5, "sensor": "S2",
                     "cloudCover": 0.02, "confidence": 0.91},
                ],
                "monthlyData": [
                    {"year": 2019, "month": 1, "averageArea": 412.5,
                     "minArea": 412.5, "maxArea": 412.5, "dataPoints": 1},
                ],
                "yearlyData": [
                    {"year": 2019, "averageArea": 412.5,
                     "minArea": 412.5, "maxArea": 412.5, "dataPoints": 1},
                ],
                "statistics": {
                    "totalDataPoints": 1,
                    "dateRange": {"start": "2019-01-05", "end": "2019-01-05"},
                    "areaRange": {"min": 412.5, "max": 412.5, "average": 412.5},
                    "trend": "stable",
                    "percentageChange": 0.0,
                    "seasonalPatterns": {
                        "monsoonAverage": 0.0, "winterAverage": 412.5, "summerAverage": 0.0,
                        "monsoonDataPoints": 0, "winterDataPoints": 1, "summerDataPoints": 0,
                    },
                },
            },
            "historicalBoundaries": [
                {"year": 1984, "url": "/data/lakes/lakes_1984.geojson",
                 "note": "Fetch this URL from the client to get boundary data"},
            ],
            "dataAvailable": {
                "hasDailyData": True,
                "hasHistoricalBoundaries": True,
                "yearRange": {"start": 2019, "end": 2019},
            },
        }
    })


class WaterQualityResponse(LakeWaterQualityReport):
    """Response model for the water-quality endpoint."""

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "lakeId": "hussain-sagar",
            "lakeName": "Hussain Sagar",
            "readings": [],
            "latestReading": {
                "date": "October 2018",
                "lakeName": "Hussain Sagar",
                "stationName": "Hussain Sagar Lake, Hyderabad",
                "stationCode": "1234",
                "parameters": {"pH": 7.9, "do": 4.2, "bod": 12.0},
            },
            "overallQuality": "Moderate",
            "trends": [
                {"parameter": "Dissolved Oxygen", "unit": "mg/L", "trend": "degrading",
                 "changePercentage": -22.5, "latestValue": 4.2, "averageValue": 5.1},
            ],
        }
    })
