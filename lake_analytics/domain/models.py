"""
Domain models for lake surface-area and water-quality data.

These models represent the core domain entities and should be independent
of any infrastructure concerns (file layout, HTTP clients, CSV columns, etc.).
Field names are snake_case in Python and camelCase on the wire.
"""
from datetime import date
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialised with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenCamelModel(CamelModel):
    """Immutable camelCase model."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# ============================================================
# Enumerations
# ============================================================

class TrendDirection(str, Enum):
    """Directional classification of a parameter's change over time."""
    IMPROVING = "improving"
    DEGRADING = "degrading"
    STABLE = "stable"
    INCREASING = "increasing"
    DECREASING = "decreasing"


class QualityVerdict(str, Enum):
    """Coarse categorical judgment of a single water-quality reading."""
    GOOD = "Good"
    MODERATE = "Moderate"
    POOR = "Poor"
    UNKNOWN = "Unknown"


class Season(str, Enum):
    """Calendar-month seasonal buckets."""
    MONSOON = "monsoon"
    WINTER = "winter"
    SUMMER = "summer"


class WaterQualityParameter(str, Enum):
    """Closed set of parameter keys a water-quality reading may carry."""

    # Physical
    TEMPERATURE = "temperature"
    TURBIDITY = "turbidity"
    CONDUCTIVITY = "conductivity"
    TDS = "tds"
    TSS = "tss"

    # Chemical
    PH = "pH"
    DISSOLVED_OXYGEN = "do"
    BOD = "bod"
    COD = "cod"

    # Nutrients
    NITRATE_N = "nitrateN"
    NITRITE_N = "nitriteN"
    AMMONIA_N = "ammoniaN"
    PHOSPHATE = "phosphate"
    TKN = "tkn"

    # Major ions
    CHLORIDE = "chloride"
    SULPHATE = "sulphate"
    SODIUM = "sodium"
    CALCIUM = "calcium"
    MAGNESIUM = "magnesium"
    POTASSIUM = "potassium"
    FLUORIDE = "fluoride"
    BORON = "boron"

    # Hardness and alkalinity
    HARDNESS = "hardness"
    TOTAL_ALKALINITY = "totalAlkalinity"
    PHENOLPHTHALEIN_ALKALINITY = "phenolphthaleinAlkalinity"

    # Microbiological
    FECAL_COLIFORM = "fecalColiform"
    TOTAL_COLIFORM = "totalColiform"
    FECAL_STREPTOCOCCI = "fecalStreptococci"

    # Metals
    ARSENIC = "arsenic"
    CADMIUM = "cadmium"
    COPPER = "copper"
    LEAD = "lead"
    CHROMIUM = "chromium"
    NICKEL = "nickel"
    ZINC = "zinc"
    IRON = "iron"

    # Indices
    SAPROBITY_INDEX = "saprobityIndex"
    DIVERSITY_INDEX = "diversityIndex"
    SODIUM_PERCENTAGE = "sodiumPercentage"
    SAR = "sar"
    PR_RATIO = "prRatio"


# ============================================================
# Surface-area entities
# ============================================================

class RawAreaRecord(BaseModel):
    """Single entry of a Bhuvan WBIS daily water-surface-area series."""
    timestamp: str = Field(alias="st", description="Acquisition date as published")
    area: Optional[float] = Field(default=None, alias="a", description="Water surface area in hectares")
    sensor: Optional[str] = Field(default=None, alias="s")
    cloud_cover: Optional[float] = Field(default=None, alias="clf")
    confidence: Optional[float] = Field(default=None, alias="c")

    model_config = ConfigDict(populate_by_name=True)


class Observation(FrozenCamelModel):
    """A single dated surface-area measurement for a lake."""
    date: date
    area: float = Field(gt=0, description="Water surface area in hectares")
    sensor: Optional[str] = None
    cloud_cover: Optional[float] = None
    confidence: Optional[float] = None


class MonthlyAggregate(FrozenCamelModel):
    """Rollup of all observations within one calendar month."""
    year: int
    month: int = Field(ge=1, le=12)
    average_area: float
    min_area: float
    max_area: float
    data_points: int


class YearlyAggregate(FrozenCamelModel):
    """Rollup of all observations within one calendar year."""
    year: int
    average_area: float
    min_area: float
    max_area: float
    data_points: int


class DateRange(FrozenCamelModel):
    start: date
    end: date


class AreaRange(FrozenCamelModel):
    min: float
    max: float
    average: float


class SeasonalPatterns(FrozenCamelModel):
    """
    Seasonal mean areas.

    An empty season reports an average of 0; the matching data-point count
    tells it apart from a real measurement.
    """
    monsoon_average: float
    winter_average: float
    summer_average: float
    monsoon_data_points: int = 0
    winter_data_points: int = 0
    summer_data_points: int = 0


class TemporalStatistics(FrozenCamelModel):
    """Summary over every observation recorded for one lake."""
    total_data_points: int
    date_range: DateRange
    area_range: AreaRange
    trend: TrendDirection
    percentage_change: Optional[float] = None
    seasonal_patterns: SeasonalPatterns


class TemporalResult(CamelModel):
    """Output of the temporal aggregation pipeline for one lake."""
    lake_name: str
    source: str = "ISRO Bhuvan WBIS"
    daily_data: List[Observation] = Field(default_factory=list)
    monthly_data: List[MonthlyAggregate] = Field(default_factory=list)
    yearly_data: List[YearlyAggregate] = Field(default_factory=list)
    statistics: Optional[TemporalStatistics] = None


# ============================================================
# Water-quality entities
# ============================================================

class WaterQualityReading(CamelModel):
    """A laboratory sample for one station, with any subset of parameters measured."""
    date: str = Field(default="", description="Sampling date label as published, e.g. 'October 2018'")
    lake_name: str
    station_name: Optional[str] = None
    station_code: Optional[str] = None
    parameters: Dict[WaterQualityParameter, Optional[float]] = Field(default_factory=dict)

    def value_of(self, parameter: WaterQualityParameter) -> Optional[float]:
        """Return the measured value, or None when the parameter was not measured."""
        return self.parameters.get(parameter)


class ParameterTrend(CamelModel):
    """Polarity-aware trend of one tracked parameter across a lake's history."""
    parameter: str
    unit: str
    trend: TrendDirection
    change_percentage: Optional[float] = Field(
        default=None,
        description="Percent change from first to last value; None when the first value is 0"
    )
    latest_value: float
    average_value: float


# ============================================================
# Per-lake reports
# ============================================================

class HistoricalBoundary(CamelModel):
    """Pointer to a yearly lake boundary layer fetched by the client."""
    year: int
    url: str
    note: str


class YearRange(CamelModel):
    start: Optional[int] = None
    end: Optional[int] = None


class DataAvailability(CamelModel):
    has_daily_data: bool
    has_historical_boundaries: bool
    year_range: YearRange


class LakeTemporalReport(CamelModel):
    """Surface-area report of one lake."""
    lake_id: str
    temporal_data: Optional[TemporalResult] = None
    historical_boundaries: List[HistoricalBoundary] = Field(default_factory=list)
    data_available: DataAvailability


class LakeWaterQualityReport(CamelModel):
    """Water-quality report of one lake."""
    lake_id: str
    lake_name: str
    readings: List[WaterQualityReading]
    latest_reading: WaterQualityReading
    overall_quality: QualityVerdict
    trends: List[ParameterTrend]
