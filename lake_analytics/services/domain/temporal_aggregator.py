"""
Domain service: Temporal aggregation of lake surface-area observations.

This module turns an irregular daily series of satellite-derived
water-surface-area records into:
- A cleaned, date-sorted observation series
- Monthly and yearly min/max/mean rollups
- Overall statistics (area range, first-to-last-year trend, seasonal means)

All functions are pure: the same input always yields the same output.
"""
import logging
import math
from collections import defaultdict
from typing import Iterable, Optional

from lake_analytics.domain.models import (
    AreaRange,
    DateRange,
    MonthlyAggregate,
    Observation,
    RawAreaRecord,
    Season,
    SeasonalPatterns,
    TemporalResult,
    TemporalStatistics,
    TrendDirection,
    YearlyAggregate,
)
from lake_analytics.utils.date_parsing import parse_observation_date
from lake_analytics.utils.stats_helpers import (
    mean_or_zero,
    percentage_change,
    summarize_values,
)

logger = logging.getLogger(__name__)

AREA_TREND_THRESHOLD_PCT = 10.0
"""Year-over-year change (percent) beyond which the area trend is not stable"""

SEASON_MONTHS: dict[Season, frozenset[int]] = {
    Season.MONSOON: frozenset({6, 7, 8, 9, 10}),
    Season.WINTER: frozenset({11, 12, 1, 2}),
    Season.SUMMER: frozenset({3, 4, 5}),
}


def season_of(month: int) -> Season:
    """Return the seasonal bucket a calendar month belongs to."""
    for season, months in SEASON_MONTHS.items():
        if month in months:
            return season
    raise ValueError(f"Invalid month: {month}")


def build_observations(records: Iterable[RawAreaRecord]) -> list[Observation]:
    """
    Convert raw records into date-sorted observations.

    Records with a missing, NaN or non-positive area are dropped as
    no-water-detected artifacts; records with an unparseable timestamp
    are dropped individually.

    Args:
        records: Raw Bhuvan records for one lake

    Returns:
        Observations sorted ascending by date (stable for equal dates)
    """
    observations = []
    skipped_area = 0
    skipped_date = 0

    for record in records:
        if record.area is None or not math.isfinite(record.area) or record.area <= 0:
            skipped_area += 1
            continue

        observed_on = parse_observation_date(record.timestamp)
        if observed_on is None:
            skipped_date += 1
            logger.warning(f"Skipping record with unparseable timestamp '{record.timestamp}'")
            continue

        observations.append(Observation(
            date=observed_on,
            area=record.area,
            sensor=record.sensor,
            cloud_cover=record.cloud_cover,
            confidence=record.confidence,
        ))

    logger.debug(f"Dropped {skipped_area} non-positive-area and {skipped_date} undated records")

    observations.sort(key=lambda o: o.date)
    return observations


def calculate_monthly_aggregates(observations: list[Observation]) -> list[MonthlyAggregate]:
    """
    Roll observations up by calendar month.

    Args:
        observations: Observation series

    Returns:
        One aggregate per (year, month), sorted ascending by year*12+month
    """
    groups: dict[tuple[int, int], list[float]] = defaultdict(list)
    for observation in observations:
        groups[(observation.date.year, observation.date.month)].append(observation.area)

    monthly = []
    for (year, month), areas in groups.items():
        summary = summarize_values(areas)
        monthly.append(MonthlyAggregate(
            year=year,
            month=month,
            average_area=summary.mean,
            min_area=summary.minimum,
            max_area=summary.maximum,
            data_points=summary.count,
        ))

    monthly.sort(key=lambda m: m.year * 12 + m.month)
    return monthly


def calculate_yearly_aggregates(observations: list[Observation]) -> list[YearlyAggregate]:
    """
    Roll observations up by calendar year.

    Args:
        observations: Observation series

    Returns:
        One aggregate per year, sorted ascending
    """
    groups: dict[int, list[float]] = defaultdict(list)
    for observation in observations:
        groups[observation.date.year].append(observation.area)

    yearly = []
    for year, areas in groups.items():
        summary = summarize_values(areas)
        yearly.append(YearlyAggregate(
            year=year,
            average_area=summary.mean,
            min_area=summary.minimum,
            max_area=summary.maximum,
            data_points=summary.count,
        ))

    yearly.sort(key=lambda y: y.year)
    return yearly


def classify_area_trend(change: Optional[float]) -> TrendDirection:
    """Classify a first-to-last-year percent change."""
    if change is None:
        return TrendDirection.STABLE
    if change > AREA_TREND_THRESHOLD_PCT:
        return TrendDirection.INCREASING
    if change < -AREA_TREND_THRESHOLD_PCT:
        return TrendDirection.DECREASING
    return TrendDirection.STABLE


def calculate_seasonal_patterns(observations: list[Observation]) -> SeasonalPatterns:
    """
    Unweighted mean area per season over the raw observations.

    Args:
        observations: Observation series

    Returns:
        SeasonalPatterns; empty seasons report 0 with a count of 0
    """
    buckets: dict[Season, list[float]] = {season: [] for season in Season}
    for observation in observations:
        buckets[season_of(observation.date.month)].append(observation.area)

    return SeasonalPatterns(
        monsoon_average=mean_or_zero(buckets[Season.MONSOON]),
        winter_average=mean_or_zero(buckets[Season.WINTER]),
        summer_average=mean_or_zero(buckets[Season.SUMMER]),
        monsoon_data_points=len(buckets[Season.MONSOON]),
        winter_data_points=len(buckets[Season.WINTER]),
        summer_data_points=len(buckets[Season.SUMMER]),
    )


def calculate_statistics(
    observations: list[Observation],
    yearly: list[YearlyAggregate],
) -> Optional[TemporalStatistics]:
    """
    Summary statistics over all observations of one lake.

    Args:
        observations: Date-sorted observation series
        yearly: Yearly aggregates of the same series

    Returns:
        TemporalStatistics, or None when there are no observations
    """
    if not observations:
        return None

    summary = summarize_values([o.area for o in observations])

    change = None
    if yearly:
        change = percentage_change(yearly[0].average_area, yearly[-1].average_area)

    return TemporalStatistics(
        total_data_points=summary.count,
        date_range=DateRange(start=observations[0].date, end=observations[-1].date),
        area_range=AreaRange(min=summary.minimum, max=summary.maximum, average=summary.mean),
        trend=classify_area_trend(change),
        percentage_change=change,
        seasonal_patterns=calculate_seasonal_patterns(observations),
    )


def aggregate_temporal(records: Iterable[RawAreaRecord], lake_name: str) -> TemporalResult:
    """
    Run the full temporal pipeline for one lake.

    Args:
        records: Raw surface-area records, in any order
        lake_name: Display name of the lake

    Returns:
        TemporalResult with daily, monthly and yearly series; statistics
        is None when no record qualifies as an observation
    """
    observations = build_observations(records)
    monthly = calculate_monthly_aggregates(observations)
    yearly = calculate_yearly_aggregates(observations)
    statistics = calculate_statistics(observations, yearly)

    logger.info(
        f"Aggregated {len(observations)} observations for {lake_name}: "
        f"{len(monthly)} months, {len(yearly)} years"
    )

    return TemporalResult(
        lake_name=lake_name,
        daily_data=observations,
        monthly_data=monthly,
        yearly_data=yearly,
        statistics=statistics,
    )
