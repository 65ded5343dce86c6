"""
Domain service: Water-quality trend classification and quality scoring.

Provides:
- Per-parameter trend classification across a lake's reading history,
  driven by a polarity table (whether an increase is good, bad or neutral)
- A composite Good/Moderate/Poor verdict for a single reading, based on how
  many measured parameters fall inside their ideal bounds
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from lake_analytics.domain.models import (
    ParameterTrend,
    QualityVerdict,
    TrendDirection,
    WaterQualityParameter as P,
    WaterQualityReading,
)
from lake_analytics.utils.stats_helpers import (
    defined_values,
    is_defined,
    mean_or_zero,
    percentage_change,
)

logger = logging.getLogger(__name__)

TREND_THRESHOLD_PCT = 5.0
"""Percent change beyond which a parameter is no longer considered stable"""

GOOD_SCORE_RATIO = 0.80
MODERATE_SCORE_RATIO = 0.50


class Polarity(str, Enum):
    """How a change in a parameter's value should be read."""
    HIGHER_IS_BETTER = "higher_is_better"
    LOWER_IS_BETTER = "lower_is_better"
    TARGET_VALUE = "target_value"
    GENERIC = "generic"


@dataclass(frozen=True)
class TrackedParameter:
    """Trend policy for one tracked parameter."""
    parameter: P
    name: str
    unit: str
    polarity: Polarity
    target: Optional[float] = None
    """Ideal value, only used by TARGET_VALUE polarity"""


@dataclass(frozen=True)
class IdealBound:
    """Ideal range of a parameter for quality scoring."""
    parameter: P
    lower: Optional[float] = None
    upper: Optional[float] = None
    inclusive: bool = False

    def contains(self, value: float) -> bool:
        if not is_defined(value):
            return False
        if self.lower is not None:
            if value < self.lower or (not self.inclusive and value == self.lower):
                return False
        if self.upper is not None:
            if value > self.upper or (not self.inclusive and value == self.upper):
                return False
        return True


TRACKED_PARAMETERS: tuple[TrackedParameter, ...] = (
    TrackedParameter(P.PH, "pH Level", "", Polarity.TARGET_VALUE, target=7.5),
    TrackedParameter(P.DISSOLVED_OXYGEN, "Dissolved Oxygen", "mg/L", Polarity.HIGHER_IS_BETTER),
    TrackedParameter(P.BOD, "BOD", "mg/L", Polarity.LOWER_IS_BETTER),
    TrackedParameter(P.COD, "COD", "mg/L", Polarity.LOWER_IS_BETTER),
    TrackedParameter(P.TURBIDITY, "Turbidity", "NTU", Polarity.LOWER_IS_BETTER),
    TrackedParameter(P.TEMPERATURE, "Temperature", "°C", Polarity.GENERIC),
    TrackedParameter(P.TOTAL_COLIFORM, "Total Coliform", "MPN/100ml", Polarity.LOWER_IS_BETTER),
)

IDEAL_BOUNDS: tuple[IdealBound, ...] = (
    IdealBound(P.PH, lower=6.5, upper=8.5, inclusive=True),
    IdealBound(P.DISSOLVED_OXYGEN, lower=6.0),
    IdealBound(P.BOD, upper=3.0),
    IdealBound(P.COD, upper=10.0),
    IdealBound(P.TURBIDITY, upper=5.0),
    IdealBound(P.TOTAL_COLIFORM, upper=50.0),
)

UNSCORED_READING_VERDICT = QualityVerdict.POOR
"""Verdict for a reading with none of the scored parameters measured"""


def _directional_change(first: float, last: float) -> tuple[Optional[float], float]:
    """
    Percent change for classification purposes.

    Returns:
        (reported change, change used for classification); a zero baseline
        reports None and classifies as an unbounded move toward last
    """
    change = percentage_change(first, last, absolute_base=True)
    if change is not None:
        return change, change
    if last > first:
        return None, float("inf")
    if last < first:
        return None, float("-inf")
    return None, 0.0


def classify_trend(policy: TrackedParameter, first: float, last: float, change: float) -> TrendDirection:
    """
    Classify a parameter's change according to its polarity.

    Args:
        policy: Tracked-parameter policy
        first: First defined value
        last: Last defined value
        change: Percent change from first to last

    Returns:
        TrendDirection
    """
    if policy.polarity is Polarity.TARGET_VALUE:
        first_deviation = abs(first - policy.target)
        last_deviation = abs(last - policy.target)
        if last_deviation < first_deviation:
            return TrendDirection.IMPROVING
        if last_deviation > first_deviation:
            return TrendDirection.DEGRADING
        return TrendDirection.STABLE

    if change > TREND_THRESHOLD_PCT:
        rising = True
    elif change < -TREND_THRESHOLD_PCT:
        rising = False
    else:
        return TrendDirection.STABLE

    if policy.polarity is Polarity.HIGHER_IS_BETTER:
        return TrendDirection.IMPROVING if rising else TrendDirection.DEGRADING
    if policy.polarity is Polarity.LOWER_IS_BETTER:
        return TrendDirection.DEGRADING if rising else TrendDirection.IMPROVING
    return TrendDirection.INCREASING if rising else TrendDirection.DECREASING


def compute_water_quality_trends(readings: Sequence[WaterQualityReading]) -> list[ParameterTrend]:
    """
    Compute polarity-aware trends for every tracked parameter.

    Readings must already be in chronological order. A parameter with fewer
    than two defined values is left out entirely.

    Args:
        readings: One lake's reading history, oldest first

    Returns:
        List of ParameterTrend in tracked-parameter order; empty if fewer
        than two readings
    """
    if len(readings) < 2:
        return []

    trends = []
    for policy in TRACKED_PARAMETERS:
        values = defined_values(r.value_of(policy.parameter) for r in readings)

        if len(values) < 2:
            logger.debug(f"Skipping {policy.name}: {len(values)} defined value(s)")
            continue

        first, last = values[0], values[-1]
        reported_change, change = _directional_change(first, last)

        trends.append(ParameterTrend(
            parameter=policy.name,
            unit=policy.unit,
            trend=classify_trend(policy, first, last, change),
            change_percentage=reported_change,
            latest_value=last,
            average_value=mean_or_zero(values),
        ))

    logger.info(f"Computed {len(trends)} parameter trends from {len(readings)} readings")
    return trends


def score_reading(reading: WaterQualityReading) -> tuple[int, int]:
    """
    Count in-bound parameters of a reading.

    Args:
        reading: Water-quality reading

    Returns:
        (score, factors): parameters within their ideal bound, and
        parameters measured at all (None and NaN are unmeasured)
    """
    score = 0
    factors = 0
    for bound in IDEAL_BOUNDS:
        value = reading.value_of(bound.parameter)
        if not is_defined(value):
            continue
        factors += 1
        if bound.contains(value):
            score += 1
    return score, factors


def determine_overall_quality(reading: Optional[WaterQualityReading]) -> QualityVerdict:
    """
    Derive a coarse quality verdict for a single reading.

    Args:
        reading: Usually the most recent reading of a lake, or None

    Returns:
        Good (>= 80% in bounds), Moderate (>= 50%), Poor, or Unknown when
        there is no reading at all
    """
    if reading is None:
        return QualityVerdict.UNKNOWN

    score, factors = score_reading(reading)

    if factors == 0:
        logger.warning(
            f"Reading for {reading.lake_name} ({reading.date or 'undated'}) has no scored "
            f"parameters; reporting {UNSCORED_READING_VERDICT.value}"
        )
        return UNSCORED_READING_VERDICT

    ratio = score / factors
    if ratio >= GOOD_SCORE_RATIO:
        return QualityVerdict.GOOD
    if ratio >= MODERATE_SCORE_RATIO:
        return QualityVerdict.MODERATE
    return QualityVerdict.POOR
