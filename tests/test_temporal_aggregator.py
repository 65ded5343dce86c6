"""
Unit tests for the temporal aggregation pipeline.

Tests cover:
- Observation cleaning and ordering
- Monthly and yearly rollups
- Area trend classification
- Seasonal patterns
- Edge cases (no data, single observation, malformed timestamps)
"""
import pytest
from datetime import date

from conftest import make_record
from lake_analytics.domain.models import Season, TrendDirection
from lake_analytics.services.domain.temporal_aggregator import (
    aggregate_temporal,
    build_observations,
    calculate_monthly_aggregates,
    calculate_seasonal_patterns,
    calculate_yearly_aggregates,
    classify_area_trend,
    season_of,
)


# ============================================================
# Observation Cleaning Tests
# ============================================================

class TestBuildObservations:
    """Tests for raw record cleaning."""

    def test_drops_non_positive_and_missing_areas(self, sample_records):
        """Zero, negative and missing areas are no-water artifacts."""
        observations = build_observations(sample_records)

        assert len(observations) == 5
        assert all(o.area > 0 for o in observations)

    def test_drops_nan_area(self):
        """NaN area is treated like a missing area."""
        observations = build_observations([
            make_record("2019-01-05", float("nan")),
            make_record("2019-01-06", 12.0),
        ])

        assert [o.area for o in observations] == [12.0]

    def test_sorted_by_date(self, sample_records):
        """Observations come out in ascending date order."""
        observations = build_observations(sample_records)
        dates = [o.date for o in observations]

        assert dates == sorted(dates)
        assert dates[0] == date(2019, 1, 5)
        assert dates[-1] == date(2020, 12, 30)

    def test_accepts_datetime_timestamps(self):
        """Datetime strings are reduced to their calendar date."""
        observations = build_observations([make_record("2021-03-04T10:30:00", 5.0)])

        assert observations[0].date == date(2021, 3, 4)

    def test_skips_malformed_timestamp(self):
        """An unparseable timestamp drops only that record."""
        observations = build_observations([
            make_record("not-a-date", 5.0),
            make_record("2021-03-04", 6.0),
        ])

        assert len(observations) == 1
        assert observations[0].area == 6.0

    def test_keeps_sensor_metadata(self):
        """Sensor, cloud cover and confidence are carried over."""
        observation = build_observations([make_record("2021-03-04", 6.0, sensor="L8")])[0]

        assert observation.sensor == "L8"
        assert observation.cloud_cover == 0.05
        assert observation.confidence == 0.9


# ============================================================
# Rollup Tests
# ============================================================

class TestRollups:
    """Tests for monthly and yearly aggregates."""

    def test_monthly_groups(self, sample_records):
        """Each (year, month) gets one aggregate with correct stats."""
        monthly = calculate_monthly_aggregates(build_observations(sample_records))

        assert [(m.year, m.month) for m in monthly] == [
            (2019, 1), (2019, 7), (2020, 7), (2020, 12),
        ]
        january = monthly[0]
        assert january.data_points == 2
        assert january.min_area == 100.0
        assert january.max_area == 110.0
        assert january.average_area == pytest.approx(105.0)

    def test_monthly_sort_across_years(self):
        """December of one year sorts before January of the next."""
        observations = build_observations([
            make_record("2020-01-15", 10.0),
            make_record("2019-12-15", 11.0),
        ])
        monthly = calculate_monthly_aggregates(observations)

        assert [(m.year, m.month) for m in monthly] == [(2019, 12), (2020, 1)]

    def test_yearly_groups(self, sample_records):
        """Each year gets one aggregate."""
        yearly = calculate_yearly_aggregates(build_observations(sample_records))

        assert [y.year for y in yearly] == [2019, 2020]
        assert yearly[0].data_points == 3
        assert yearly[0].average_area == pytest.approx(100.0)
        assert yearly[1].average_area == pytest.approx(130.0)

    def test_data_points_sum_to_total(self, sample_records):
        """No observation is lost or double-counted by a rollup."""
        observations = build_observations(sample_records)

        assert sum(m.data_points for m in calculate_monthly_aggregates(observations)) == len(observations)
        assert sum(y.data_points for y in calculate_yearly_aggregates(observations)) == len(observations)

    def test_min_le_average_le_max(self):
        """Averages always lie between min and max."""
        observations = build_observations([
            make_record("2019-05-01", 0.1),
            make_record("2019-05-02", 0.2),
            make_record("2019-05-03", 0.3),
            make_record("2019-05-04", 1e9),
        ])

        for aggregate in calculate_monthly_aggregates(observations) + calculate_yearly_aggregates(observations):
            assert aggregate.min_area <= aggregate.average_area <= aggregate.max_area

    def test_empty_input(self):
        """No observations yields no aggregates."""
        assert calculate_monthly_aggregates([]) == []
        assert calculate_yearly_aggregates([]) == []


# ============================================================
# Trend and Season Tests
# ============================================================

class TestTrendClassification:
    """Tests for first-to-last-year area trend."""

    @pytest.mark.parametrize("change,expected", [
        (20.0, TrendDirection.INCREASING),
        (10.0, TrendDirection.STABLE),
        (5.0, TrendDirection.STABLE),
        (-10.0, TrendDirection.STABLE),
        (-10.5, TrendDirection.DECREASING),
        (None, TrendDirection.STABLE),
    ])
    def test_threshold(self, change, expected):
        """Only changes beyond +/-10% leave the stable band."""
        assert classify_area_trend(change) == expected


class TestSeasons:
    """Tests for season bucketing."""

    @pytest.mark.parametrize("month,season", [
        (6, Season.MONSOON), (10, Season.MONSOON),
        (11, Season.WINTER), (2, Season.WINTER),
        (3, Season.SUMMER), (5, Season.SUMMER),
    ])
    def test_season_of(self, month, season):
        assert season_of(month) == season

    def test_invalid_month(self):
        with pytest.raises(ValueError):
            season_of(13)

    def test_seasonal_averages(self):
        """Seasonal means are unweighted over raw observations."""
        observations = build_observations([
            make_record("2019-07-01", 100.0),
            make_record("2020-08-01", 200.0),
            make_record("2019-01-01", 50.0),
        ])
        patterns = calculate_seasonal_patterns(observations)

        assert patterns.monsoon_average == pytest.approx(150.0)
        assert patterns.winter_average == pytest.approx(50.0)
        assert patterns.summer_average == 0.0
        assert patterns.monsoon_data_points == 2
        assert patterns.winter_data_points == 1
        assert patterns.summer_data_points == 0

    def test_season_counts_cover_every_observation(self, sample_records):
        observations = build_observations(sample_records)
        patterns = calculate_seasonal_patterns(observations)

        total = patterns.monsoon_data_points + patterns.winter_data_points + patterns.summer_data_points
        assert total == len(observations)


# ============================================================
# Full Pipeline Tests
# ============================================================

class TestAggregateTemporal:
    """Tests for the complete pipeline."""

    def test_full_result(self, sample_records):
        """Pipeline produces all series and statistics."""
        result = aggregate_temporal(sample_records, "Hussain Sagar")

        assert result.lake_name == "Hussain Sagar"
        assert result.source == "ISRO Bhuvan WBIS"
        assert len(result.daily_data) == 5

        stats = result.statistics
        assert stats.total_data_points == 5
        assert stats.date_range.start == date(2019, 1, 5)
        assert stats.date_range.end == date(2020, 12, 30)
        assert stats.area_range.min == 90.0
        assert stats.area_range.max == 140.0
        assert stats.area_range.average == pytest.approx(112.0)
        # 2019 average 100 -> 2020 average 130
        assert stats.percentage_change == pytest.approx(30.0)
        assert stats.trend == TrendDirection.INCREASING

    def test_decreasing_trend(self):
        result = aggregate_temporal([
            make_record("2015-03-01", 200.0),
            make_record("2022-03-01", 150.0),
        ], "Osman Sagar")

        assert result.statistics.percentage_change == pytest.approx(-25.0)
        assert result.statistics.trend == TrendDirection.DECREASING

    def test_stable_trend(self):
        result = aggregate_temporal([
            make_record("2015-03-01", 100.0),
            make_record("2022-03-01", 105.0),
        ], "Osman Sagar")

        assert result.statistics.trend == TrendDirection.STABLE

    def test_single_observation(self):
        """One observation is its own min, max and average."""
        result = aggregate_temporal([make_record("2019-04-10", 42.0)], "Himayat Sagar")

        stats = result.statistics
        assert stats.total_data_points == 1
        assert stats.date_range.start == stats.date_range.end == date(2019, 4, 10)
        assert stats.area_range.min == stats.area_range.max == stats.area_range.average == 42.0
        assert stats.percentage_change == pytest.approx(0.0)
        assert stats.trend == TrendDirection.STABLE
        assert result.monthly_data[0].data_points == 1
        assert result.yearly_data[0].data_points == 1

    def test_no_observations(self):
        """Only unusable records yields empty series and no statistics."""
        result = aggregate_temporal([
            make_record("2019-04-10", 0.0),
            make_record("2019-04-11", None),
        ], "Himayat Sagar")

        assert result.daily_data == []
        assert result.monthly_data == []
        assert result.yearly_data == []
        assert result.statistics is None

    def test_order_independent(self, sample_records):
        """Shuffled input produces the same result."""
        forward = aggregate_temporal(sample_records, "Hussain Sagar")
        backward = aggregate_temporal(list(reversed(sample_records)), "Hussain Sagar")

        assert forward.monthly_data == backward.monthly_data
        assert forward.yearly_data == backward.yearly_data
        assert forward.statistics == backward.statistics

    def test_camel_case_serialization(self, sample_records):
        """Wire format uses camelCase names."""
        data = aggregate_temporal(sample_records, "Hussain Sagar").model_dump(by_alias=True)

        assert "dailyData" in data
        assert "averageArea" in data["monthlyData"][0]
        assert "seasonalPatterns" in data["statistics"]
        assert "monsoonAverage" in data["statistics"]["seasonalPatterns"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
