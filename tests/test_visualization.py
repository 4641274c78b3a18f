"""
Tests for chart data shaping and figure generation.
"""

import matplotlib.pyplot as plt
import pytest

from config.constants import DEFAULT_FUEL_COLORS, GROUP_BY_FUEL, GROUP_BY_PRIME_MOVER
from utils.data_processing import clean_series_frame, pivot_by_group, records_to_frame, value_scale
from utils.visualization import ChartGenerator

class TestDataProcessing:
    """Test DataFrame helpers."""

    def test_records_to_frame_orders_known_columns(self, sample_records):
        df = records_to_frame(sample_records)
        assert list(df.columns[:3]) == ["timestamp", "metric_code", "value"]
        assert len(df) == 5

    def test_records_to_frame_empty(self):
        assert records_to_frame([]).empty

    def test_missing_group_becomes_unknown(self, sample_records):
        df = clean_series_frame(sample_records, GROUP_BY_FUEL)
        assert "Unknown" in set(df[GROUP_BY_FUEL])

    def test_absent_group_column(self, sample_records):
        df = clean_series_frame(sample_records, GROUP_BY_PRIME_MOVER)
        assert set(df[GROUP_BY_PRIME_MOVER]) == {"Unknown"}

    def test_invalid_rows_dropped(self):
        records = [
            {"timestamp": "2024-01-01", "value": 3},
            {"timestamp": "2024-01-01", "value": "abc"},
            {"timestamp": "not a date", "value": 1},
        ]
        assert len(clean_series_frame(records, GROUP_BY_FUEL)) == 1

    def test_does_not_modify_records(self, sample_records):
        snapshot = [dict(record) for record in sample_records]
        pivot_by_group(sample_records, GROUP_BY_FUEL)
        assert sample_records == snapshot

    def test_pivot_sums_per_timestamp_and_group(self, sample_records):
        pivot = pivot_by_group(sample_records, GROUP_BY_FUEL)
        assert sorted(pivot.columns) == ["COL", "NG", "Unknown"]
        assert pivot["NG"].tolist() == [1200.0, 1500.0]
        assert pivot["Unknown"].tolist() == [0.0, 50.0]

    @pytest.mark.parametrize("max_value,suffix", [(5, ""), (2_500, "K"), (3_000_000, "M")])
    def test_value_scale(self, max_value, suffix):
        assert value_scale(max_value)[1] == suffix

class TestChartGenerator:
    """Test figure generation."""

    @pytest.fixture
    def generator(self):
        return ChartGenerator(figure_width=6, figure_height=3)

    def test_fixed_fuel_colors(self, generator):
        colors = generator.color_palette(["NG", "XYZ"], GROUP_BY_FUEL)
        assert colors["NG"] == DEFAULT_FUEL_COLORS["NG"]
        assert colors["XYZ"].startswith("#")

    def test_generated_colors_for_prime_movers(self, generator):
        colors = generator.color_palette(["ST", "CT"], GROUP_BY_PRIME_MOVER)
        assert len(set(colors.values())) == 2

    def test_time_series(self, generator, sample_records):
        fig = generator.create_time_series(sample_records, GROUP_BY_FUEL, "Net Generation")
        ax = fig.axes[0]
        assert ax.get_title() == "Net Generation Over Time"
        assert len(ax.get_lines()) == 3
        plt.close(fig)

    def test_stacked_bar(self, generator, sample_records):
        fig = generator.create_stacked_bar(sample_records, GROUP_BY_FUEL, "Net Generation")
        ax = fig.axes[0]
        assert ax.get_title() == "Composition Over Time"
        # 2 periods x 3 groups
        assert len(ax.patches) == 6
        plt.close(fig)

    def test_empty_data_returns_none(self, generator):
        assert generator.create_time_series([], GROUP_BY_FUEL, "Net Generation") is None
        assert generator.create_stacked_bar([], GROUP_BY_FUEL, "Net Generation") is None
