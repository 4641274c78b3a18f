"""
Chart generator for the WattCanvas EIA Dashboard.

This module builds the two dashboard charts from raw aggregate records:
a time series with one line per group and a stacked bar chart showing the
composition of each period.
"""

import colorsys
import logging
from typing import Dict, List, Optional

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import seaborn as sns

from config.constants import (
    DEFAULT_FIGURE_WIDTH,
    DEFAULT_FIGURE_HEIGHT,
    DEFAULT_FUEL_COLORS,
    GROUP_BY_FUEL,
)
from models.data_models import RawDataPoint
from utils.data_processing import pivot_by_group, value_scale

# Set up logger
logger = logging.getLogger(__name__)

class ChartGenerator:
    """
    Generator for the dashboard's matplotlib figures.

    Attributes:
        figure_width (float): Figure width in inches
        figure_height (float): Figure height in inches
        fuel_colors (dict): Fixed colors for fuel codes
    """

    def __init__(
        self,
        figure_width: float = DEFAULT_FIGURE_WIDTH,
        figure_height: float = DEFAULT_FIGURE_HEIGHT,
        fuel_colors: Optional[Dict[str, str]] = None
    ):
        """
        Initialize the chart generator.

        Args:
            figure_width: Figure width in inches
            figure_height: Figure height in inches
            fuel_colors: Color mapping for fuel codes (or None for defaults)
        """
        self.figure_width = figure_width
        self.figure_height = figure_height
        self.fuel_colors = fuel_colors or DEFAULT_FUEL_COLORS

        self._set_default_style()

    def _set_default_style(self) -> None:
        """Set default visualization style."""
        sns.set_style("whitegrid")

        plt.rcParams.update({
            'font.size': 11,
            'axes.titlesize': 13,
            'axes.labelsize': 11,
            'xtick.labelsize': 9,
            'ytick.labelsize': 9,
            'legend.fontsize': 9
        })

    def color_palette(self, groups: List[str], group_by: str) -> Dict[str, str]:
        """
        Assign a color to every group.

        Fuel codes with a fixed color keep it; the rest get evenly spaced
        hues around the color wheel.

        Args:
            groups: Group values in plotting order
            group_by: Grouping column

        Returns:
            Dictionary mapping group value to hex color
        """
        color_map = {}
        remaining = []
        for group in groups:
            if group_by == GROUP_BY_FUEL and group in self.fuel_colors:
                color_map[group] = self.fuel_colors[group]
            else:
                remaining.append(group)

        for i, group in enumerate(remaining):
            hue = (0.6 + i / len(remaining)) % 1.0
            r, g, b = colorsys.hsv_to_rgb(hue, 0.65, 0.85)
            color_map[group] = '#{:02x}{:02x}{:02x}'.format(int(r * 255), int(g * 255), int(b * 255))

        return color_map

    def _format_value_axis(self, ax, max_value: float, metric_name: str) -> None:
        divisor, suffix, label_suffix = value_scale(max_value)
        if divisor > 1:
            ax.yaxis.set_major_formatter(lambda x, pos: f'{x / divisor:.1f}{suffix}')
        ax.set_ylabel(f"{metric_name}{label_suffix}")

    def create_time_series(
        self,
        records: List[RawDataPoint],
        group_by: str,
        metric_name: str
    ) -> Optional[plt.Figure]:
        """
        Create a line chart with one series per group.

        Args:
            records: Raw aggregate data points
            group_by: Column that splits the series
            metric_name: Metric label for the title and axis

        Returns:
            Matplotlib figure, or None when there is nothing to plot
        """
        pivot = pivot_by_group(records, group_by)
        if pivot.empty:
            return None

        colors = self.color_palette(list(pivot.columns), group_by)
        fig, ax = plt.subplots(figsize=(self.figure_width, self.figure_height))

        for group in pivot.columns:
            ax.plot(
                pivot.index,
                pivot[group],
                marker='o',
                markersize=3,
                linewidth=2,
                label=group,
                color=colors[group]
            )

        self._format_value_axis(ax, float(pivot.max().max()), metric_name or "Value")
        ax.set_xlabel('Date')
        ax.set_title(f"{metric_name or 'Metric'} Over Time")
        ax.legend(title=group_by.replace('_', ' ').title(), loc='upper left', bbox_to_anchor=(1.01, 1))
        ax.grid(True, alpha=0.3)
        fig.autofmt_xdate()
        fig.tight_layout()

        return fig

    def create_stacked_bar(
        self,
        records: List[RawDataPoint],
        group_by: str,
        metric_name: str
    ) -> Optional[plt.Figure]:
        """
        Create a stacked bar chart of each period's composition by group.

        Args:
            records: Raw aggregate data points
            group_by: Column that splits the bars
            metric_name: Metric label for the axis

        Returns:
            Matplotlib figure, or None when there is nothing to plot
        """
        pivot = pivot_by_group(records, group_by)
        if pivot.empty:
            return None

        colors = self.color_palette(list(pivot.columns), group_by)
        fig, ax = plt.subplots(figsize=(self.figure_width, self.figure_height))

        labels = [timestamp.strftime('%Y-%m-%d') for timestamp in pivot.index]
        positions = range(len(labels))
        bottom = [0.0] * len(labels)

        for group in pivot.columns:
            values = pivot[group].tolist()
            ax.bar(positions, values, bottom=bottom, label=group, color=colors[group], width=0.8)
            bottom = [b + v for b, v in zip(bottom, values)]

        # Thin out tick labels on long ranges
        step = max(1, len(labels) // 12)
        ax.set_xticks(list(positions)[::step])
        ax.set_xticklabels(labels[::step], rotation=45, ha='right')

        self._format_value_axis(ax, max(bottom) if bottom else 0.0, metric_name or "Value")
        ax.set_xlabel('Period')
        ax.set_title("Composition Over Time")
        ax.legend(title=group_by.replace('_', ' ').title(), loc='upper left', bbox_to_anchor=(1.01, 1))
        fig.tight_layout()

        return fig
