"""
Components package for the WattCanvas EIA Dashboard.

This package contains reusable UI components for the Streamlit application:
the filter sidebar, the multi-select filter selector and the chart panels.
"""

from components.sidebar import create_filter_sidebar
from components.filter_selector import FilterSelector, render_filter_selector
from components.charts import render_time_series_panel, render_composition_panel, render_data_table

__all__ = [
    'create_filter_sidebar',
    'FilterSelector',
    'render_filter_selector',
    'render_time_series_panel',
    'render_composition_panel',
    'render_data_table'
]
