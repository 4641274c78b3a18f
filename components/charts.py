"""
Chart and table panels for the dashboard's main content area.

Each panel receives the controller's data and flags and only renders them.
"""

import streamlit as st
import matplotlib.pyplot as plt
import logging
from typing import List, Optional

from models.data_models import RawDataPoint
from utils.data_processing import records_to_frame
from utils.visualization import ChartGenerator

logger = logging.getLogger(__name__)

def _render_chart_state(is_loading: bool, error: Optional[str]) -> bool:
    """Show the loading or error state; return True if the chart itself should render."""
    if is_loading:
        st.caption("⏳ Loading chart data...")
        return False

    if error:
        st.error(f"⚠️ **Error Loading Chart**\n\n{error}")
        return False

    return True

def _show_figure(fig) -> None:
    if fig is None:
        st.info("📊 No data for the selected filters.")
        return
    st.pyplot(fig, use_container_width=True)
    plt.close(fig)

def render_time_series_panel(
    chart_generator: ChartGenerator,
    data: List[RawDataPoint],
    group_by: str,
    group_by_label: str,
    metric_name: str,
    is_loading: bool = False,
    error: Optional[str] = None
):
    """
    Render the "<metric> Over Time" panel.

    Args:
        chart_generator: Figure builder
        data: Raw aggregate records
        group_by: Grouping column
        group_by_label: Upper-cased grouping label for the heading
        metric_name: Selected metric's name
        is_loading: Whether a fetch is running
        error: Chart error message, if any
    """
    with st.container(border=True):
        st.markdown(f"#### {metric_name or 'Metric'} Over Time  :gray[({group_by_label})]")
        if _render_chart_state(is_loading, error):
            _show_figure(chart_generator.create_time_series(data, group_by, metric_name))

def render_composition_panel(
    chart_generator: ChartGenerator,
    data: List[RawDataPoint],
    group_by: str,
    group_by_label: str,
    metric_name: str,
    is_loading: bool = False,
    error: Optional[str] = None
):
    """Render the "Composition Over Time" stacked bar panel."""
    with st.container(border=True):
        st.markdown(f"#### Composition Over Time  :gray[({group_by_label})]")
        if _render_chart_state(is_loading, error):
            _show_figure(chart_generator.create_stacked_bar(data, group_by, metric_name))

def render_data_table(
    data: List[RawDataPoint],
    is_loading: bool = False,
    error: Optional[str] = None
):
    """Render the raw records as a table."""
    with st.container(border=True):
        st.markdown("#### Raw Data")

        if is_loading:
            st.caption("Loading data...")
            return
        if error:
            st.error(error)
            return
        if not data:
            st.info("No data available.")
            return

        df = records_to_frame(data)
        st.caption(f"{len(df):,} rows")
        st.dataframe(df, use_container_width=True, hide_index=True, height=360)
