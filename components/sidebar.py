"""
Sidebar component for the WattCanvas EIA Dashboard.

This module provides the filter panel: date range, metric and frequency,
the dimension multi-selects and a reset button, plus a compact status block.
"""

import streamlit as st
import logging
from typing import List

from components.filter_selector import render_filter_selector
from models.data_models import FilterOption

logger = logging.getLogger(__name__)

def create_filter_sidebar(controller, max_display: int = 2) -> None:
    """
    Render the filter panel for a DashboardController.

    Widget values are pushed back through controller.update_selection(),
    which refetches the chart data when anything changed.

    Args:
        controller: DashboardController holding options and selection
        max_display: Number of selected descriptions shown on a selector
    """
    with st.sidebar:
        col_title, col_reset = st.columns([3, 1])
        with col_title:
            st.subheader("Filters")
        with col_reset:
            st.button(
                "Reset",
                key="reset_filters",
                disabled=controller.is_loading_filters,
                on_click=controller.reset_filters
            )

        if controller.is_loading_filters:
            st.info("⏳ Loading filters...")
        elif controller.filter_error:
            st.error(f"⚠️ **Error Loading Filters**\n\n{controller.filter_error}")
        else:
            _show_date_range(controller)
            st.divider()
            _show_data_options(controller)
            st.divider()
            _show_dimensions(controller, max_display)
            st.divider()
            _show_plant_search()

        st.divider()
        _show_system_status(controller)

def _show_date_range(controller):
    """Start and end date inputs; the end date cannot be set before the start."""
    st.markdown("**Date Range**")
    selection = controller.selection

    start_date = st.date_input("Start Date", value=selection.start_date)
    end_date = st.date_input(
        "End Date",
        value=max(selection.end_date, start_date),
        min_value=start_date
    )

    controller.update_selection(start_date=start_date, end_date=end_date)

def _option_index(options: List[FilterOption], code: str):
    for i, option in enumerate(options):
        if option.code == code:
            return i
    return None

def _show_data_options(controller):
    """Metric and frequency single selects."""
    st.markdown("**Data Options**")
    options = controller.options
    selection = controller.selection

    metric = st.selectbox(
        "Metric",
        options=options.metrics,
        index=_option_index(options.metrics, selection.metric_code),
        format_func=lambda option: option.description,
        placeholder="Select Metric"
    )
    frequency = st.selectbox(
        "Frequency",
        options=options.frequencies,
        index=_option_index(options.frequencies, selection.frequency_code),
        format_func=lambda option: option.description,
        placeholder="Select Frequency"
    )

    controller.update_selection(
        metric_code=metric.code if metric else "",
        frequency_code=frequency.code if frequency else ""
    )

def _show_dimensions(controller, max_display: int):
    """Multi-select filters for states, fuel types and prime movers."""
    st.markdown("**Dimensions**")
    options = controller.options
    selection = controller.selection

    dimensions = [
        ("States", "state_codes", options.states, selection.state_codes),
        ("Fuel Types", "fuel_codes", options.fuel_types, selection.fuel_codes),
        ("Prime Movers", "prime_mover_codes", options.prime_movers, selection.prime_mover_codes),
    ]

    for label, field_name, dimension_options, selected in dimensions:
        st.caption(label)
        render_filter_selector(
            label=label,
            options=dimension_options,
            selected=selected,
            on_change=lambda values, name=field_name: controller.update_selection(**{name: values}),
            key=f"selector_{field_name}",
            placeholder=f"Select {label}...",
            max_display=max_display
        )

def _show_plant_search():
    """Plant filter, not available yet."""
    st.text_input("Plant", placeholder="Search plants...", disabled=True, help="Soon")

def _show_system_status(controller):
    """Show backend connection status."""
    st.caption("🔧 System Status")

    base_url = controller.data_service.base_url
    if controller.filter_error:
        st.error(f"❌ Backend API ({base_url})")
    elif controller.is_loading_filters:
        st.warning(f"⏳ Backend API ({base_url})")
    else:
        st.success(f"✅ Backend API ({base_url})")
