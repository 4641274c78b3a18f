"""
WattCanvas EIA Dashboard

Streamlit application for filtering and charting U.S. energy statistics
served by the backend aggregation API.
Flow: Sign in -> Filter options load -> Charts follow the filter selection
"""

import streamlit as st
import logging
import sys
from datetime import date
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Page configuration
st.set_page_config(
    page_title="EIA Dashboard",
    page_icon="⚡",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Import core modules
try:
    from config import APP_NAME, ConfigManager
    from services.energy_data_service import EnergyDataService
    from services.auth_service import AuthService, AuthError
    from services.dashboard_controller import DashboardController
    from utils.visualization import ChartGenerator
    from components.sidebar import create_filter_sidebar
    from components.charts import render_time_series_panel, render_composition_panel, render_data_table

except ImportError as e:
    st.error(f"Error importing modules: {str(e)}")
    st.stop()

def initialize_services():
    """Initialize all application services once per session."""
    if st.session_state.get('services_initialized'):
        return

    try:
        config = ConfigManager()
        st.session_state.config = config

        # Base URL is resolved here, once, and injected into the client
        st.session_state.data_service = EnergyDataService(
            base_url=config.get_api_base_url(),
            timeout=config.get_api_timeout()
        )

        st.session_state.auth_service = AuthService.from_config(config)

        st.session_state.chart_generator = ChartGenerator(
            figure_width=config.get_float('visualization.figure_width', 10),
            figure_height=config.get_float('visualization.figure_height', 5),
            fuel_colors=config.get('visualization.fuel_colors')
        )

        if 'user' not in st.session_state:
            st.session_state.user = st.session_state.auth_service.get_current_user()

        st.session_state.services_initialized = True
        logger.info("Services initialized successfully")

    except AuthError as e:
        st.error(f"❌ Authentication is not available: {str(e)}")
        logger.error(f"Service initialization error: {str(e)}")
        st.stop()

def get_controller() -> DashboardController:
    """Return the session's dashboard controller, creating it on first use."""
    if 'dashboard_controller' not in st.session_state:
        defaults = st.session_state.config.get_dashboard_defaults()
        st.session_state.dashboard_controller = DashboardController(
            data_service=st.session_state.data_service,
            auth_service=st.session_state.auth_service,
            default_frequency=defaults['default_frequency'],
            default_metric=defaults['default_metric'],
            lookback_years=defaults['lookback_years']
        )
    return st.session_state.dashboard_controller

def show_sign_in():
    """Show the sign-in form for visitors without a session."""
    st.title("⚡ EIA Dashboard")
    st.markdown("Sign in to explore U.S. energy statistics.")

    with st.form("sign_in"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign In", use_container_width=True)

    if submitted:
        try:
            with st.spinner("Signing in..."):
                user = st.session_state.auth_service.sign_in(email, password)
        except AuthError as e:
            st.error(f"❌ Sign in failed: {str(e)}")
            return

        st.session_state.user = user
        st.rerun()

@st.dialog("Sign Out Failed")
def show_sign_out_error(message: str):
    st.error(message)
    if st.button("OK", use_container_width=True):
        st.rerun()

def create_header(controller: DashboardController):
    """Show the page header with the welcome text and sign-out button."""
    col_title, col_user, col_button = st.columns([3, 2, 1])

    with col_title:
        st.markdown("### EIA Dashboard")
    with col_user:
        st.caption(f"Welcome, {getattr(st.session_state.user, 'email', '')}")
    with col_button:
        label = "Signing Out..." if controller.is_signing_out else "Sign Out"
        if st.button(label, disabled=controller.is_signing_out, type="primary", use_container_width=True):
            error = controller.sign_out()
            if error:
                show_sign_out_error(error)
            else:
                # Auth state changed: drop the session's user and dashboard state
                st.session_state.user = None
                st.session_state.pop('dashboard_controller', None)
                st.rerun()

    st.divider()

def show_dashboard():
    """Show the filter sidebar, both charts and the raw data table."""
    controller = get_controller()

    if not controller.filter_error and controller.is_loading_filters:
        with st.spinner("Loading filters..."):
            controller.initialize()

    create_header(controller)

    defaults = st.session_state.config.get_dashboard_defaults()
    create_filter_sidebar(controller, max_display=defaults['max_display'])

    chart_generator = st.session_state.chart_generator
    panel_args = dict(
        chart_generator=chart_generator,
        data=controller.chart_data,
        group_by=controller.group_by,
        group_by_label=controller.group_by_label,
        metric_name=controller.selected_metric_name,
        is_loading=controller.is_chart_loading,
        error=controller.chart_error
    )

    render_time_series_panel(**panel_args)
    render_composition_panel(**panel_args)
    render_data_table(controller.chart_data, controller.is_chart_loading, controller.chart_error)

    st.divider()
    st.caption(f"© {date.today().year} {APP_NAME}")

def main():
    """Main application function."""

    initialize_services()

    if not st.session_state.get('user'):
        show_sign_in()
        return

    show_dashboard()

if __name__ == "__main__":
    main()
