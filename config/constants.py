"""
Constants for the WattCanvas EIA Dashboard configuration.

This module provides default paths, values, and configuration structures
used throughout the application.
"""

import os

# Configuration file path
DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(os.path.dirname(__file__)), "config", "config.yml")

# Default backend aggregation API URL
DEFAULT_API_BASE_URL = "http://localhost:8000"
DEFAULT_API_TIMEOUT = None  # No timeout, same as the browser client

# Environment overrides
ENV_API_BASE_URL = "WATTCANVAS_API_BASE_URL"
ENV_SUPABASE_URL = "SUPABASE_URL"
ENV_SUPABASE_KEY = "SUPABASE_ANON_KEY"

# Dimension endpoints: name -> (path, label, code field, description field)
DIMENSION_ENDPOINTS = {
    "frequencies": ("/dimensions/frequencies", "Frequencies", "frequency_code", "frequency_description"),
    "metrics": ("/dimensions/metrics", "Metrics", "metric_code", "metric_name"),
    "fuel_types": ("/dimensions/fuel_codes", "Fuel Codes", "fuel_code", "fuel_description"),
    "prime_movers": ("/dimensions/prime_movers", "Prime Movers", "prime_mover_code", "prime_mover_description"),
    "states": ("/dimensions/states", "States", "code", "description"),
}

AGGREGATE_ENDPOINT = "/data/aggregate"

# Default selections
DEFAULT_FREQUENCY_CODE = "M"    # Monthly
DEFAULT_METRIC_CODE = "GEN"     # Net generation
DEFAULT_LOOKBACK_YEARS = 1

# Grouping keys understood by the chart views
GROUP_BY_FUEL = "fuel_code"
GROUP_BY_PRIME_MOVER = "prime_mover_code"

# Columns of an aggregate data point, in display order
RAW_DATA_COLUMNS = [
    "timestamp",
    "metric_code",
    "value",
    "unit_code",
    "fuel_code",
    "prime_mover_code",
    "state_code",
    "sector_code",
    "region_code",
    "subdivision_code",
    "detail_raw",
]

# Filter selector settings
DEFAULT_MAX_DISPLAY = 2
DEFAULT_SELECTOR_PLACEHOLDER = "Select options..."
DEFAULT_FUZZY_THRESHOLD = 80.0

# Default visualization settings
DEFAULT_FIGURE_WIDTH = 10
DEFAULT_FIGURE_HEIGHT = 5
UNKNOWN_GROUP_LABEL = "Unknown"

# Fixed colors for common fuels so series keep their color across filters
DEFAULT_FUEL_COLORS = {
    "COL": "#4b5563",   # Coal
    "NG": "#f59e0b",    # Natural gas
    "NUC": "#8b5cf6",   # Nuclear
    "WAT": "#0ea5e9",   # Hydro
    "WND": "#10b981",   # Wind
    "SUN": "#facc15",   # Solar
    "PET": "#b91c1c",   # Petroleum
}

APP_NAME = "WattCanvas EIA Dashboard"

# Default configuration structure
DEFAULT_CONFIG = {
    "api": {
        "base_url": DEFAULT_API_BASE_URL,
        "timeout": DEFAULT_API_TIMEOUT
    },
    "auth": {
        "supabase_url": "",  # Will be populated via YAML file or environment
        "supabase_key": ""
    },
    "dashboard": {
        "default_frequency": DEFAULT_FREQUENCY_CODE,
        "default_metric": DEFAULT_METRIC_CODE,
        "lookback_years": DEFAULT_LOOKBACK_YEARS,
        "max_display": DEFAULT_MAX_DISPLAY
    },
    "visualization": {
        "figure_width": DEFAULT_FIGURE_WIDTH,
        "figure_height": DEFAULT_FIGURE_HEIGHT,
        "fuel_colors": DEFAULT_FUEL_COLORS
    }
}
