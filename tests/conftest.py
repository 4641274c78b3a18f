"""
Shared fixtures for the dashboard tests.
"""

from datetime import date
from unittest.mock import Mock

import matplotlib

matplotlib.use("Agg")

import pytest
import requests

from models.data_models import FilterOption, FilterOptions

FIXED_TODAY = date(2024, 6, 15)

DIMENSION_PAYLOADS = {
    "/dimensions/frequencies": [
        {"frequency_code": "A", "frequency_description": "Annual"},
        {"frequency_code": "M", "frequency_description": "Monthly"},
    ],
    "/dimensions/metrics": [
        {"metric_code": "CONS", "metric_name": "Fuel Consumption"},
        {"metric_code": "GEN", "metric_name": "Net Generation"},
    ],
    "/dimensions/fuel_codes": [
        {"fuel_code": "NG", "fuel_description": "Natural Gas"},
        {"fuel_code": "COL", "fuel_description": "Coal"},
        {"fuel_code": None, "fuel_description": "All Fuels"},
    ],
    "/dimensions/prime_movers": [
        {"prime_mover_code": "ST", "prime_mover_description": "Steam Turbine"},
        {"prime_mover_code": "CT", "prime_mover_description": "Combustion Turbine"},
    ],
    "/dimensions/states": [
        {"code": "TX", "description": "Texas"},
        {"code": "CA", "description": "California"},
    ],
}

def make_response(payload=None, status_code=200, reason="OK", text=""):
    """Build a mock requests.Response."""
    response = Mock()
    response.status_code = status_code
    response.reason = reason
    response.text = text
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} {reason}", response=response
        )
    else:
        response.raise_for_status.return_value = None
    return response

def make_router(responses):
    """
    Build a fake requests.get that answers by URL path.

    Args:
        responses: Mapping of path -> response, or -> exception to raise
    """
    def fake_get(url, params=None, timeout=None):
        for path, response in responses.items():
            if url.endswith(path):
                if isinstance(response, Exception):
                    raise response
                return response
        raise AssertionError(f"Unexpected request to {url}")
    return fake_get

@pytest.fixture
def fixed_today():
    return FIXED_TODAY

@pytest.fixture
def dimension_responses():
    """Successful responses for all five dimension endpoints."""
    return {path: make_response(payload) for path, payload in DIMENSION_PAYLOADS.items()}

@pytest.fixture
def filter_options():
    return FilterOptions(
        frequencies=[FilterOption("A", "Annual"), FilterOption("M", "Monthly")],
        metrics=[FilterOption("CONS", "Fuel Consumption"), FilterOption("GEN", "Net Generation")],
        fuel_types=[FilterOption("NG", "Natural Gas"), FilterOption("COL", "Coal")],
        prime_movers=[FilterOption("ST", "Steam Turbine"), FilterOption("CT", "Combustion Turbine")],
        states=[FilterOption("TX", "Texas"), FilterOption("CA", "California")],
    )

@pytest.fixture
def sample_records():
    """Aggregate data points as returned by /data/aggregate."""
    return [
        {"timestamp": "2024-01-01", "metric_code": "GEN", "value": 1200.0, "fuel_code": "NG", "unit_code": "MWH"},
        {"timestamp": "2024-01-01", "metric_code": "GEN", "value": 800.0, "fuel_code": "COL", "unit_code": "MWH"},
        {"timestamp": "2024-02-01", "metric_code": "GEN", "value": 1500.0, "fuel_code": "NG", "unit_code": "MWH"},
        {"timestamp": "2024-02-01", "metric_code": "GEN", "value": 700.0, "fuel_code": "COL", "unit_code": "MWH"},
        {"timestamp": "2024-02-01", "metric_code": "GEN", "value": 50.0, "unit_code": "MWH"},
    ]
