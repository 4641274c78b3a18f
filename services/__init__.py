"""
Services package for the WattCanvas EIA Dashboard.

This package provides the backend API client, the authentication wrapper and
the controller that ties filter selections to data requests.
"""

from services.energy_data_service import (
    EnergyDataService,
    EnergyDataError,
    DimensionLoadError,
    DataFetchError
)
from services.auth_service import AuthService, AuthError
from services.dashboard_controller import DashboardController

__all__ = [
    'EnergyDataService',
    'EnergyDataError',
    'DimensionLoadError',
    'DataFetchError',
    'AuthService',
    'AuthError',
    'DashboardController'
]
