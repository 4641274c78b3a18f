"""
Energy data service for the backend aggregation API.

This module provides a service class for fetching the filter dimensions
(frequencies, metrics, fuel codes, prime movers, states) and the aggregated
EIA data points that feed the dashboard charts.
"""

import requests
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Tuple

from config.constants import (
    AGGREGATE_ENDPOINT,
    DEFAULT_API_BASE_URL,
    DEFAULT_API_TIMEOUT,
    DIMENSION_ENDPOINTS,
)
from models.data_models import FilterOption, FilterOptions, RawDataPoint, SelectionState

# Set up logger
logger = logging.getLogger(__name__)

class EnergyDataError(Exception):
    """Base error for backend API failures."""

class DimensionLoadError(EnergyDataError):
    """Raised when one of the filter dimension lists cannot be loaded."""

class DataFetchError(EnergyDataError):
    """Raised when the aggregate data request fails."""

def normalize_options(records: List[Dict[str, Any]], code_field: str, description_field: str) -> List[FilterOption]:
    """
    Map backend dimension records to FilterOption.

    Entries without a code are dropped. A missing description falls back to
    the code so every option has a label.

    Args:
        records: Decoded JSON array from a dimension endpoint
        code_field: Name of the code field in the records
        description_field: Name of the description field in the records

    Returns:
        List of FilterOption in backend order
    """
    options = []
    for record in records or []:
        code = record.get(code_field)
        if code is None:
            continue
        description = record.get(description_field)
        options.append(FilterOption(
            code=str(code),
            description=str(description) if description is not None else str(code)
        ))
    return options

def build_aggregate_params(selection: SelectionState) -> List[Tuple[str, str]]:
    """
    Build the query parameters for /data/aggregate.

    Multi-valued filters are sent as one parameter per code and left out
    entirely when nothing is selected.

    Args:
        selection: Current filter selection

    Returns:
        List of (name, value) pairs, ready for requests' params argument
    """
    params = [
        ('start_date', selection.start_date.isoformat()),
        ('end_date', selection.end_date.isoformat()),
        ('frequency_code', selection.frequency_code),
        ('metric_codes', selection.metric_code),
    ]
    params.extend(('fuel_codes', code) for code in selection.fuel_codes)
    params.extend(('prime_mover_codes', code) for code in selection.prime_mover_codes)
    params.extend(('state_codes', code) for code in selection.state_codes)
    return params

class EnergyDataService:
    """
    Client for the dashboard's backend aggregation API.

    Attributes:
        base_url (str): Base URL of the API, without trailing slash
        timeout (float): Request timeout in seconds, None for no timeout
    """

    def __init__(self, base_url: str = DEFAULT_API_BASE_URL, timeout: Optional[float] = DEFAULT_API_TIMEOUT):
        """
        Initialize the energy data service.

        Args:
            base_url: Base URL of the backend aggregation API
            timeout: Request timeout in seconds, None waits forever
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

        logger.info(f"Initialized energy data service with base URL: {self.base_url}")

    def _make_request(self, path: str, params: Optional[List[Tuple[str, str]]] = None) -> requests.Response:
        """
        Make a GET request to the backend API with error handling.

        Args:
            path: Endpoint path starting with '/'
            params: Optional query parameters

        Returns:
            requests.Response: The response object

        Raises:
            requests.RequestException: If the request fails or returns 4XX/5XX
        """
        url = f"{self.base_url}{path}"
        try:
            response = requests.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response
        except requests.RequestException as e:
            logger.error(f"Error making request to {url}: {str(e)}")
            raise

    def get_dimension(self, name: str) -> List[FilterOption]:
        """
        Fetch and normalize one filter dimension.

        Args:
            name: Key of DIMENSION_ENDPOINTS, e.g. 'fuel_types'

        Returns:
            List of FilterOption

        Raises:
            DimensionLoadError: If the request fails or the body is not a JSON array of objects
        """
        path, label, code_field, description_field = DIMENSION_ENDPOINTS[name]
        try:
            response = self._make_request(path)
            records = response.json()
        except requests.HTTPError as e:
            reason = e.response.reason if e.response is not None else str(e)
            raise DimensionLoadError(f"{label} fetch failed: {reason}") from e
        except (requests.RequestException, ValueError) as e:
            raise DimensionLoadError(f"{label} fetch failed: {str(e)}") from e

        if not isinstance(records, list) or not all(isinstance(record, dict) for record in records):
            logger.error(f"Unexpected {label.lower()} response body: {str(records)[:200]}")
            raise DimensionLoadError(f"{label} fetch failed: unexpected response")

        options = normalize_options(records, code_field, description_field)
        logger.debug(f"Loaded {len(options)} {label.lower()} options")
        return options

    def get_filter_options(self) -> FilterOptions:
        """
        Fetch all five filter dimensions concurrently.

        All requests are awaited before anything is returned. If any of them
        fails, the first failure in endpoint order is raised and none of the
        lists are returned.

        Returns:
            FilterOptions with every list populated

        Raises:
            DimensionLoadError: If any dimension request fails
        """
        names = list(DIMENSION_ENDPOINTS)
        logger.info(f"Fetching {len(names)} filter dimensions from {self.base_url}")

        with ThreadPoolExecutor(max_workers=len(names), thread_name_prefix="dimension") as pool:
            futures = {name: pool.submit(self.get_dimension, name) for name in names}

        # Pool exit waits for every request, so all futures are done here
        results = {}
        for name in names:
            results[name] = futures[name].result()

        return FilterOptions(**results)

    def get_aggregate_data(self, selection: SelectionState) -> List[RawDataPoint]:
        """
        Fetch aggregated data points for a selection.

        Args:
            selection: Current filter selection

        Returns:
            The decoded JSON array, unmodified

        Raises:
            DataFetchError: On network errors, non-success status or bad JSON
        """
        params = build_aggregate_params(selection)
        logger.debug(f"Fetching aggregate data with params: {params}")

        try:
            response = self._make_request(AGGREGATE_ENDPOINT, params=params)
            data = response.json()
        except requests.HTTPError as e:
            failed = e.response
            if failed is None:
                raise DataFetchError(f"API request failed: {str(e)}") from e
            raise DataFetchError(
                f"API request failed: {failed.status_code} {failed.reason} - {failed.text}"
            ) from e
        except (requests.RequestException, ValueError) as e:
            raise DataFetchError(str(e)) from e

        logger.info(f"Received {len(data) if isinstance(data, list) else 0} aggregate data points")
        return data
