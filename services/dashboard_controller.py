"""
Dashboard controller for the WattCanvas EIA Dashboard.

This module holds the state behind the dashboard page: the filter options
loaded from the backend, the user's current selection, the chart data and the
loading/error flags the views render. Every selection change goes through
update_selection(), which refetches the aggregate data.
"""

import logging
from datetime import date
from typing import Any, Callable, List, Optional

from config.constants import (
    DEFAULT_FREQUENCY_CODE,
    DEFAULT_LOOKBACK_YEARS,
    DEFAULT_METRIC_CODE,
    GROUP_BY_FUEL,
    GROUP_BY_PRIME_MOVER,
)
from models.data_models import FilterOption, FilterOptions, RawDataPoint, SelectionState
from services.auth_service import AuthError
from services.energy_data_service import DataFetchError, DimensionLoadError

# Set up logger
logger = logging.getLogger(__name__)

def years_before(day: date, years: int) -> date:
    """Same calendar day `years` earlier; Feb 29 falls back to Feb 28."""
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        return day.replace(year=day.year - years, day=28)

def pick_default(options: List[FilterOption], preferred: str) -> str:
    """
    Choose the default code for a single-select dimension.

    Args:
        options: Loaded options for the dimension
        preferred: Code to use when it is present

    Returns:
        The preferred code, else the first option's code, else ''
    """
    for option in options:
        if option.code == preferred:
            return option.code
    return options[0].code if options else ""

def derive_group_by(selection: SelectionState) -> str:
    """Series breakdown for the charts: selected fuels, then prime movers, else fuel."""
    if selection.fuel_codes:
        return GROUP_BY_FUEL
    if selection.prime_mover_codes:
        return GROUP_BY_PRIME_MOVER
    return GROUP_BY_FUEL

class DashboardController:
    """
    State holder for the filter-and-fetch flow of the dashboard.

    Attributes:
        options (FilterOptions): Option lists, empty until loaded
        selection (SelectionState): Current filter selection
        chart_data (list): Raw aggregate data points from the last fetch
        is_loading_filters (bool): True until the option lists are settled
        filter_error (str): Message when the option lists failed to load
        is_chart_loading (bool): True while an aggregate request is in flight
        chart_error (str): Message when the last aggregate request failed
        is_signing_out (bool): True while a sign-out call is running
    """

    def __init__(
        self,
        data_service,
        auth_service=None,
        today: Callable[[], date] = date.today,
        default_frequency: str = DEFAULT_FREQUENCY_CODE,
        default_metric: str = DEFAULT_METRIC_CODE,
        lookback_years: int = DEFAULT_LOOKBACK_YEARS
    ):
        """
        Initialize the controller.

        Args:
            data_service: EnergyDataService used for all backend requests
            auth_service: AuthService used for sign-out
            today: Clock returning the current date
            default_frequency: Frequency code preferred as default
            default_metric: Metric code preferred as default
            lookback_years: Length of the default date range
        """
        self.data_service = data_service
        self.auth_service = auth_service
        self.today = today
        self.default_frequency = default_frequency
        self.default_metric = default_metric
        self.lookback_years = lookback_years

        self.options = FilterOptions()
        self.selection = SelectionState(*self.default_date_range())

        self.is_loading_filters = True
        self.filter_error: Optional[str] = None

        self.chart_data: List[RawDataPoint] = []
        self.is_chart_loading = False
        self.chart_error: Optional[str] = None

        self.is_signing_out = False

        self._options_requested = False
        self._request_seq = 0

    # -- Defaults --------------------------------------------------------

    def default_date_range(self):
        end = self.today()
        return years_before(end, self.lookback_years), end

    def default_frequency_code(self) -> str:
        return pick_default(self.options.frequencies, self.default_frequency)

    def default_metric_code(self) -> str:
        return pick_default(self.options.metrics, self.default_metric)

    def default_selection(self) -> SelectionState:
        """Selection used on reset, computed against the loaded options."""
        start, end = self.default_date_range()
        return SelectionState(
            start_date=start,
            end_date=end,
            frequency_code=self.default_frequency_code(),
            metric_code=self.default_metric_code()
        )

    # -- Option retrieval ------------------------------------------------

    def initialize(self) -> None:
        """Load the filter options on first use; later calls do nothing."""
        if self._options_requested:
            return
        self._options_requested = True
        self.load_filter_options()

    def load_filter_options(self) -> bool:
        """
        Load all five option lists and apply the default selections.

        Nothing is committed unless every list loaded. On success the first
        aggregate fetch is triggered.

        Returns:
            bool: True if the options were loaded
        """
        self.is_loading_filters = True
        self.filter_error = None

        try:
            options = self.data_service.get_filter_options()
        except DimensionLoadError as e:
            logger.error(f"Error fetching filter options: {str(e)}")
            self.filter_error = f"Failed to load filter options: {str(e)}"
            self.is_loading_filters = False
            return False

        self.options = options
        self.is_loading_filters = False
        logger.info("Filter options loaded")

        defaults = {}
        if not self.selection.frequency_code:
            defaults['frequency_code'] = self.default_frequency_code()
        if not self.selection.metric_code:
            defaults['metric_code'] = self.default_metric_code()

        # Finishing the option load is itself a change, so always fetch
        self._apply_selection(self.selection.with_changes(**defaults), force=True)
        return True

    # -- Selection changes -----------------------------------------------

    def update_selection(self, **changes: Any) -> bool:
        """
        Change one or more selection fields.

        Args:
            **changes: SelectionState field values

        Returns:
            bool: True if the selection changed (and data was refetched)
        """
        return self._apply_selection(self.selection.with_changes(**changes))

    def reset_filters(self) -> None:
        """Restore default dates, frequency and metric, clear the multi-selects and refetch."""
        logger.info("Resetting filters to defaults")
        self._apply_selection(self.default_selection(), force=True)

    def _apply_selection(self, selection: SelectionState, force: bool = False) -> bool:
        if selection == self.selection and not force:
            return False
        self.selection = selection
        self.fetch_chart_data()
        return True

    # -- Derived values --------------------------------------------------

    @property
    def group_by(self) -> str:
        return derive_group_by(self.selection)

    @property
    def group_by_label(self) -> str:
        return self.group_by.replace('_', ' ').upper()

    @property
    def selected_metric_name(self) -> str:
        """Description of the selected metric, or its code if unknown."""
        code = self.selection.metric_code
        return self.options.description_for('metrics', code) or code

    # -- Aggregate data retrieval ----------------------------------------

    def fetch_chart_data(self) -> None:
        """
        Fetch aggregate data for the current selection.

        Responses that arrive after a newer request was issued are dropped.
        """
        selection = self.selection
        if not selection.metric_code or self.is_loading_filters:
            self.chart_data = []
            return

        self._request_seq += 1
        request_id = self._request_seq

        logger.info(f"Fetching chart data (request {request_id}) with filters: {selection}")
        self.is_chart_loading = True
        self.chart_error = None
        self.chart_data = []

        try:
            data = self.data_service.get_aggregate_data(selection)
        except DataFetchError as e:
            if self._is_stale(request_id):
                return
            logger.error(f"Error fetching chart data: {str(e)}")
            self.chart_error = f"Failed to load chart data: {str(e)}"
            self.chart_data = []
        else:
            if self._is_stale(request_id):
                return
            self.chart_data = data if isinstance(data, list) else []

        self.is_chart_loading = False

    def _is_stale(self, request_id: int) -> bool:
        if request_id != self._request_seq:
            logger.debug(f"Discarding response of request {request_id}; latest is {self._request_seq}")
            return True
        return False

    # -- Sign-out --------------------------------------------------------

    def sign_out(self) -> Optional[str]:
        """
        Sign the user out through the auth service.

        The page shell reacts to the changed auth state; this method does
        not navigate.

        Returns:
            An error message if sign-out failed, otherwise None
        """
        if self.auth_service is None:
            return "Sign out failed: authentication is not configured"

        self.is_signing_out = True
        try:
            self.auth_service.sign_out()
        except AuthError as e:
            logger.error(f"Error signing out: {str(e)}")
            return f"Sign out failed: {str(e)}"
        finally:
            self.is_signing_out = False

        logger.info("User signed out")
        return None
