"""
Data models for the WattCanvas EIA Dashboard.

This module provides data classes for filter options and the user's filter
selection. Aggregate data points are kept as the plain dictionaries returned
by the backend; their known keys are listed in config.constants.RAW_DATA_COLUMNS.
"""

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Tuple

# A single record from /data/aggregate, passed through untouched
RawDataPoint = Dict[str, Any]

@dataclass(frozen=True)
class FilterOption:
    """A selectable value of a filter dimension."""

    code: str
    description: str

@dataclass
class FilterOptions:
    """The five option lists shown in the filter panel."""

    frequencies: List[FilterOption] = field(default_factory=list)
    metrics: List[FilterOption] = field(default_factory=list)
    fuel_types: List[FilterOption] = field(default_factory=list)
    prime_movers: List[FilterOption] = field(default_factory=list)
    states: List[FilterOption] = field(default_factory=list)

    def for_dimension(self, dimension: str) -> List[FilterOption]:
        return getattr(self, dimension)

    def description_for(self, dimension: str, code: str) -> Optional[str]:
        """
        Look up the description of a code within one dimension.

        Args:
            dimension: Field name, e.g. 'metrics'
            code: Option code

        Returns:
            The description or None if the code is not listed
        """
        for option in self.for_dimension(dimension):
            if option.code == code:
                return option.description
        return None

    def is_empty(self) -> bool:
        return not any([self.frequencies, self.metrics, self.fuel_types, self.prime_movers, self.states])

@dataclass(frozen=True)
class SelectionState:
    """
    Current filter selection.

    Multi-select fields are tuples kept in selection order so two states
    compare by value.
    """

    start_date: date
    end_date: date
    frequency_code: str = ""
    metric_code: str = ""
    fuel_codes: Tuple[str, ...] = ()
    prime_mover_codes: Tuple[str, ...] = ()
    state_codes: Tuple[str, ...] = ()

    def with_changes(self, **changes: Any) -> "SelectionState":
        """Return a copy with the given fields replaced; code lists become tuples."""
        for name in ('fuel_codes', 'prime_mover_codes', 'state_codes'):
            if name in changes:
                changes[name] = _as_codes(changes[name])
        return replace(self, **changes)

def _as_codes(codes: Optional[Iterable[str]]) -> Tuple[str, ...]:
    if not codes:
        return ()
    return tuple(codes)
