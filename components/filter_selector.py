"""
Searchable multi-select filter component.

The selector shows a summary of the current selection on its trigger and a
popover with a search box, one row per option (sorted by description), a
removable badge per selected code and a "Clear All" button. Selection logic
lives in plain methods so it can be used without a running Streamlit app.
"""

import streamlit as st
import logging
from typing import Callable, List, Optional, Sequence

from rapidfuzz import fuzz

from config.constants import DEFAULT_FUZZY_THRESHOLD, DEFAULT_MAX_DISPLAY, DEFAULT_SELECTOR_PLACEHOLDER
from models.data_models import FilterOption

logger = logging.getLogger(__name__)

class FilterSelector:
    """
    Multi-select control over a list of FilterOption.

    Attributes:
        label (str): Dimension name, e.g. "Fuel Types"
        options (list): Available options
        selected (list): Selected codes in selection order
        on_change (callable): Called with the new list of codes
        placeholder (str): Trigger text when nothing is selected
        max_display (int): Number of descriptions shown on the trigger
        disabled (bool): Render the trigger disabled
    """

    def __init__(
        self,
        label: str,
        options: Sequence[FilterOption],
        selected: Sequence[str],
        on_change: Callable[[List[str]], None],
        placeholder: str = DEFAULT_SELECTOR_PLACEHOLDER,
        max_display: int = DEFAULT_MAX_DISPLAY,
        disabled: bool = False
    ):
        self.label = label
        self.options = list(options)
        self.selected = list(selected)
        self.on_change = on_change
        self.placeholder = placeholder
        self.max_display = max_display
        self.disabled = disabled

    # -- Selection logic -------------------------------------------------

    def toggle(self, code: str) -> List[str]:
        """
        Add the code if it is not selected, remove it otherwise.

        Args:
            code: Option code

        Returns:
            The new selection, also passed to on_change
        """
        if code in self.selected:
            new_selection = [value for value in self.selected if value != code]
        else:
            new_selection = self.selected + [code]
        return self._commit(new_selection)

    def remove(self, code: str) -> List[str]:
        """Badge dismiss: drop a selected code, leave the list open."""
        if code not in self.selected:
            return list(self.selected)
        return self.toggle(code)

    def clear_all(self) -> List[str]:
        return self._commit([])

    def _commit(self, new_selection: List[str]) -> List[str]:
        self.selected = new_selection
        self.on_change(list(new_selection))
        return new_selection

    # -- Display helpers -------------------------------------------------

    def description_for(self, code: str) -> str:
        for option in self.options:
            if option.code == code:
                return option.description
        return code

    def summary(self) -> str:
        """Trigger text: first descriptions plus an overflow count, or the placeholder."""
        if not self.selected:
            return self.placeholder

        labels = [self.description_for(code) for code in self.selected[:self.max_display]]
        text = ", ".join(labels)
        overflow = len(self.selected) - self.max_display
        if overflow > 0:
            text += f" +{overflow} more"
        return text

    def sorted_options(self) -> List[FilterOption]:
        return sorted(self.options, key=lambda option: option.description.lower())

    def search(self, query: Optional[str], threshold: float = DEFAULT_FUZZY_THRESHOLD) -> List[FilterOption]:
        """
        Filter the sorted options by a search string.

        Matches on a case-insensitive substring of the description or code,
        or a fuzzy match on the description.

        Args:
            query: Search text, empty returns every option
            threshold: Minimum rapidfuzz score for a fuzzy match

        Returns:
            Matching options sorted by description
        """
        options = self.sorted_options()
        query = (query or "").strip().lower()
        if not query:
            return options

        matches = []
        for option in options:
            description = option.description.lower()
            if query in description or query in option.code.lower():
                matches.append(option)
            elif fuzz.partial_ratio(query, description) >= threshold:
                matches.append(option)
        return matches

    @property
    def empty_message(self) -> str:
        return f"No {self.label.lower()} found."

    # -- Rendering -------------------------------------------------------

    def render(self, key: str) -> None:
        """
        Render the trigger and its popover.

        Args:
            key: Unique widget key prefix
        """
        with st.popover(self.summary(), disabled=self.disabled, use_container_width=True):
            query = st.text_input(
                f"Search {self.label.lower()}",
                placeholder=f"Search {self.label.lower()}...",
                label_visibility="collapsed",
                key=f"{key}_search"
            )

            matches = self.search(query)
            if not matches:
                st.caption(self.empty_message)
            else:
                with st.container(height=240):
                    for option in matches:
                        mark = "☑" if option.code in self.selected else "☐"
                        st.button(
                            f"{mark} {option.description} · {option.code}",
                            key=f"{key}_option_{option.code}",
                            on_click=self.toggle,
                            args=(option.code,),
                            use_container_width=True
                        )

            if self.selected:
                st.divider()
                badge_columns = st.columns(min(len(self.selected), 3))
                for i, code in enumerate(self.selected):
                    with badge_columns[i % len(badge_columns)]:
                        st.button(
                            f"{self.description_for(code)} ×",
                            key=f"{key}_remove_{code}",
                            help="Remove",
                            on_click=self.remove,
                            args=(code,)
                        )
                st.button(
                    "Clear All",
                    key=f"{key}_clear",
                    on_click=self.clear_all,
                    use_container_width=True
                )

def render_filter_selector(
    label: str,
    options: Sequence[FilterOption],
    selected: Sequence[str],
    on_change: Callable[[List[str]], None],
    key: str,
    placeholder: str = DEFAULT_SELECTOR_PLACEHOLDER,
    max_display: int = DEFAULT_MAX_DISPLAY,
    disabled: bool = False
) -> FilterSelector:
    """Build a FilterSelector and render it under the given key."""
    selector = FilterSelector(
        label=label,
        options=options,
        selected=selected,
        on_change=on_change,
        placeholder=placeholder,
        max_display=max_display,
        disabled=disabled
    )
    selector.render(key)
    return selector
